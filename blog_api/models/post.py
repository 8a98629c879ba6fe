import enum
import uuid

from sqlalchemy import Column, DateTime, Enum, String, Text

from blog_api.db.base import Base


class PostStatus(str, enum.Enum):
    DRAFT = "DRAFT"
    PUBLISHED = "PUBLISHED"


class Post(Base):
    __tablename__ = "posts"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    title = Column(Text, nullable=False)
    slug = Column(String(512), unique=True, index=True, nullable=False)
    summary = Column(Text)
    content_markdown = Column(Text, nullable=False, default="")
    content_html = Column(Text)
    image_url = Column(Text)
    tags = Column(Text, nullable=False, default="[]")  # JSON array
    source_url = Column(Text)
    author = Column(String(255), nullable=False)
    published_at = Column(DateTime(timezone=True), nullable=False, index=True)
    status = Column(
        Enum(PostStatus, name="post_status"),
        nullable=False,
        default=PostStatus.PUBLISHED,
        index=True,
    )
    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False)
