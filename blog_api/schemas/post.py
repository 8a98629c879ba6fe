import datetime
from typing import List, Optional

from pydantic import AnyHttpUrl, BaseModel, Field, TypeAdapter, field_validator

from blog_api.models.post import PostStatus

_http_url = TypeAdapter(AnyHttpUrl)


def _optional_http_url(value: Optional[str]) -> Optional[str]:
    """Accept an http(s) URL or an empty string (treated as unset)."""
    if value is None or value == "":
        return None
    try:
        _http_url.validate_python(value)
    except ValueError:
        raise ValueError("must be a valid http(s) URL")
    # keep the caller's exact spelling, AnyHttpUrl would normalize it
    return value


class PostCreate(BaseModel):
    title: str = Field(..., min_length=1)
    slug: Optional[str] = None
    summary: Optional[str] = None
    contentMarkdown: Optional[str] = None
    contentHtml: Optional[str] = None
    imageUrl: Optional[str] = None
    tags: Optional[List[str]] = None
    sourceUrl: Optional[str] = None
    author: Optional[str] = None
    publishedAt: Optional[datetime.datetime] = None
    status: Optional[PostStatus] = None

    @field_validator("imageUrl", "sourceUrl")
    @classmethod
    def _check_urls(cls, value):
        return _optional_http_url(value)


class PostUpdate(PostCreate):
    title: Optional[str] = Field(None, min_length=1)


class WebhookPost(BaseModel):
    """Payload posted by the n8n automation workflow."""

    title: str = Field(..., min_length=1)
    slug: Optional[str] = None
    summary: Optional[str] = None
    contentHtml: Optional[str] = None
    contentMarkdown: Optional[str] = None
    imageUrl: Optional[str] = None
    tags: Optional[List[str]] = None
    sourceUrl: Optional[str] = None
    publishedAt: Optional[datetime.datetime] = None

    @field_validator("imageUrl", "sourceUrl")
    @classmethod
    def _check_urls(cls, value):
        return _optional_http_url(value)

    def to_post_create(self) -> PostCreate:
        # posts pushed by n8n are always published
        return PostCreate(**self.model_dump(), status=PostStatus.PUBLISHED)


class PostRead(BaseModel):
    id: str
    title: str
    slug: str
    summary: Optional[str] = None
    contentMarkdown: str = ""
    contentHtml: Optional[str] = None
    imageUrl: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    sourceUrl: Optional[str] = None
    author: str
    publishedAt: datetime.datetime
    status: PostStatus
    createdAt: datetime.datetime
    updatedAt: datetime.datetime


class PostPage(BaseModel):
    items: List[PostRead]
    page: int
    total: int
    hasMore: bool


class WebhookResult(BaseModel):
    ok: bool = True
    id: str
    slug: str
