import datetime
import logging
import uuid
from typing import Callable, List, Optional, Tuple, Union

from blog_api.errors import ConflictError, NotFoundError, ValidationError
from blog_api.models.post import Post, PostStatus
from blog_api.repos.posts_repo import ORDER_COLUMNS, PostsRepo
from blog_api.schemas.post import PostCreate, PostPage, PostRead, PostUpdate
from blog_api.settings import settings
from blog_api.utils import (
    MAX_PAGE_SIZE,
    clamp_limit,
    decode_tags,
    encode_tags,
    ensure_utc,
    is_valid_slug,
    render_markdown,
    slugify,
    utc_now,
)

logger = logging.getLogger(__name__)

# request field -> Post column, for the plain copy-over fields of an update
_UPDATE_COLUMNS = {
    "title": "title",
    "slug": "slug",
    "summary": "summary",
    "contentMarkdown": "content_markdown",
    "contentHtml": "content_html",
    "imageUrl": "image_url",
    "sourceUrl": "source_url",
    "author": "author",
    "publishedAt": "published_at",
    "status": "status",
}
# explicit nulls for these are ignored rather than written
_NON_NULLABLE = {"title", "slug", "author", "publishedAt", "status"}


class PostsService:
    def __init__(
        self,
        repo: PostsRepo,
        clock: Callable[[], datetime.datetime] = utc_now,
        render: Callable[[str], str] = render_markdown,
        default_author: Optional[str] = None,
    ):
        self.repo = repo
        self.clock = clock
        self.render = render
        self.default_author = default_author or settings.SITE_NAME

    def create(self, data: PostCreate) -> PostRead:
        title = _require_title(data.title)
        slug = _resolve_slug(data.slug, title)
        content_markdown, content_html = self._content(
            data.contentMarkdown, data.contentHtml
        )
        now = self.clock()

        post = Post(
            id=str(uuid.uuid4()),
            title=title,
            slug=slug,
            summary=data.summary,
            content_markdown=content_markdown,
            content_html=content_html,
            image_url=data.imageUrl,
            tags=encode_tags(data.tags),
            source_url=data.sourceUrl,
            author=data.author or self.default_author,
            published_at=ensure_utc(data.publishedAt) or now,
            status=data.status or PostStatus.PUBLISHED,
            created_at=now,
            updated_at=now,
        )
        try:
            post = self.repo.add(post)
        except ConflictError:
            logger.warning(f"Create rejected, slug already taken: {slug}")
            raise

        logger.info(f"Created post {post.id} ({post.slug})")
        return to_post_read(post)

    def update(self, post_id: str, data: PostUpdate) -> PostRead:
        post = self.repo.get(post_id)
        if post is None:
            raise NotFoundError(post_id)

        changes = data.model_dump(exclude_unset=True)
        if "title" in changes and changes["title"] is not None:
            changes["title"] = _require_title(changes["title"])
        if changes.get("slug"):
            _check_slug(changes["slug"])

        # validate the resulting content before touching the row
        markdown_after = (
            changes["contentMarkdown"] or ""
            if "contentMarkdown" in changes
            else post.content_markdown
        )
        html_after = (
            changes["contentHtml"] if "contentHtml" in changes else post.content_html
        )
        if not markdown_after and not html_after:
            raise ValidationError(
                "content", "contentMarkdown or contentHtml is required"
            )

        for field, value in changes.items():
            if field == "tags":
                post.tags = encode_tags(value)
                continue
            if field in _NON_NULLABLE and not value:
                continue
            if field == "contentMarkdown":
                value = value or ""
            elif field == "publishedAt":
                value = ensure_utc(value)
            setattr(post, _UPDATE_COLUMNS[field], value)

        if changes.get("contentMarkdown") and not changes.get("contentHtml"):
            post.content_html = self.render(changes["contentMarkdown"])

        post.updated_at = self.clock()
        try:
            post = self.repo.save(post)
        except ConflictError:
            logger.warning(f"Update of {post_id} rejected, slug already taken")
            raise

        logger.info(f"Updated post {post.id} ({', '.join(sorted(changes))})")
        return to_post_read(post)

    def delete(self, post_id: str) -> None:
        post = self.repo.get(post_id)
        if post is None:
            raise NotFoundError(post_id)
        self.repo.delete(post)
        logger.info(f"Deleted post {post_id}")

    def get_by_id(self, post_id: str) -> Optional[PostRead]:
        post = self.repo.get(post_id)
        return to_post_read(post) if post else None

    def get_by_slug(self, slug: str) -> Optional[PostRead]:
        post = self.repo.get_by_slug(slug)
        return to_post_read(post) if post else None

    def list_posts(
        self,
        status: Optional[Union[PostStatus, str]] = None,
        page: int = 1,
        limit: Optional[int] = 10,
        order_by: str = "publishedAt",
        order: str = "desc",
    ) -> PostPage:
        if page < 1:
            raise ValidationError("page", "must be 1 or greater")
        if order_by not in ORDER_COLUMNS:
            raise ValidationError(
                "orderBy", f"must be one of {', '.join(ORDER_COLUMNS)}"
            )
        if order not in ("asc", "desc"):
            raise ValidationError("order", "must be 'asc' or 'desc'")
        status = _coerce_status(status)

        limit = clamp_limit(limit)
        offset = (page - 1) * limit

        rows = self.repo.list(
            status, offset, limit, order_by=order_by, descending=order == "desc"
        )
        total = self.repo.count(status)
        return PostPage(
            items=[to_post_read(row) for row in rows],
            page=page,
            total=total,
            hasMore=offset + limit < total,
        )

    def list_for_feed(self, limit: Optional[int] = MAX_PAGE_SIZE) -> List[PostRead]:
        """Most recently published posts for the RSS feed."""
        rows = self.repo.list(
            PostStatus.PUBLISHED,
            0,
            clamp_limit(limit, default=MAX_PAGE_SIZE),
            order_by="publishedAt",
            descending=True,
        )
        return [to_post_read(row) for row in rows]

    def upsert_by_slug(self, data: PostCreate) -> PostRead:
        """
        Create the post, or fully replace the mutable fields of the post that
        already owns the slug. Omitted optional fields are cleared, not merged.
        """
        title = _require_title(data.title)
        slug = _resolve_slug(data.slug, title)
        content_markdown, content_html = self._content(
            data.contentMarkdown, data.contentHtml
        )
        now = self.clock()

        post = self.repo.upsert_by_slug(
            {
                "id": str(uuid.uuid4()),
                "slug": slug,
                "title": title,
                "summary": data.summary,
                "content_markdown": content_markdown,
                "content_html": content_html,
                "image_url": data.imageUrl,
                "tags": encode_tags(data.tags),
                "source_url": data.sourceUrl,
                "author": data.author or self.default_author,
                "published_at": ensure_utc(data.publishedAt) or now,
                "status": data.status or PostStatus.PUBLISHED,
                "created_at": now,
                "updated_at": now,
            }
        )
        logger.info(f"Upserted post {post.id} ({slug})")
        return to_post_read(post)

    def _content(
        self, content_markdown: Optional[str], content_html: Optional[str]
    ) -> Tuple[str, Optional[str]]:
        if not content_markdown and not content_html:
            raise ValidationError(
                "content", "contentMarkdown or contentHtml is required"
            )
        if content_markdown and not content_html:
            content_html = self.render(content_markdown)
        return content_markdown or "", content_html


def to_post_read(post: Post) -> PostRead:
    return PostRead(
        id=post.id,
        title=post.title,
        slug=post.slug,
        summary=post.summary,
        contentMarkdown=post.content_markdown or "",
        contentHtml=post.content_html,
        imageUrl=post.image_url,
        tags=decode_tags(post.tags),
        sourceUrl=post.source_url,
        author=post.author,
        publishedAt=ensure_utc(post.published_at),
        status=post.status,
        createdAt=ensure_utc(post.created_at),
        updatedAt=ensure_utc(post.updated_at),
    )


def _require_title(title: Optional[str]) -> str:
    if not title or not title.strip():
        raise ValidationError("title", "Title is required")
    return title


def _resolve_slug(slug: Optional[str], title: str) -> str:
    if slug:
        return _check_slug(slug)
    slug = slugify(title)
    if not slug:
        raise ValidationError("slug", "could not derive a slug from the title")
    return slug


def _check_slug(slug: str) -> str:
    if not is_valid_slug(slug):
        raise ValidationError(
            "slug", "must be lowercase letters, digits and single hyphens"
        )
    return slug


def _coerce_status(status) -> Optional[PostStatus]:
    if status is None or isinstance(status, PostStatus):
        return status
    try:
        return PostStatus(status)
    except ValueError:
        raise ValidationError("status", "must be DRAFT or PUBLISHED")
