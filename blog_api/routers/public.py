import logging
import time

from fastapi import APIRouter, Depends, HTTPException, Query

from blog_api import dependencies as deps
from blog_api.errors import ValidationError
from blog_api.models.post import PostStatus
from blog_api.schemas.post import PostPage, PostRead
from blog_api.services.posts_service import PostsService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")
STARTED_AT = time.monotonic()


@router.get("/posts", response_model=PostPage)
def list_posts(
    page: int = Query(1, ge=1),
    limit: int = Query(10),
    order_by: str = Query("publishedAt", alias="orderBy"),
    order: str = Query("desc"),
    service: PostsService = Depends(deps.get_posts_service),
):
    """Published posts, newest first by default."""
    try:
        return service.list_posts(
            status=PostStatus.PUBLISHED,
            page=page,
            limit=limit,
            order_by=order_by,
            order=order,
        )
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.to_detail())
    except Exception as e:
        logger.error(f"Unexpected error listing posts: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve posts")


@router.get("/posts/{slug}", response_model=PostRead)
def get_post(
    slug: str,
    service: PostsService = Depends(deps.get_posts_service),
):
    """Get a single published post by slug."""
    try:
        post = service.get_by_slug(slug)
        # drafts are invisible to the public
        if not post or post.status != PostStatus.PUBLISHED:
            raise HTTPException(status_code=404, detail="Post not found")
        return post
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Unexpected error retrieving post {slug}: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve post")


@router.get("/health")
def health(clock=Depends(deps.get_clock)):
    return {
        "ok": True,
        "timestamp": clock().isoformat(),
        "uptime": round(time.monotonic() - STARTED_AT, 3),
    }
