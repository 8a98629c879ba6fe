import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from blog_api import dependencies as deps
from blog_api.errors import ConflictError, NotFoundError, ValidationError
from blog_api.models.post import PostStatus
from blog_api.schemas.post import PostCreate, PostPage, PostRead, PostUpdate
from blog_api.services.posts_service import PostsService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin/posts")

CONFLICT_DETAIL = "A post with this slug already exists"


@router.post("", response_model=PostRead, status_code=201)
def create_post(
    payload: PostCreate,
    service: PostsService = Depends(deps.get_posts_service),
):
    try:
        return service.create(payload)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.to_detail())
    except ConflictError:
        raise HTTPException(status_code=409, detail=CONFLICT_DETAIL)
    except Exception as e:
        logger.error(f"Error creating post: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.get("", response_model=PostPage)
def list_posts(
    status: Optional[PostStatus] = Query(None),
    page: int = Query(1, ge=1),
    limit: int = Query(10),
    order_by: str = Query("publishedAt", alias="orderBy"),
    order: str = Query("desc"),
    service: PostsService = Depends(deps.get_posts_service),
):
    """All posts, drafts included unless a status is given."""
    try:
        return service.list_posts(
            status=status, page=page, limit=limit, order_by=order_by, order=order
        )
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.to_detail())
    except Exception as e:
        logger.error(f"Error fetching posts: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.get("/{post_id}", response_model=PostRead)
def get_post(
    post_id: str,
    service: PostsService = Depends(deps.get_posts_service),
):
    try:
        post = service.get_by_id(post_id)
    except Exception as e:
        logger.error(f"Error fetching post {post_id}: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")
    if not post:
        raise HTTPException(status_code=404, detail="Post not found")
    return post


@router.put("/{post_id}", response_model=PostRead)
def update_post(
    post_id: str,
    payload: PostUpdate,
    service: PostsService = Depends(deps.get_posts_service),
):
    try:
        return service.update(post_id, payload)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.to_detail())
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Post not found")
    except ConflictError:
        raise HTTPException(status_code=409, detail=CONFLICT_DETAIL)
    except Exception as e:
        logger.error(f"Error updating post {post_id}: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.delete("/{post_id}")
def delete_post(
    post_id: str,
    service: PostsService = Depends(deps.get_posts_service),
):
    try:
        service.delete(post_id)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Post not found")
    except Exception as e:
        logger.error(f"Error deleting post {post_id}: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")
    return {"success": True, "message": "Post deleted successfully"}
