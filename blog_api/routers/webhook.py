import logging

from fastapi import APIRouter, Depends, HTTPException

from blog_api import dependencies as deps
from blog_api.errors import ValidationError
from blog_api.schemas.post import WebhookPost, WebhookResult
from blog_api.services.posts_service import PostsService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/webhook")


@router.post("/n8n", response_model=WebhookResult)
def n8n_webhook(
    payload: WebhookPost,
    service: PostsService = Depends(deps.get_posts_service),
):
    """
    Upsert a post pushed by the n8n workflow. Re-posting the same slug
    replaces the stored post instead of creating a duplicate.
    """
    try:
        post = service.upsert_by_slug(payload.to_post_create())
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.to_detail())
    except Exception as e:
        logger.error(f"Error processing n8n webhook: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal server error")
    return WebhookResult(id=post.id, slug=post.slug)
