import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import Response

from blog_api import dependencies as deps
from blog_api.security import get_settings
from blog_api.services.posts_service import PostsService
from blog_api.services.rss_service import build_rss_feed
from blog_api.settings import Settings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")


@router.get("/rss")
def rss_feed(
    limit: Optional[int] = Query(None),
    service: PostsService = Depends(deps.get_posts_service),
    clock=Depends(deps.get_clock),
    current_settings: Settings = Depends(get_settings),
):
    """RSS 2.0 feed of the latest published posts (at most 50)."""
    try:
        posts = service.list_for_feed(limit)
        body = build_rss_feed(
            posts,
            site_base_url=current_settings.SITE_BASE_URL,
            title=current_settings.RSS_TITLE,
            description=current_settings.RSS_DESCRIPTION,
            author=current_settings.SITE_NAME,
            now=clock(),
        )
    except Exception as e:
        logger.error(f"Error generating RSS feed: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")
    return Response(content=body, media_type="application/rss+xml")
