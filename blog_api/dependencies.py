from fastapi import Depends

from blog_api.db.base import get_db
from blog_api.repos.posts_repo import PostsRepo
from blog_api.security import get_settings
from blog_api.services.posts_service import PostsService
from blog_api.utils import utc_now


def get_clock():
    return utc_now


def get_posts_repo(db=Depends(get_db)):
    return PostsRepo(db)


def get_posts_service(
    repo=Depends(get_posts_repo),
    clock=Depends(get_clock),
    current_settings=Depends(get_settings),
):
    return PostsService(
        repo=repo, clock=clock, default_author=current_settings.SITE_NAME
    )
