from blog_api.dependencies import get_clock, get_posts_repo, get_posts_service
from blog_api.repos.posts_repo import PostsRepo
from blog_api.services.posts_service import PostsService
from blog_api.settings import Settings
from blog_api.utils import utc_now


def test_get_posts_repo_constructs_repo():
    class FakeDB:
        pass

    db = FakeDB()
    repo = get_posts_repo(db=db)

    assert isinstance(repo, PostsRepo)
    assert repo.db is db


def test_get_clock_defaults_to_utc_now():
    assert get_clock() is utc_now


def test_get_posts_service_constructs_service():
    class FakeRepo:
        pass

    repo = FakeRepo()

    def clock():
        return None

    svc = get_posts_service(
        repo=repo, clock=clock, current_settings=Settings(SITE_NAME="My Blog")
    )

    assert isinstance(svc, PostsService)
    assert svc.repo is repo
    assert svc.clock is clock
    assert svc.default_author == "My Blog"
