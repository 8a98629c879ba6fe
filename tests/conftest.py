import datetime

import pytest
from fastapi import FastAPI
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from blog_api import dependencies as deps
from blog_api.db.base import Base, make_engine
from blog_api.models.post import Post  # noqa: F401  (registers the table)
from blog_api.repos.posts_repo import PostsRepo
from blog_api.schemas.post import PostCreate
from blog_api.security import get_settings
from blog_api.services.posts_service import PostsService

FIXED_NOW = datetime.datetime(2024, 6, 1, 12, 0, tzinfo=datetime.timezone.utc)


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, start: datetime.datetime = FIXED_NOW):
        self.now = start

    def __call__(self) -> datetime.datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += datetime.timedelta(**kwargs)


@pytest.fixture
def engine():
    # one shared in-memory connection, usable from TestClient's worker threads
    engine = make_engine("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    Session = sessionmaker(bind=engine, autoflush=False, autocommit=False)
    db = Session()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def repo(session):
    return PostsRepo(session)


@pytest.fixture
def service(repo, clock):
    return PostsService(repo, clock=clock, default_author="Test Site")


def make_post(service: PostsService, title: str, **fields):
    fields.setdefault("contentMarkdown", f"Body of {title}")
    return service.create(PostCreate(title=title, **fields))


def seed_posts(service: PostsService, published: int, drafts: int = 0):
    base = FIXED_NOW - datetime.timedelta(days=published + drafts)
    for i in range(published):
        make_post(
            service,
            f"Published {i:02d}",
            publishedAt=base + datetime.timedelta(hours=i),
        )
    for i in range(drafts):
        make_post(
            service,
            f"Draft {i:02d}",
            status="DRAFT",
            publishedAt=base + datetime.timedelta(hours=i),
        )


def make_app(*routers, service=None, settings=None, clock=None) -> FastAPI:
    app = FastAPI()
    if service is not None:
        app.dependency_overrides[deps.get_posts_service] = lambda: service
    if settings is not None:
        app.dependency_overrides[get_settings] = lambda: settings
    if clock is not None:
        app.dependency_overrides[deps.get_clock] = lambda: clock
    for router in routers:
        app.include_router(router)
    return app


class FakePostsService:
    """
    Minimal posts service stand-in for router error-path tests.
    """

    def __init__(self, error: Exception = None, feed=None):
        self.error = error
        self.feed = feed or []

    def _maybe_raise(self):
        if self.error is not None:
            raise self.error

    def list_posts(self, **kwargs):
        self._maybe_raise()

    def get_by_slug(self, slug):
        self._maybe_raise()

    def get_by_id(self, post_id):
        self._maybe_raise()

    def create(self, data):
        self._maybe_raise()

    def update(self, post_id, data):
        self._maybe_raise()

    def delete(self, post_id):
        self._maybe_raise()

    def upsert_by_slug(self, data):
        self._maybe_raise()

    def list_for_feed(self, limit=None):
        self._maybe_raise()
        return self.feed
