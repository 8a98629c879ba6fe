import logging
from pathlib import Path

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import declarative_base, sessionmaker

from blog_api.settings import settings

logger = logging.getLogger(__name__)


def make_engine(url: str, **kwargs) -> Engine:
    if make_url(url).get_backend_name() == "sqlite":
        # request handlers run in a threadpool
        kwargs.setdefault("connect_args", {"check_same_thread": False})
    return create_engine(url, future=True, echo=False, **kwargs)


engine = make_engine(settings.database_url)
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)
Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(bind: Engine = engine) -> None:
    """Create the data directory (SQLite) and any missing tables."""
    url = bind.url
    if url.get_backend_name() == "sqlite" and url.database not in (None, "", ":memory:"):
        Path(url.database).parent.mkdir(parents=True, exist_ok=True)

    # register models on Base.metadata
    from blog_api.models import post  # noqa: F401

    Base.metadata.create_all(bind=bind)
    logger.info(f"Database ready: {url.render_as_string(hide_password=True)}")
