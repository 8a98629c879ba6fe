from typing import Any, Dict, List, Optional

from sqlalchemy import func
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from blog_api.errors import ConflictError
from blog_api.models.post import Post, PostStatus

ORDER_COLUMNS = {
    "publishedAt": Post.published_at,
    "updatedAt": Post.updated_at,
    "title": Post.title,
}

_DIALECT_INSERTS = {
    "postgresql": pg_insert,
    "sqlite": sqlite_insert,
}

# columns an upsert must never overwrite
_IMMUTABLE_ON_UPSERT = {"id", "slug", "created_at"}


class PostsRepo:
    """Row-level persistence for posts on top of a SQLAlchemy session."""

    def __init__(self, db: Session):
        self.db = db

    def get(self, post_id: str) -> Optional[Post]:
        return self.db.get(Post, post_id)

    def get_by_slug(self, slug: str) -> Optional[Post]:
        return self.db.query(Post).filter(Post.slug == slug).first()

    def add(self, post: Post) -> Post:
        self.db.add(post)
        self._commit(post.slug)
        self.db.refresh(post)
        return post

    def save(self, post: Post) -> Post:
        self._commit(post.slug)
        self.db.refresh(post)
        return post

    def delete(self, post: Post) -> None:
        self.db.delete(post)
        self.db.commit()

    def list(
        self,
        status: Optional[PostStatus],
        offset: int,
        limit: int,
        order_by: str = "publishedAt",
        descending: bool = True,
    ) -> List[Post]:
        column = ORDER_COLUMNS[order_by]
        ordering = (
            [column.desc(), Post.id.desc()] if descending else [column.asc(), Post.id.asc()]
        )
        query = self.db.query(Post)
        if status is not None:
            query = query.filter(Post.status == status)
        return query.order_by(*ordering).offset(offset).limit(limit).all()

    def count(self, status: Optional[PostStatus]) -> int:
        query = self.db.query(func.count(Post.id))
        if status is not None:
            query = query.filter(Post.status == status)
        return query.scalar() or 0

    def upsert_by_slug(self, values: Dict[str, Any]) -> Post:
        """
        Insert a row or overwrite the existing row with the same slug in a
        single statement, leaving the unique index to arbitrate races.
        """
        insert = self._dialect_insert()
        stmt = insert(Post).values(**values)
        stmt = stmt.on_conflict_do_update(
            index_elements=[Post.slug],
            set_={
                key: stmt.excluded[key]
                for key in values
                if key not in _IMMUTABLE_ON_UPSERT
            },
        )
        # the row comes back from the statement itself, not a second lookup
        stmt = stmt.returning(*Post.__table__.columns)
        row = self.db.execute(stmt).mappings().one()
        self.db.commit()
        return Post(**row)

    def _dialect_insert(self):
        dialect = self.db.get_bind().dialect.name
        try:
            return _DIALECT_INSERTS[dialect]
        except KeyError:
            raise NotImplementedError(f"Upsert is not supported on {dialect}")

    def _commit(self, slug: str) -> None:
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise ConflictError(slug)
