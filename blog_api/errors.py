from typing import Dict, List


class PostsError(Exception):
    """Base class for errors raised by the posts store."""


class ValidationError(PostsError):
    def __init__(self, field: str, message: str):
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message

    def to_detail(self) -> List[Dict[str, str]]:
        return [{"field": self.field, "message": self.message}]


class ConflictError(PostsError):
    def __init__(self, slug: str):
        super().__init__(f"A post with slug '{slug}' already exists")
        self.slug = slug


class NotFoundError(PostsError):
    def __init__(self, post_id: str):
        super().__init__(f"Post {post_id} not found")
        self.post_id = post_id
