import datetime
import json
import re
from typing import Iterable, List, Optional

import markdown

MAX_PAGE_SIZE = 50

_INVALID_SLUG_CHARS = re.compile(r"[^a-z0-9\s-]")
_WHITESPACE = re.compile(r"\s+")
_HYPHENS = re.compile(r"-+")
_SLUG_SHAPE = re.compile(r"^[a-z0-9]+(-[a-z0-9]+)*$")


def slugify(title: str) -> str:
    """Derive a URL-safe slug from a post title."""
    slug = _INVALID_SLUG_CHARS.sub("", title.lower())
    slug = _WHITESPACE.sub("-", slug)
    slug = _HYPHENS.sub("-", slug)
    return slug.strip("-")


def is_valid_slug(slug: str) -> bool:
    return bool(_SLUG_SHAPE.fullmatch(slug))


def encode_tags(tags: Optional[Iterable[str]]) -> str:
    return json.dumps(list(tags or []))


def decode_tags(raw: Optional[str]) -> List[str]:
    """Decode a stored tags column; anything malformed decodes to an empty list."""
    if not raw:
        return []
    try:
        value = json.loads(raw)
    except (TypeError, ValueError):
        return []
    if not isinstance(value, list) or not all(isinstance(t, str) for t in value):
        return []
    return value


def render_markdown(text: str) -> str:
    return markdown.markdown(text)


def utc_now() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


def ensure_utc(value: Optional[datetime.datetime]) -> Optional[datetime.datetime]:
    # SQLite hands back naive datetimes; everything we store is UTC
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=datetime.timezone.utc)
    return value.astimezone(datetime.timezone.utc)


def clamp_limit(
    limit: Optional[int], default: int = 10, maximum: int = MAX_PAGE_SIZE
) -> int:
    if limit is None:
        limit = default
    return max(1, min(limit, maximum))
