import datetime
import logging
import xml.etree.ElementTree as ET
from email.utils import format_datetime
from typing import Iterable

from blog_api.schemas.post import PostRead
from blog_api.utils import ensure_utc

logger = logging.getLogger(__name__)

ATOM_NS = "http://www.w3.org/2005/Atom"
CONTENT_NS = "http://purl.org/rss/1.0/modules/content/"
DC_NS = "http://purl.org/dc/elements/1.1/"

ET.register_namespace("atom", ATOM_NS)
ET.register_namespace("content", CONTENT_NS)
ET.register_namespace("dc", DC_NS)

FEED_TTL_MINUTES = 60


def _rfc822(value: datetime.datetime) -> str:
    return format_datetime(ensure_utc(value), usegmt=True)


def _text(parent: ET.Element, tag: str, text: str, **attrib) -> ET.Element:
    el = ET.SubElement(parent, tag, attrib)
    el.text = text
    return el


def build_rss_feed(
    posts: Iterable[PostRead],
    *,
    site_base_url: str,
    title: str,
    description: str,
    author: str,
    now: datetime.datetime,
) -> bytes:
    """Render published posts as an RSS 2.0 document (UTF-8 bytes)."""
    base = site_base_url.rstrip("/")

    rss = ET.Element("rss", {"version": "2.0"})
    channel = ET.SubElement(rss, "channel")
    _text(channel, "title", title)
    _text(channel, "description", description)
    _text(channel, "link", f"{base}/blog")
    ET.SubElement(
        channel,
        f"{{{ATOM_NS}}}link",
        {"href": f"{base}/api/rss", "rel": "self", "type": "application/rss+xml"},
    )
    _text(channel, "language", "en")
    _text(channel, "managingEditor", author)
    _text(channel, "webMaster", author)
    _text(channel, "copyright", f"© {now.year} {author}")
    _text(channel, "lastBuildDate", _rfc822(now))
    _text(channel, "ttl", str(FEED_TTL_MINUTES))

    count = 0
    for post in posts:
        item = ET.SubElement(channel, "item")
        _text(item, "title", post.title)
        _text(item, "description", post.summary or post.contentHtml or "")
        _text(item, "link", f"{base}/blog/{post.slug}")
        _text(item, "guid", post.id, isPermaLink="false")
        _text(item, "pubDate", _rfc822(post.publishedAt))
        _text(item, f"{{{DC_NS}}}creator", post.author)
        for tag in post.tags:
            _text(item, "category", tag)
        _text(item, f"{{{CONTENT_NS}}}encoded", post.contentHtml or "")
        count += 1

    logger.debug(f"Built RSS feed with {count} items")
    ET.indent(rss)
    return ET.tostring(rss, encoding="utf-8", xml_declaration=True)
