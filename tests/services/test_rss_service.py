import datetime
import xml.etree.ElementTree as ET

from blog_api.models.post import PostStatus
from blog_api.schemas.post import PostRead
from blog_api.services.rss_service import CONTENT_NS, DC_NS, build_rss_feed
from tests.conftest import FIXED_NOW


def make_read(**overrides) -> PostRead:
    values = dict(
        id="post-1",
        title="Hello",
        slug="hello",
        summary="A summary",
        contentMarkdown="# Hello",
        contentHtml="<h1>Hello</h1>",
        tags=["ai", "teaching"],
        author="Jane",
        publishedAt=FIXED_NOW,
        status=PostStatus.PUBLISHED,
        createdAt=FIXED_NOW,
        updatedAt=FIXED_NOW,
    )
    values.update(overrides)
    return PostRead(**values)


def render(posts):
    body = build_rss_feed(
        posts,
        site_base_url="https://blog.example.com/",
        title="Example Blog",
        description="Things we write",
        author="Example",
        now=FIXED_NOW,
    )
    return body, ET.fromstring(body)


def test_feed_channel_metadata():
    body, root = render([])

    assert body.startswith(b"<?xml")
    assert root.tag == "rss"
    assert root.get("version") == "2.0"
    channel = root.find("channel")
    assert channel.findtext("title") == "Example Blog"
    assert channel.findtext("description") == "Things we write"
    assert channel.findtext("link") == "https://blog.example.com/blog"
    assert channel.findtext("language") == "en"
    assert channel.findtext("copyright") == "© 2024 Example"
    assert channel.findtext("lastBuildDate") == "Sat, 01 Jun 2024 12:00:00 GMT"
    assert channel.findtext("ttl") == "60"
    assert channel.findall("item") == []


def test_feed_items():
    _, root = render([make_read(), make_read(id="post-2", slug="second", summary=None)])

    items = root.find("channel").findall("item")
    assert len(items) == 2

    first = items[0]
    assert first.findtext("title") == "Hello"
    assert first.findtext("description") == "A summary"
    assert first.findtext("link") == "https://blog.example.com/blog/hello"
    assert first.find("guid").text == "post-1"
    assert first.find("guid").get("isPermaLink") == "false"
    assert first.findtext("pubDate") == "Sat, 01 Jun 2024 12:00:00 GMT"
    assert first.findtext(f"{{{DC_NS}}}creator") == "Jane"
    assert [c.text for c in first.findall("category")] == ["ai", "teaching"]
    assert first.findtext(f"{{{CONTENT_NS}}}encoded") == "<h1>Hello</h1>"

    # without a summary the description falls back to the HTML body
    assert items[1].findtext("description") == "<h1>Hello</h1>"


def test_feed_pub_date_is_gmt_for_other_zones():
    plus_two = datetime.timezone(datetime.timedelta(hours=2))
    local = datetime.datetime(2024, 6, 1, 14, 0, tzinfo=plus_two)

    _, root = render([make_read(publishedAt=local)])

    item = root.find("channel").find("item")
    assert item.findtext("pubDate") == "Sat, 01 Jun 2024 12:00:00 GMT"
