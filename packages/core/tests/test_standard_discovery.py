"""Tests for standard website discovery."""

import pytest

from feedscout_core.discovery import create_default_registry
from feedscout_core.errors import NoFeedsFoundError


def _page(feed_server, url: str, html: str) -> None:
    feed_server.add(url, html, content_type="text/html; charset=utf-8")


@pytest.mark.asyncio
async def test_direct_feed_url(registry, feed_server, docs):
    feed_server.add("https://example.com/feed.xml", docs.rss(title="Direct"))

    feeds = await registry.discover("https://example.com/feed.xml")

    assert [feed.url for feed in feeds] == ["https://example.com/feed.xml"]
    assert feeds[0].title == "Direct"


@pytest.mark.asyncio
async def test_common_path_at_site_root(registry, feed_server, docs):
    _page(feed_server, "https://example.com/", docs.html())
    feed_server.add("https://example.com/rss", docs.rss())

    feeds = await registry.discover("https://example.com/")

    assert [feed.url for feed in feeds] == ["https://example.com/rss"]


@pytest.mark.asyncio
async def test_extension_appended_to_profile_path(registry, feed_server, docs):
    _page(feed_server, "https://social.example/@alice", docs.html())
    feed_server.add("https://social.example/@alice.rss", docs.rss(title="alice"))

    feeds = await registry.discover("https://social.example/@alice")

    assert [feed.url for feed in feeds] == ["https://social.example/@alice.rss"]


@pytest.mark.asyncio
async def test_feed_relative_to_input_path(registry, feed_server, docs):
    _page(feed_server, "https://example.com/blog/", docs.html())
    feed_server.add("https://example.com/blog/index.xml", docs.rss())

    feeds = await registry.discover("https://example.com/blog/")

    assert [feed.url for feed in feeds] == ["https://example.com/blog/index.xml"]


@pytest.mark.asyncio
async def test_links_advertised_in_page(registry, feed_server, docs):
    _page(
        feed_server,
        "https://example.com/",
        docs.html(
            ("https://feeds.example.net/main.xml", "application/rss+xml"),
            ("/comments.atom", "application/atom+xml"),
        ),
    )
    feed_server.add("https://feeds.example.net/main.xml", docs.rss(title="Main"))
    feed_server.add("https://example.com/comments.atom", docs.atom(title="Comments"))

    feeds = await registry.discover("https://example.com/")

    assert [feed.title for feed in feeds] == ["Main", "Comments"]


@pytest.mark.asyncio
async def test_page_links_resolve_against_final_url(registry, feed_server, docs):
    feed_server.add_redirect("https://example.com/", "https://www.example.com/home/")
    _page(
        feed_server,
        "https://www.example.com/home/",
        docs.html(("feed.json", "application/feed+json")),
    )
    feed_server.add("https://www.example.com/home/feed.json", docs.json_feed())

    feeds = await registry.discover("https://example.com/")

    assert [feed.url for feed in feeds] == ["https://www.example.com/home/feed.json"]
    assert feeds[0].type == "json"


@pytest.mark.asyncio
async def test_same_feed_found_by_several_stages_is_returned_once(registry, feed_server, docs):
    _page(
        feed_server,
        "https://example.com/",
        docs.html(("https://example.com/feed/?utm_source=site", "application/rss+xml")),
    )
    feed_server.add("https://example.com/feed", docs.rss())

    feeds = await registry.discover("https://example.com/")

    assert [feed.url for feed in feeds] == ["https://example.com/feed"]
    assert feed_server.requested("https://example.com/feed") == 1


@pytest.mark.asyncio
async def test_non_exhaustive_stops_at_first_stage_with_feeds(feed_server, settings, docs):
    registry = create_default_registry(
        settings=settings.model_copy(update={"standard_exhaustive": False}),
        transport=feed_server.transport,
    )
    _page(
        feed_server,
        "https://example.com/",
        docs.html(("https://feeds.example.net/other.xml", "application/rss+xml")),
    )
    feed_server.add("https://example.com/feed", docs.rss())
    feed_server.add("https://feeds.example.net/other.xml", docs.rss())

    feeds = await registry.discover("https://example.com/")

    assert [feed.url for feed in feeds] == ["https://example.com/feed"]
    assert feed_server.requested("https://feeds.example.net/other.xml") == 0


@pytest.mark.asyncio
async def test_non_html_page_is_not_scanned(registry, feed_server):
    feed_server.add(
        "https://example.com/",
        '<link rel="alternate" type="application/rss+xml" href="/hidden.xml">',
        content_type="text/plain",
    )

    with pytest.raises(NoFeedsFoundError):
        await registry.discover("https://example.com/")

    assert feed_server.requested("https://example.com/hidden.xml") == 0


@pytest.mark.asyncio
async def test_site_without_feeds(registry, feed_server, docs):
    _page(feed_server, "https://example.com/", docs.html(body="<p>No feeds here</p>"))

    with pytest.raises(NoFeedsFoundError):
        await registry.discover("https://example.com/")


@pytest.mark.asyncio
async def test_unreachable_page(registry, feed_server):
    feed_server.add("https://example.com/", "down", status_code=503, content_type="text/html")

    with pytest.raises(NoFeedsFoundError):
        await registry.discover("https://example.com/")


@pytest.mark.asyncio
async def test_slow_page_keeps_feeds_from_earlier_stages(feed_server, settings, docs):
    registry = create_default_registry(
        settings=settings.model_copy(update={"page_timeout": 0.2, "feed_timeout": 0.2}),
        transport=feed_server.transport,
    )
    feed_server.add_slow(
        "https://example.com/",
        docs.html(("https://feeds.example.net/late.xml", "application/rss+xml")),
        content_type="text/html",
    )
    feed_server.add("https://example.com/feed", docs.rss())
    feed_server.add("https://feeds.example.net/late.xml", docs.rss())

    feeds = await registry.discover("https://example.com/")

    assert [feed.url for feed in feeds] == ["https://example.com/feed"]
    assert feed_server.requested("https://feeds.example.net/late.xml") == 0
