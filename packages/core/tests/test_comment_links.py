"""Tests for comment link extraction."""

import pytest

from feedscout_core.comment_links import (
    AtomLinkExtractor,
    CommentLinkExtractor,
    CommentLinkRegistry,
    HtmlPatternExtractor,
    RssCommentsExtractor,
    create_default_comment_registry,
    extract_comment_link,
)


@pytest.fixture
def comment_registry() -> CommentLinkRegistry:
    return create_default_comment_registry()


class TestRssCommentsExtractor:
    """Test the explicit comments element."""

    def test_extracts_comments_field(self):
        item = {"comments": " https://news.ycombinator.com/item?id=1 "}
        link = RssCommentsExtractor().extract(item)
        assert link is not None
        assert link.url == "https://news.ycombinator.com/item?id=1"
        assert link.source == "rss-comments-element"

    @pytest.mark.parametrize("value", [None, "", "   ", 42])
    def test_ignores_missing_or_blank(self, value):
        assert not RssCommentsExtractor().can_handle({"comments": value})


class TestAtomLinkExtractor:
    """Test Atom relation links."""

    @pytest.mark.parametrize("rel", ["replies", "comments", "discussion", "Replies"])
    def test_extracts_comment_relations(self, rel):
        item = {
            "links": [
                {"rel": "alternate", "href": "https://example.com/post"},
                {"rel": rel, "href": "https://example.com/post#comments"},
            ]
        }
        link = AtomLinkExtractor().extract(item)
        assert link is not None
        assert link.url == "https://example.com/post#comments"
        assert link.source == "atom-link"

    def test_ignores_other_relations(self):
        item = {"links": [{"rel": "alternate", "href": "https://example.com/post"}]}
        assert AtomLinkExtractor().extract(item) is None

    def test_requires_non_empty_links(self):
        assert not AtomLinkExtractor().can_handle({"links": []})
        assert not AtomLinkExtractor().can_handle({})

    def test_skips_malformed_links(self):
        item = {
            "links": ["not a dict", {"rel": "replies"}, {"rel": "replies", "href": "https://x/c"}]
        }
        link = AtomLinkExtractor().extract(item)
        assert link is not None
        assert link.url == "https://x/c"


class TestHtmlPatternExtractor:
    """Test comment-like anchors in item HTML."""

    def test_reddit_comments_anchor(self):
        item = {
            "description": (
                'submitted by <a href="https://www.reddit.com/user/x">/u/x</a> '
                '<a href="https://example.com/article">[link]</a> '
                '<a href="https://www.reddit.com/r/python/comments/abc/">[comments]</a>'
            )
        }
        link = HtmlPatternExtractor().extract(item)
        assert link is not None
        assert link.url == "https://www.reddit.com/r/python/comments/abc/"
        assert link.source == "html-pattern"

    def test_exact_text_beats_contains_match(self):
        item = {
            "summary": (
                '<a href="https://example.com/a">Read 12 comments later</a> '
                '<a href="https://example.com/b">Discussion</a>'
            )
        }
        assert HtmlPatternExtractor().extract(item).url == "https://example.com/b"

    @pytest.mark.parametrize("text", ["💬 42", "🗨️ Join in", "12 comments"])
    def test_icon_and_count_anchors(self, text):
        item = {"description": f'<p>Post</p><a href="https://example.com/c">{text}</a>'}
        assert HtmlPatternExtractor().extract(item).url == "https://example.com/c"

    def test_feedparser_content_blocks(self):
        item = {
            "content": [
                {"type": "text/html", "value": '<a href="https://example.com/d">Comments</a>'}
            ]
        }
        assert HtmlPatternExtractor().extract(item).url == "https://example.com/d"

    def test_field_order(self):
        item = {
            "summary": '<a href="https://example.com/summary">Comments</a>',
            "description": '<a href="https://example.com/description">Comments</a>',
        }
        assert HtmlPatternExtractor().extract(item).url == "https://example.com/description"

    def test_no_matching_anchor(self):
        item = {"description": '<a href="https://example.com/more">Read more</a>'}
        assert HtmlPatternExtractor().extract(item) is None

    @pytest.mark.parametrize(
        "html",
        ["<a href='https://example.com/c'>comments", "<<a href=>>comments</a", "<div><a>"],
    )
    def test_malformed_html_does_not_raise(self, html):
        HtmlPatternExtractor().extract({"description": html})


class TestRegistry:
    """Test extractor precedence and failure isolation."""

    def test_extractor_order(self, comment_registry):
        assert [extractor.priority for extractor in comment_registry.strategies] == [10, 20, 30]
        assert len(comment_registry) == 3

    def test_rss_element_wins_over_other_sources(self, comment_registry):
        item = {
            "comments": "https://example.com/rss",
            "links": [{"rel": "replies", "href": "https://example.com/atom"}],
            "description": '<a href="https://example.com/html">comments</a>',
        }
        link = comment_registry.extract_link(item)
        assert link.url == "https://example.com/rss"
        assert link.source == "rss-comments-element"

    def test_atom_link_wins_over_html(self, comment_registry):
        item = {
            "links": [{"rel": "replies", "href": "https://example.com/atom"}],
            "description": '<a href="https://example.com/html">comments</a>',
        }
        assert comment_registry.extract(item) == "https://example.com/atom"

    def test_falls_through_to_html(self, comment_registry):
        item = {
            "links": [{"rel": "alternate", "href": "https://example.com/post"}],
            "description": '<a href="https://example.com/html">comments</a>',
        }
        assert comment_registry.extract(item) == "https://example.com/html"

    def test_item_without_comment_link(self, comment_registry):
        assert comment_registry.extract({"title": "Just a post"}) is None
        assert comment_registry.extract({}) is None

    def test_failing_extractor_is_skipped(self, caplog):
        class Broken(CommentLinkExtractor):
            priority = 1

            def can_handle(self, item):
                return True

            def extract(self, item):
                raise KeyError("boom")

        registry = create_default_comment_registry()
        registry.register(Broken())

        assert registry.extract({"comments": "https://example.com/c"}) == "https://example.com/c"
        assert "Broken" in caplog.text

    def test_raising_can_handle_is_skipped(self, caplog):
        class Picky(CommentLinkExtractor):
            priority = 1

            def can_handle(self, item):
                raise TypeError("bad predicate")

            def extract(self, item):
                return None

        registry = create_default_comment_registry()
        registry.register(Picky())

        assert registry.extract({"comments": "https://example.com/c"}) == "https://example.com/c"
        assert "Picky" in caplog.text

    def test_extract_comment_link_helper(self):
        assert extract_comment_link({"comments": "https://example.com/c"}) == "https://example.com/c"
