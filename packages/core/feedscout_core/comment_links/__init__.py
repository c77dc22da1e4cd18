"""
Comment link extraction package.

Picks the discussion URL of a feed item using, in priority order, the RSS
comments element, Atom reply links, and comment-like anchors in item HTML.
"""

from .atom_link import AtomLinkExtractor
from .base import CommentLinkExtractor, FeedItem
from .html_pattern import HtmlPatternExtractor
from .registry import CommentLinkRegistry
from .rss_element import RssCommentsExtractor


def create_default_comment_registry() -> CommentLinkRegistry:
    """Create a comment link registry with the default extractors registered."""
    registry = CommentLinkRegistry()
    registry.register(RssCommentsExtractor())
    registry.register(AtomLinkExtractor())
    registry.register(HtmlPatternExtractor())
    return registry


def extract_comment_link(item: FeedItem) -> str | None:
    """
    Extract a comment link from a feed item with the default extractors.

    Args:
        item: Feed item (feedparser entry or dict with the same keys).

    Returns:
        Comment link URL or None if none found.
    """
    return create_default_comment_registry().extract(item)


__all__ = [
    "CommentLinkExtractor",
    "CommentLinkRegistry",
    "FeedItem",
    "RssCommentsExtractor",
    "AtomLinkExtractor",
    "HtmlPatternExtractor",
    "create_default_comment_registry",
    "extract_comment_link",
]
