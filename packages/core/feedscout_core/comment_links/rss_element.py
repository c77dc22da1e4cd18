"""
RSS comments element extractor.

Reads the explicit RSS ``<comments>`` element, as used by Hacker News,
WordPress and others.
"""

from feedscout_core.schemas import ExtractedCommentLink

from .base import CommentLinkExtractor, FeedItem


class RssCommentsExtractor(CommentLinkExtractor):
    """Explicit ``comments`` field (highest priority)."""

    priority = 10

    def can_handle(self, item: FeedItem) -> bool:
        comments = item.get("comments")
        return isinstance(comments, str) and bool(comments.strip())

    def extract(self, item: FeedItem) -> ExtractedCommentLink | None:
        comments = item.get("comments")
        if isinstance(comments, str) and comments.strip():
            return ExtractedCommentLink(url=comments.strip(), source="rss-comments-element")
        return None
