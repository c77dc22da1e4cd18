"""
Atom link extractor.

Reads Atom ``<link rel="replies">`` (RFC 4685) and the ``comments`` /
``discussion`` relations some feeds use instead.
"""

from collections.abc import Mapping

from feedscout_core.schemas import ExtractedCommentLink

from .base import CommentLinkExtractor, FeedItem

COMMENT_RELATIONS = frozenset({"replies", "comments", "discussion"})


class AtomLinkExtractor(CommentLinkExtractor):
    """Structured ``links`` list (second priority)."""

    priority = 20

    def can_handle(self, item: FeedItem) -> bool:
        links = item.get("links")
        return isinstance(links, list) and len(links) > 0

    def extract(self, item: FeedItem) -> ExtractedCommentLink | None:
        for link in item.get("links") or []:
            if not isinstance(link, Mapping):
                continue
            rel = str(link.get("rel") or "").strip().lower()
            href = link.get("href")
            if rel in COMMENT_RELATIONS and href:
                return ExtractedCommentLink(url=str(href), source="atom-link")
        return None
