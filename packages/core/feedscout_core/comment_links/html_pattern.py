"""
HTML pattern extractor.

Finds comment links embedded in item HTML, e.g. Reddit's
``<a href="...">[comments]</a>`` or a trailing "Discussion" link.

Supports English link text and the 💬 / 🗨️ indicators. Other languages
need their own extractor.
"""

import re
from collections.abc import Iterator

from bs4 import BeautifulSoup

from feedscout_core.schemas import ExtractedCommentLink

from .base import CommentLinkExtractor, FeedItem

# Checked in order; HTML fields are tried in this order too
HTML_FIELDS: tuple[str, ...] = ("description", "content", "summary")

LINK_TEXT_PATTERNS: tuple[re.Pattern[str], ...] = (
    # [comments] (Reddit)
    re.compile(r"\[?\s*comments?\s*\]?", re.IGNORECASE),
    # Plain "Comments" / "Discussion" / "Discuss"
    re.compile(r"(?:comments?|discussion|discuss)", re.IGNORECASE),
)
# Icon or count + text, e.g. "💬 42 comments"
LINK_TEXT_CONTAINS = re.compile(r"💬|🗨️|comment|discussion", re.IGNORECASE)


def _html_values(item: FeedItem) -> Iterator[str]:
    for field in HTML_FIELDS:
        value = item.get(field)
        if isinstance(value, str):
            yield value
        elif isinstance(value, list):
            # feedparser content blocks: [{"type": ..., "value": ...}]
            for block in value:
                block_value = block.get("value") if isinstance(block, dict) else None
                if isinstance(block_value, str):
                    yield block_value


class HtmlPatternExtractor(CommentLinkExtractor):
    """Comment-like anchors in description, content or summary (third priority)."""

    priority = 30

    def can_handle(self, item: FeedItem) -> bool:
        return any(item.get(field) for field in HTML_FIELDS)

    def extract(self, item: FeedItem) -> ExtractedCommentLink | None:
        for html in _html_values(item):
            if "<a" not in html.lower():
                continue
            url = self._find_comment_anchor(html)
            if url:
                return ExtractedCommentLink(url=url, source="html-pattern")
        return None

    @staticmethod
    def _find_comment_anchor(html: str) -> str | None:
        soup = BeautifulSoup(html, "lxml")
        anchors = [
            (anchor["href"].strip(), anchor.get_text(" ", strip=True))
            for anchor in soup.find_all("a", href=True)
            if anchor["href"].strip()
        ]

        for pattern in LINK_TEXT_PATTERNS:
            for href, text in anchors:
                if pattern.fullmatch(text):
                    return href

        for href, text in anchors:
            if LINK_TEXT_CONTAINS.search(text):
                return href

        return None
