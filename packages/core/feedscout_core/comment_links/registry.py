"""
Comment link registry.

Manages comment link extractors. Extractors run in priority order (lower
priority value runs first) and the first one that finds a link wins.
"""

from typing import Any

from feedscout_core import get_logger
from feedscout_core.registry import PriorityRegistry
from feedscout_core.schemas import ExtractedCommentLink

from .base import CommentLinkExtractor, FeedItem

logger = get_logger(__name__)


class CommentLinkRegistry(PriorityRegistry[CommentLinkExtractor, ExtractedCommentLink]):
    """Registry of comment link extractors."""

    def is_hit(self, result: ExtractedCommentLink | None) -> bool:
        return result is not None and bool(result.url)

    def on_failure(self, strategy: CommentLinkExtractor, subject: Any, error: Exception) -> None:
        logger.warning(
            "Comment link extractor %s failed",
            strategy.name,
            exc_info=error,
            extra={"extractor": strategy.name, "priority": strategy.priority},
        )

    def extract_link(self, item: FeedItem) -> ExtractedCommentLink | None:
        """
        Extract a comment link with its provenance.

        Args:
            item: Feed item.

        Returns:
            Extracted link, or None if no extractor found one.
        """
        return self.run(item, lambda extractor: extractor.extract(item)).result

    def extract(self, item: FeedItem) -> str | None:
        """
        Extract a comment link URL from a feed item.

        Args:
            item: Feed item.

        Returns:
            Comment link URL, or None if none found.
        """
        link = self.extract_link(item)
        return link.url if link else None
