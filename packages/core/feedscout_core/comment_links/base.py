"""
Comment link extractor interface.
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any

from feedscout_core.schemas import ExtractedCommentLink

# A feed item as produced by feedparser (or a plain dict with the same keys)
FeedItem = Mapping[str, Any]


class CommentLinkExtractor(ABC):
    """
    Abstract base class for comment link extractors.

    Extractors are CPU-only and must not perform I/O.
    """

    # Lower runs first
    priority: int = 100

    @property
    def name(self) -> str:
        """Extractor name used in logs."""
        return type(self).__name__

    @abstractmethod
    def can_handle(self, item: FeedItem) -> bool:
        """Check whether the item has the fields this extractor reads."""
        pass

    @abstractmethod
    def extract(self, item: FeedItem) -> ExtractedCommentLink | None:
        """
        Extract a comment link from the item.

        Returns:
            Extracted link, or None if none found.
        """
        pass
