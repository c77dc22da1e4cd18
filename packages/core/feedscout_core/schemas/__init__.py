"""
Pydantic schemas for discovery results and API requests and responses.
"""

from .comment_link import (
    CommentLinkRequest,
    CommentLinkResponse,
    CommentLinkSource,
    ExtractedCommentLink,
)
from .discovery import DiscoveredFeed, DiscoverFeedRequest, FeedType

__all__ = [
    # Discovery
    "DiscoveredFeed",
    "DiscoverFeedRequest",
    "FeedType",
    # Comment links
    "ExtractedCommentLink",
    "CommentLinkSource",
    "CommentLinkRequest",
    "CommentLinkResponse",
]
