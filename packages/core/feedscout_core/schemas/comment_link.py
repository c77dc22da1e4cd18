"""
Comment link schemas.
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict

CommentLinkSource = Literal["rss-comments-element", "atom-link", "html-pattern"]


class ExtractedCommentLink(BaseModel):
    """Discussion URL found on a feed item, tagged with the extractor that found it."""

    model_config = ConfigDict(frozen=True)

    url: str
    source: CommentLinkSource


class CommentLinkRequest(BaseModel):
    """Extract comment link request. ``item`` uses feedparser entry keys."""

    item: dict[str, Any]


class CommentLinkResponse(BaseModel):
    """Extract comment link response."""

    url: str | None
