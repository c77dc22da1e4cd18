"""
Feed discovery schemas.

Result models for discovery and request/response models for the API.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, HttpUrl

FeedType = Literal["rss", "atom", "rdf", "json"]


class DiscoveredFeed(BaseModel):
    """A validated feed found for an input URL."""

    model_config = ConfigDict(frozen=True)

    url: str  # URL as requested, before redirects
    title: str
    type: FeedType
    description: str | None = None
    icon_url: str | None = None


class DiscoverFeedRequest(BaseModel):
    """Discover feeds from URL request."""

    url: HttpUrl
