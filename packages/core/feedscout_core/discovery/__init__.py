"""
Feed discovery package.

Finds and validates feeds for arbitrary input URLs. Domain-specific services
(Apple Podcasts, Reddit) run before the standard website discovery.

Usage:
    from feedscout_core.discovery import create_default_registry

    registry = create_default_registry()
    feeds = await registry.discover("https://example.com")
"""

import httpx

from feedscout_core.config import DiscoverySettings
from feedscout_core.schemas import DiscoveredFeed
from feedscout_core.telemetry import TelemetryAdapter

from .base import DiscoveryContext, DiscoveryService, FeedValidatorFn
from .registry import DiscoveryRegistry
from .services import (
    ApplePodcastDiscoveryService,
    RedditDiscoveryService,
    StandardDiscoveryService,
)
from .validator import FeedValidator


def create_default_registry(
    telemetry: TelemetryAdapter | None = None,
    settings: DiscoverySettings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> DiscoveryRegistry:
    """
    Create a discovery registry with the default services registered.

    Execution order: Apple Podcasts (10), Reddit (10), Standard (100).

    Args:
        telemetry: Optional telemetry adapter.
        settings: Discovery settings.
        transport: Optional httpx transport.

    Returns:
        Configured discovery registry.
    """
    registry = DiscoveryRegistry(telemetry=telemetry, settings=settings, transport=transport)
    registry.register(ApplePodcastDiscoveryService())
    registry.register(RedditDiscoveryService())
    registry.register(StandardDiscoveryService())
    return registry


async def discover_feeds(
    url: str, telemetry: TelemetryAdapter | None = None
) -> list[DiscoveredFeed]:
    """
    Discover feeds from a URL with the default services.

    Args:
        url: URL to discover feeds from.
        telemetry: Optional telemetry adapter.

    Returns:
        Discovered feeds.

    Raises:
        NoFeedsFoundError: If no feeds were found.
        DiscoveryFailedError: If every applicable service crashed.
    """
    return await create_default_registry(telemetry=telemetry).discover(url)


__all__ = [
    "DiscoveryContext",
    "DiscoveryService",
    "DiscoveryRegistry",
    "FeedValidator",
    "FeedValidatorFn",
    "ApplePodcastDiscoveryService",
    "RedditDiscoveryService",
    "StandardDiscoveryService",
    "create_default_registry",
    "discover_feeds",
]
