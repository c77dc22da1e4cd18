"""
Discovery service interface.

This module defines the per-request discovery context and the abstract base
class for all discovery services.
"""

from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field

import httpx

from feedscout_core.config import DiscoverySettings
from feedscout_core.schemas import DiscoveredFeed
from feedscout_core.telemetry import NoopTelemetry, TelemetryAdapter

FeedValidatorFn = Callable[[str], Awaitable[DiscoveredFeed | None]]


@dataclass
class DiscoveryContext:
    """
    State shared by the services of a single discovery request.

    Created by the registry at the start of ``discover()`` and dropped when it
    returns; never reused across requests.
    """

    client: httpx.AsyncClient
    settings: DiscoverySettings
    validate_feed: FeedValidatorFn
    # Normalized URLs already resolved in this request, successfully or not
    seen_urls: set[str] = field(default_factory=set)
    # Atom feed ids already returned in this request
    seen_feed_ids: set[str] = field(default_factory=set)
    telemetry: TelemetryAdapter = field(default_factory=NoopTelemetry)


class DiscoveryService(ABC):
    """
    Abstract base class for discovery services.

    A service recognizes a category of input URLs and turns them into feed
    candidates. It never decides validity itself: every candidate goes
    through ``context.validate_feed``. Services are stateless and may be
    shared across requests.
    """

    # Lower runs first
    priority: int = 100

    @property
    def name(self) -> str:
        """Service name used in logs and telemetry."""
        return type(self).__name__

    @abstractmethod
    def can_handle(self, url: str) -> bool:
        """
        Check whether this service applies to the URL.

        Args:
            url: Input URL.

        Returns:
            True if ``discover`` should be tried for this URL.
        """
        pass

    @abstractmethod
    async def discover(self, url: str, context: DiscoveryContext) -> list[DiscoveredFeed]:
        """
        Discover feeds for the URL.

        Args:
            url: Input URL.
            context: Discovery context of the current request.

        Returns:
            Validated feeds, or an empty list if none were found.
        """
        pass
