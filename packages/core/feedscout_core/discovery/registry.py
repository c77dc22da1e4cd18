"""
Discovery registry.

Manages discovery services and orchestrates feed discovery. Services run in
priority order (lower priority value runs first) and the first service that
returns feeds ends the request.
"""

from typing import Any

import httpx

from feedscout_core import get_logger
from feedscout_core.config import DiscoverySettings, get_settings
from feedscout_core.errors import DiscoveryFailedError, NoFeedsFoundError
from feedscout_core.registry import PriorityRegistry
from feedscout_core.schemas import DiscoveredFeed
from feedscout_core.telemetry import NoopTelemetry, TelemetryAdapter

from .base import DiscoveryContext, DiscoveryService
from .validator import FeedValidator

logger = get_logger(__name__)


class DiscoveryRegistry(PriorityRegistry[DiscoveryService, list[DiscoveredFeed]]):
    """
    Registry of discovery services.

    Each ``discover()`` call gets a fresh ``DiscoveryContext`` and HTTP
    client, so independent calls share no state.
    """

    def __init__(
        self,
        telemetry: TelemetryAdapter | None = None,
        settings: DiscoverySettings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize discovery registry.

        Args:
            telemetry: Optional telemetry adapter (defaults to no-op).
            settings: Discovery settings (defaults to environment settings).
            transport: Optional httpx transport, e.g. ``httpx.MockTransport`` in tests.
        """
        super().__init__()
        self.telemetry: TelemetryAdapter = telemetry or NoopTelemetry()
        self.settings = settings or get_settings()
        self._transport = transport

    def _create_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            transport=self._transport,
            follow_redirects=True,
            headers={"User-Agent": self.settings.user_agent},
            timeout=self.settings.feed_timeout,
        )

    def on_skip(self, strategy: DiscoveryService, subject: Any) -> None:
        self.telemetry.add_breadcrumb(
            f"Service {strategy.name} cannot handle URL",
            category="feed.discovery",
            level="debug",
            data={"service": strategy.name, "url": subject},
        )

    def on_failure(self, strategy: DiscoveryService, subject: Any, error: Exception) -> None:
        logger.error(
            "Discovery service %s failed for %s",
            strategy.name,
            subject,
            exc_info=error,
            extra={
                "service": strategy.name,
                "url": subject,
                "priority": strategy.priority,
                "error_type": type(error).__name__,
            },
        )
        self.telemetry.capture_exception(
            error,
            level="warning",
            tags={"service": strategy.name, "operation": "feed_discovery_service"},
            extra={"url": subject, "service_priority": strategy.priority},
        )

    async def discover(self, url: str) -> list[DiscoveredFeed]:
        """
        Discover feeds from a URL.

        Executes discovery services in priority order:
        1. Services that cannot handle the URL are skipped
        2. If a service finds feeds, return immediately (stop early)
        3. If a service returns nothing or errors, continue to the next one

        Args:
            url: URL to discover feeds from.

        Returns:
            Non-empty list of discovered feeds.

        Raises:
            NoFeedsFoundError: If no service found a feed.
            DiscoveryFailedError: If every service that handled the URL raised.
        """
        with self.telemetry.start_span(
            "Feed Discovery",
            op="feed.discovery",
            attributes={"url": url, "service_count": len(self)},
        ) as span:
            async with self._create_client() as client:
                seen_urls: set[str] = set()
                seen_feed_ids: set[str] = set()
                context = DiscoveryContext(
                    client=client,
                    settings=self.settings,
                    validate_feed=FeedValidator(client, self.settings, seen_urls, seen_feed_ids),
                    seen_urls=seen_urls,
                    seen_feed_ids=seen_feed_ids,
                    telemetry=self.telemetry,
                )

                self.telemetry.add_breadcrumb(
                    f"Starting feed discovery for {url}",
                    category="feed.discovery",
                    data={"url": url, "service_count": len(self)},
                )

                async def run_service(service: DiscoveryService) -> list[DiscoveredFeed]:
                    self.telemetry.add_breadcrumb(
                        f"Trying service {service.name}",
                        category="feed.discovery",
                        data={"service": service.name, "priority": service.priority},
                    )
                    return await service.discover(url, context)

                walk = await self.arun(url, run_service)

            if walk.result:
                span.set_attribute("service_used", walk.winner)
                span.set_attribute("feeds_found", len(walk.result))
                span.set_status(True, "ok")
                self.telemetry.add_breadcrumb(
                    f"Service {walk.winner} found {len(walk.result)} feed(s)",
                    category="feed.discovery",
                    data={
                        "service": walk.winner,
                        "feeds_found": len(walk.result),
                        "feed_urls": [feed.url for feed in walk.result],
                    },
                )
                logger.info(
                    "Discovered %d feed(s) for %s",
                    len(walk.result),
                    url,
                    extra={"url": url, "service": walk.winner, "feeds_found": len(walk.result)},
                )
                return walk.result

            span.set_attribute("feeds_found", 0)

            if walk.all_failed:
                span.set_status(False, "All discovery services failed")
                failed = [failure.strategy for failure in walk.failures]
                raise DiscoveryFailedError(url, failed) from walk.failures[-1].error

            span.set_status(False, "No feeds found")
            error = NoFeedsFoundError(url)
            logger.info(
                "No feeds found for %s",
                url,
                extra={"url": url, "services_tried": walk.tried},
            )
            self.telemetry.capture_exception(
                error,
                level="info",
                tags={"operation": "feed_discovery"},
                extra={"url": url, "services_tried": walk.tried},
            )
            raise error
