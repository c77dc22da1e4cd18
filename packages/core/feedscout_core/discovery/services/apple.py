"""
Apple Podcasts discovery.

Resolves Apple Podcasts show URLs to their RSS feed through the iTunes lookup
API, then validates the feed.
"""

import asyncio
import re
from typing import Any
from urllib.parse import urlencode, urlsplit

import httpx

from feedscout_core import get_logger
from feedscout_core.schemas import DiscoveredFeed
from feedscout_rss import host_matches, strip_html

from ..base import DiscoveryContext, DiscoveryService

logger = get_logger(__name__)

ITUNES_LOOKUP_URL = "https://itunes.apple.com/lookup"
APPLE_PODCAST_ID_REGEX = re.compile(r"/id(?P<podcast_id>\d+)/?$")


def extract_podcast_id(url: str) -> str | None:
    """
    Extract the catalog id from an Apple Podcasts URL.

    Supports URLs like:
    - https://podcasts.apple.com/us/podcast/name/id1234567890
    - https://itunes.apple.com/us/podcast/name/id1234567890?mt=2
    """
    try:
        path = urlsplit(url).path
    except ValueError:
        return None
    match = APPLE_PODCAST_ID_REGEX.search(path)
    if match:
        return match.group("podcast_id")
    return None


class ApplePodcastDiscoveryService(DiscoveryService):
    """Discovery for apple.com podcast URLs (runs before standard discovery)."""

    priority = 10

    def can_handle(self, url: str) -> bool:
        try:
            hostname = urlsplit(url).hostname
        except ValueError:
            return False
        return host_matches(hostname, "apple.com")

    async def discover(self, url: str, context: DiscoveryContext) -> list[DiscoveredFeed]:
        podcast_id = extract_podcast_id(url)
        if not podcast_id:
            # Not a show URL, let standard discovery handle it
            return []

        with context.telemetry.start_span(
            "Apple Podcast Discovery",
            op="feed.discovery.apple",
            attributes={"url": url, "podcast_id": podcast_id},
        ) as span:
            podcast = await self._lookup_podcast(podcast_id, url, context)
            feed_url = podcast.get("feedUrl") if podcast else None
            if not feed_url:
                span.set_status(False, "Podcast has no feed URL")
                return []

            span.set_attribute("feed_url", feed_url)
            discovered = await context.validate_feed(feed_url)
            if discovered is None:
                span.set_status(False, "Feed validation failed")
                return []

            span.set_status(True, "ok")
            # Directory metadata is curated and beats what the feed says
            description = podcast.get("longDescription") or podcast.get("shortDescription")
            return [
                discovered.model_copy(
                    update={
                        "title": podcast.get("collectionName") or discovered.title,
                        "description": strip_html(description) or discovered.description,
                        "icon_url": podcast.get("artworkUrl600") or podcast.get("artworkUrl100"),
                    }
                )
            ]

    async def _lookup_podcast(
        self, podcast_id: str, url: str, context: DiscoveryContext
    ) -> dict[str, Any] | None:
        params = {"id": podcast_id, "entity": "podcast"}
        if context.settings.itunes_country:
            params["country"] = context.settings.itunes_country.lower()
        lookup_url = f"{ITUNES_LOOKUP_URL}?{urlencode(params)}"

        try:
            async with asyncio.timeout(context.settings.lookup_timeout):
                response = await context.client.get(
                    lookup_url,
                    headers={"Accept": "application/json"},
                    timeout=context.settings.lookup_timeout,
                )
            response.raise_for_status()
            payload = response.json()
        except (httpx.HTTPError, TimeoutError, ValueError) as e:
            logger.warning(
                "iTunes lookup failed: %s",
                e,
                extra={"podcast_id": podcast_id, "url": url},
            )
            context.telemetry.capture_exception(
                e,
                level="warning",
                tags={"operation": "apple_discovery_lookup"},
                extra={"input_url": url, "podcast_id": podcast_id},
            )
            return None

        results = payload.get("results") if isinstance(payload, dict) else None
        if not results or not isinstance(results[0], dict):
            logger.info("iTunes lookup returned no podcast", extra={"podcast_id": podcast_id})
            return None
        return results[0]
