"""
Standard discovery.

Fallback discovery for any website, in stages:

0. the input URL itself
1. the input path with a feed extension appended (``/@user`` -> ``/@user.rss``)
2. common feed paths at the site root
3. common feed names relative to the input path
4. ``<link rel="alternate">`` feed links in the page HTML

Candidates of a stage are validated concurrently.
"""

import asyncio
from urllib.parse import urlsplit

import httpx

from feedscout_core import get_logger
from feedscout_core.schemas import DiscoveredFeed
from feedscout_rss import find_feed_links

from ..base import DiscoveryContext, DiscoveryService

logger = get_logger(__name__)

FEED_EXTENSIONS: tuple[str, ...] = (".rss", ".atom", ".xml")

COMMON_FEED_PATHS: tuple[str, ...] = (
    "/feed",
    "/rss",
    "/atom",
    "/atom.xml",
    "/feed.xml",
    "/rss.xml",
    "/index.xml",
    "/feeds/posts/default",
    "/feeds/all.atom",
    "/feed/atom/",
    "/blog/feed",
    "/blog/rss",
    "/blog/rss.xml",
    "/blog/feed.xml",
    "/blog/atom.xml",
)

RELATIVE_FEED_NAMES: tuple[str, ...] = (
    "feed",
    "rss",
    "atom",
    "atom.xml",
    "feed.xml",
    "rss.xml",
    "index.xml",
)

HTML_ACCEPT_HEADER = "text/html,application/xhtml+xml"


class StandardDiscoveryService(DiscoveryService):
    """
    Standard discovery service.

    Claims every URL and runs after domain-specific services. Input that is
    not an absolute http(s) URL raises ValueError.
    """

    priority = 100

    def can_handle(self, url: str) -> bool:
        return True

    async def discover(self, url: str, context: DiscoveryContext) -> list[DiscoveredFeed]:
        parts = urlsplit(url)
        if parts.scheme not in ("http", "https") or not parts.netloc:
            raise ValueError(f"Unsupported URL: {url!r}")

        base_url = f"{parts.scheme}://{parts.netloc}"
        exhaustive = context.settings.standard_exhaustive
        discovered: list[DiscoveredFeed] = []

        candidate_stages = [
            [url],
            self._extension_candidates(base_url, parts.path),
            [f"{base_url}{path}" for path in COMMON_FEED_PATHS],
            self._relative_candidates(base_url, parts.path),
        ]
        for candidates in candidate_stages:
            discovered.extend(await self._validate_all(candidates, context))
            if discovered and not exhaustive:
                return discovered

        page_links = await self._find_page_links(url, context)
        discovered.extend(await self._validate_all(page_links, context))
        return discovered

    @staticmethod
    def _extension_candidates(base_url: str, path: str) -> list[str]:
        stem = path.rstrip("/")
        if not stem or stem.endswith(FEED_EXTENSIONS):
            return []
        return [f"{base_url}{stem}{extension}" for extension in FEED_EXTENSIONS]

    @staticmethod
    def _relative_candidates(base_url: str, path: str) -> list[str]:
        directory = path if path.endswith("/") else f"{path}/"
        if directory == "/":
            return []
        return [f"{base_url}{directory}{name}" for name in RELATIVE_FEED_NAMES]

    @staticmethod
    async def _validate_all(
        candidates: list[str], context: DiscoveryContext
    ) -> list[DiscoveredFeed]:
        if not candidates:
            return []
        results = await asyncio.gather(*(context.validate_feed(url) for url in candidates))
        return [feed for feed in results if feed is not None]

    @staticmethod
    async def _find_page_links(url: str, context: DiscoveryContext) -> list[str]:
        """Fetch the page and collect advertised feed links. Failures yield no links."""
        try:
            async with asyncio.timeout(context.settings.page_timeout):
                response = await context.client.get(
                    url,
                    headers={"Accept": HTML_ACCEPT_HEADER},
                    timeout=context.settings.page_timeout,
                )
            response.raise_for_status()
        except (httpx.HTTPError, TimeoutError) as e:
            logger.debug("Page fetch failed: %s", e, extra={"url": url})
            return []

        content_type = response.headers.get("content-type", "").lower()
        if content_type and "html" not in content_type:
            return []

        # Resolve relative links against the final page URL
        return find_feed_links(response.content, str(response.url))
