"""
Feed validator.

Fetches a candidate URL, parses it, and suppresses duplicates within one
discovery request.

Deduplication works on two identities:

- the normalized URL, both as requested and after redirects, so two entry
  paths that land on the same feed yield one result;
- the Atom feed ``id``, so mirrors of one Atom feed under unrelated URLs yield
  one result. RSS, RDF and JSON feeds have no reliable id and are
  deduplicated by URL only.

Concurrent calls: the event loop is single-threaded, so checking and
claiming a normalized URL happens without a suspension point in between.
A call whose normalized URL is already claimed by an in-flight validation
returns ``None`` immediately without fetching. Callers racing on the same
normalized identity therefore never both succeed, and the loser does no
network I/O.
"""

import asyncio
from urllib.parse import urlsplit

import httpx

from feedscout_core import get_logger
from feedscout_core.config import DiscoverySettings
from feedscout_core.errors import FeedValidationError
from feedscout_core.schemas import DiscoveredFeed
from feedscout_rss import normalize_feed_url, parse_feed, strip_html

logger = get_logger(__name__)

FEED_ACCEPT_HEADER = (
    "application/rss+xml, application/atom+xml, application/feed+json, "
    "application/xml, text/xml, */*"
)


class FeedValidator:
    """
    Feed validation bound to the deduplication state of one request.

    Calling the instance validates a URL and returns a ``DiscoveredFeed`` or
    ``None``; it never raises.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        settings: DiscoverySettings,
        seen_urls: set[str],
        seen_feed_ids: set[str],
    ) -> None:
        self._client = client
        self._settings = settings
        self.seen_urls = seen_urls
        self.seen_feed_ids = seen_feed_ids
        # Normalized input URLs with a validation currently running
        self._in_flight: set[str] = set()

    async def __call__(self, feed_url: str) -> DiscoveredFeed | None:
        try:
            normalized_url = normalize_feed_url(feed_url)
        except TypeError:
            logger.debug("Rejected non-string feed URL", extra={"feed_url": repr(feed_url)})
            return None

        if normalized_url in self.seen_urls:
            logger.debug("Feed URL already resolved", extra={"feed_url": feed_url})
            return None
        if normalized_url in self._in_flight:
            logger.debug("Feed URL already being validated", extra={"feed_url": feed_url})
            return None

        self._in_flight.add(normalized_url)
        try:
            return await self._validate(feed_url, normalized_url)
        except FeedValidationError as e:
            logger.debug("Feed candidate rejected: %s", e, extra={"feed_url": feed_url})
            return None
        except Exception as e:
            logger.debug(
                "Feed candidate failed: %s",
                e,
                exc_info=True,
                extra={"feed_url": feed_url},
            )
            return None
        finally:
            self._in_flight.discard(normalized_url)
            self.seen_urls.add(normalized_url)

    async def _validate(self, feed_url: str, normalized_url: str) -> DiscoveredFeed | None:
        if urlsplit(feed_url).scheme not in ("http", "https"):
            raise FeedValidationError(f"Unsupported URL scheme: {feed_url}")

        timeout = self._settings.feed_timeout
        try:
            # httpx timeouts bound each connect/read; this bounds the whole fetch
            async with asyncio.timeout(timeout):
                async with self._client.stream(
                    "GET",
                    feed_url,
                    headers={"Accept": FEED_ACCEPT_HEADER},
                    timeout=timeout,
                ) as response:
                    if not response.is_success:
                        raise FeedValidationError(f"HTTP {response.status_code}")

                    # Resolve redirect identity before reading the body
                    normalized_final = normalize_feed_url(str(response.url))
                    if normalized_final != normalized_url:
                        if (
                            normalized_final in self.seen_urls
                            or normalized_final in self._in_flight
                        ):
                            logger.debug(
                                "Redirect target already resolved",
                                extra={"feed_url": feed_url, "final_url": str(response.url)},
                            )
                            return None
                        self.seen_urls.add(normalized_final)
                    self.seen_urls.add(normalized_url)

                    content = await response.aread()
        except TimeoutError as e:
            raise FeedValidationError(f"Feed fetch exceeded {timeout}s") from e
        except httpx.HTTPError as e:
            raise FeedValidationError(f"Failed to fetch feed: {e}") from e

        try:
            parsed = parse_feed(content)
        except ValueError as e:
            raise FeedValidationError(str(e)) from e

        if parsed.format == "atom" and parsed.feed_id:
            if parsed.feed_id in self.seen_feed_ids:
                logger.debug(
                    "Atom feed id already resolved",
                    extra={"feed_url": feed_url, "feed_id": parsed.feed_id},
                )
                return None
            self.seen_feed_ids.add(parsed.feed_id)

        title = strip_html(parsed.title) or self._settings.untitled_feed_title
        description = strip_html(parsed.description) or None

        # Keep the URL the caller asked for, not the redirect target
        return DiscoveredFeed(
            url=feed_url,
            title=title,
            type=parsed.format,
            description=description,
        )
