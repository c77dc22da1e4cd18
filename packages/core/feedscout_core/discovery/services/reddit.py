"""
Reddit discovery.

Builds the RSS endpoint for subreddit and user URLs and fetches subreddit
icons from the about.json API.
"""

import asyncio
import re
from urllib.parse import urlsplit

import httpx

from feedscout_core import get_logger
from feedscout_core.schemas import DiscoveredFeed
from feedscout_rss import host_matches

from ..base import DiscoveryContext, DiscoveryService

logger = get_logger(__name__)

# Subreddit names: 3-21 chars, usernames: 3-20 chars; letters, digits, _ and -
REDDIT_PATH_REGEX = re.compile(
    r"^/(?:r/(?P<subreddit>[A-Za-z0-9_-]{3,21})|(?:user|u)/(?P<username>[A-Za-z0-9_-]{3,20}))(?:/|$)"
)
REDDIT_ABOUT_URL = "https://www.reddit.com/r/{subreddit}/about.json"


class RedditDiscoveryService(DiscoveryService):
    """Discovery for reddit.com subreddit and user URLs."""

    priority = 10

    def can_handle(self, url: str) -> bool:
        try:
            hostname = urlsplit(url).hostname
        except ValueError:
            return False
        return host_matches(hostname, "reddit.com")

    async def discover(self, url: str, context: DiscoveryContext) -> list[DiscoveredFeed]:
        with context.telemetry.start_span(
            "Reddit Feed Discovery",
            op="feed.discovery.reddit",
            attributes={"url": url},
        ) as span:
            parts = urlsplit(url)
            match = REDDIT_PATH_REGEX.match(parts.path)
            if not match:
                span.set_status(False, "Not a subreddit or user URL")
                return []

            # Keep the caller's host (old.reddit.com stays old.reddit.com)
            base_url = f"{parts.scheme}://{parts.netloc}"
            subreddit = match.group("subreddit")
            username = match.group("username")

            if subreddit:
                feed_url = f"{base_url}/r/{subreddit}/.rss"
                span.set_attribute("feed_type", "subreddit")
                span.set_attribute("subreddit", subreddit)
            else:
                feed_url = f"{base_url}/user/{username}/.rss"
                span.set_attribute("feed_type", "user")
                span.set_attribute("username", username)

            discovered = await context.validate_feed(feed_url)
            if discovered is None:
                span.set_status(False, "Feed validation failed")
                return []

            span.set_status(True, "ok")
            span.set_attribute("feed_validated", True)

            if subreddit:
                icon_url = await self._get_subreddit_icon(subreddit, context)
                if icon_url:
                    span.set_attribute("icon_url", icon_url)
                    discovered = discovered.model_copy(update={"icon_url": icon_url})

            return [discovered]

    async def _get_subreddit_icon(self, subreddit: str, context: DiscoveryContext) -> str | None:
        """
        Fetch a subreddit icon from Reddit's about.json API.

        Best effort: any failure, including a timeout, returns None.
        """
        about_url = REDDIT_ABOUT_URL.format(subreddit=subreddit)
        try:
            async with asyncio.timeout(context.settings.icon_timeout):
                response = await context.client.get(
                    about_url,
                    headers={"Accept": "application/json"},
                    timeout=context.settings.icon_timeout,
                )
            if not response.is_success:
                return None
            data = response.json().get("data") or {}
        except (httpx.TimeoutException, TimeoutError):
            logger.warning(
                "Timeout fetching icon for r/%s",
                subreddit,
                extra={"subreddit": subreddit, "timeout": context.settings.icon_timeout},
            )
            return None
        except (httpx.HTTPError, ValueError, AttributeError) as e:
            logger.warning(
                "Failed to fetch icon for r/%s: %s",
                subreddit,
                e,
                extra={"subreddit": subreddit},
            )
            return None

        if not isinstance(data, dict):
            return None

        # community_icon is the modern icon, icon_img the legacy one
        icon_url = data.get("community_icon") or data.get("icon_img")
        if not icon_url or not isinstance(icon_url, str):
            return None
        # Icons come with signed query params that expire
        return icon_url.split("?")[0]
