"""
Feed parser.

Parses RSS, RDF and Atom feeds using feedparser, and JSON Feed documents
directly, into a single structure with an explicit format discriminator.
"""

import codecs
import io
import json
from typing import Any, Literal

import feedparser
from feedparser import FeedParserDict

FeedFormat = Literal["rss", "atom", "rdf", "json"]

# feedparser version prefixes -> format discriminator
_VERSION_FORMATS: tuple[tuple[str, FeedFormat], ...] = (
    ("atom", "atom"),
    ("rss090", "rdf"),
    ("rss10", "rdf"),
    ("rss", "rss"),
    ("cdf", "rss"),
)

_JSON_FEED_MARKER = "jsonfeed.org/version/"


class ParsedFeed:
    """Parsed feed metadata."""

    def __init__(
        self,
        format: FeedFormat,
        title: str,
        description: str,
        site_url: str,
        feed_id: str | None = None,
        icon_url: str | None = None,
        entries: list[dict[str, Any]] | None = None,
    ):
        self.format = format
        self.title = title
        self.description = description
        self.site_url = site_url
        self.feed_id = feed_id
        self.icon_url = icon_url
        self.entries = entries or []

    @classmethod
    def from_feedparser(cls, data: FeedParserDict, format: FeedFormat) -> "ParsedFeed":
        """
        Build from feedparser output.

        Args:
            data: Parsed feed data from feedparser.
            format: Format discriminator derived from ``data.version``.
        """
        feed_info = data.get("feed", {})
        return cls(
            format=format,
            title=feed_info.get("title", ""),
            # feedparser aliases Atom <subtitle> to description
            description=feed_info.get("description", "") or feed_info.get("subtitle", ""),
            site_url=feed_info.get("link", ""),
            feed_id=feed_info.get("id") or None,
            icon_url=feed_info.get("icon") or feed_info.get("logo"),
            entries=list(data.get("entries", [])),
        )

    @classmethod
    def from_json_feed(cls, data: dict[str, Any]) -> "ParsedFeed":
        """Build from a decoded JSON Feed document."""
        return cls(
            format="json",
            title=str(data.get("title") or ""),
            description=str(data.get("description") or ""),
            site_url=str(data.get("home_page_url") or ""),
            icon_url=data.get("icon") or data.get("favicon"),
            entries=[item for item in data.get("items", []) if isinstance(item, dict)],
        )


def detect_format(version: str) -> FeedFormat | None:
    """Map a feedparser ``version`` string to a format discriminator."""
    for prefix, feed_format in _VERSION_FORMATS:
        if version.startswith(prefix):
            return feed_format
    return None


def _parse_json_feed(content: bytes) -> ParsedFeed:
    try:
        data = json.loads(content)
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise ValueError(f"Failed to parse feed: invalid JSON ({e})") from e

    if not isinstance(data, dict) or _JSON_FEED_MARKER not in str(data.get("version", "")):
        raise ValueError("Failed to parse feed: JSON document is not a JSON Feed")

    return ParsedFeed.from_json_feed(data)


def parse_feed(content: bytes | str) -> ParsedFeed:
    """
    Parse a syndication feed.

    Args:
        content: Raw feed document.

    Returns:
        Parsed feed data.

    Raises:
        ValueError: If the content is not a recognizable feed.
    """
    if isinstance(content, str):
        content = content.encode("utf-8")

    head = content.removeprefix(codecs.BOM_UTF8).lstrip()
    if head[:1] == b"{":
        return _parse_json_feed(head)

    # A stream keeps feedparser from treating the document as a URL or path.
    data = feedparser.parse(io.BytesIO(content))

    feed_format = detect_format(data.get("version", "") or "")
    if feed_format is None:
        raise ValueError(
            f"Failed to parse feed: {data.get('bozo_exception', 'Unrecognized feed format')}"
        )

    if data.get("bozo", False) and not data.get("entries") and not data.get("feed"):
        # Feed has errors and nothing usable
        raise ValueError(f"Failed to parse feed: {data.get('bozo_exception', 'Unknown error')}")

    return ParsedFeed.from_feedparser(data, feed_format)
