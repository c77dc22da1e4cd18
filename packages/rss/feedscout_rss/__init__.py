"""
RSS processing package.

Provides feed parsing, feed link scanning, and URL normalization.
"""

from .html import find_feed_links, strip_html
from .normalize import host_matches, is_subdomain_of, normalize_feed_url
from .parser import FeedFormat, ParsedFeed, detect_format, parse_feed

__all__ = [
    "parse_feed",
    "detect_format",
    "ParsedFeed",
    "FeedFormat",
    "find_feed_links",
    "strip_html",
    "normalize_feed_url",
    "is_subdomain_of",
    "host_matches",
]
