"""
HTML helpers.

Feed link scanning and HTML-to-text conversion with BeautifulSoup.
"""

import re
from urllib.parse import urljoin

from bs4 import BeautifulSoup

FEED_LINK_TYPES: tuple[str, ...] = (
    "application/rss+xml",
    "application/atom+xml",
    "application/feed+json",
)

_WHITESPACE = re.compile(r"\s+")

# Elements that break text flow; inline elements (b, a, span...) join their neighbours
BLOCK_TAGS: frozenset[str] = frozenset(
    {
        "address", "article", "aside", "blockquote", "br", "dd", "div", "dl", "dt",
        "figcaption", "figure", "footer", "h1", "h2", "h3", "h4", "h5", "h6", "header",
        "hr", "li", "main", "nav", "ol", "p", "pre", "section", "table", "td", "th", "tr", "ul",
    }
)


def strip_html(text: str | None) -> str:
    """
    Convert an HTML fragment to plain text.

    Tags are removed, entities decoded and whitespace collapsed. Block-level
    elements are separated by a space; inline elements are not.

    Args:
        text: HTML fragment (or plain text).

    Returns:
        Plain text, empty string for empty input.
    """
    if not text:
        return ""
    if "<" not in text and "&" not in text:
        return _WHITESPACE.sub(" ", text).strip()
    soup = BeautifulSoup(text, "html.parser")
    for tag in soup.find_all(True):
        if tag.name not in BLOCK_TAGS:
            continue
        tag.insert_before(" ")
        tag.insert_after(" ")
    return _WHITESPACE.sub(" ", soup.get_text()).strip()


def find_feed_links(html: str | bytes, page_url: str) -> list[str]:
    """
    Find feed URLs advertised by an HTML page.

    Looks for ``<link rel="alternate">`` elements with a feed MIME type.

    Args:
        html: Page markup.
        page_url: URL of the page (used for relative link resolution).

    Returns:
        Absolute feed URLs in document order, without duplicates.
    """
    soup = BeautifulSoup(html, "lxml")

    feed_urls: list[str] = []
    for link in soup.find_all("link", href=True):
        link_type = (link.get("type") or "").split(";")[0].strip().lower()
        if link_type not in FEED_LINK_TYPES:
            continue

        rel = link.get("rel") or []
        if isinstance(rel, str):
            rel = rel.split()
        # Some sites omit rel; only reject links that declare something else.
        if rel and "alternate" not in [value.lower() for value in rel]:
            continue

        href = link["href"].strip()
        if not href:
            continue

        # Make absolute URL
        feed_url = urljoin(page_url, href)
        if feed_url not in feed_urls:
            feed_urls.append(feed_url)

    return feed_urls
