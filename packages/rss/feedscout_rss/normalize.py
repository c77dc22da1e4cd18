"""
URL normalization.

Produces identity keys for feed deduplication. The key is only ever compared,
never shown to users or requested over the network.
"""

from urllib.parse import parse_qsl, quote, urlsplit, urlunsplit

# Tracking parameters dropped from identity keys (compared case-insensitively).
# Any other ``utm_*`` key is dropped as well.
TRACKING_PARAMS: frozenset[str] = frozenset(
    {
        # UTM
        "utm_source",
        "utm_medium",
        "utm_campaign",
        "utm_term",
        "utm_content",
        # Social / ads
        "ref",
        "source",
        "fbclid",
        "gclid",
        "gclsrc",
        # Google Analytics
        "_ga",
        "_gid",
    }
)


def _is_tracking_param(key: str) -> bool:
    lowered = key.lower()
    return lowered in TRACKING_PARAMS or lowered.startswith("utm_")


def _lower_host(netloc: str) -> str:
    """Lowercase the host part of a netloc, keeping credentials and port as-is."""
    userinfo, sep, hostport = netloc.rpartition("@")
    if hostport.startswith("["):
        # IPv6 literal: [::1]:8080
        end = hostport.find("]")
        host, port = hostport[: end + 1], hostport[end + 1 :]
    else:
        host, colon, port = hostport.partition(":")
        port = colon + port
    return f"{userinfo}{sep}{host.lower()}{port}"


def normalize_feed_url(url: str) -> str:
    """
    Normalize a feed URL into a stable identity key.

    Steps:
    1. Lowercase the host (path case is significant and kept).
    2. Strip trailing slashes from the path, keeping a bare ``/``.
    3. Drop tracking query parameters.
    4. Sort the remaining parameters by key (case-insensitive) and re-encode
       them.

    Fragment, port and credentials are preserved. Input that cannot be
    parsed as an absolute URL is returned unchanged.

    Args:
        url: URL to normalize.

    Returns:
        Normalized URL string.

    Raises:
        TypeError: If ``url`` is not a string.

    Example:
        >>> normalize_feed_url("https://Example.com/feed/?utm_source=twitter")
        'https://example.com/feed'
    """
    if not isinstance(url, str):
        raise TypeError(f"URL must be a string, got {type(url).__name__}")

    try:
        parts = urlsplit(url)
        # Accessing .port validates it.
        parts.port
    except ValueError:
        return url

    if not parts.scheme or not parts.netloc:
        return url

    # All trailing slashes go, so a normalized key normalizes to itself
    path = parts.path.rstrip("/")
    if not path:
        # Matches WHATWG serialization of special schemes: https://host -> https://host/
        path = "/"

    params = [
        (key, value)
        for key, value in parse_qsl(parts.query, keep_blank_values=True)
        if not _is_tracking_param(key)
    ]
    # Alphabetical, case-insensitive; ties by exact key. sorted() is stable, so
    # repeated keys keep their relative order.
    params = sorted(params, key=lambda item: (item[0].lower(), item[0]))
    query = "&".join(f"{quote(key, safe='')}={quote(value, safe='')}" for key, value in params)

    return urlunsplit((parts.scheme, _lower_host(parts.netloc), path, query, parts.fragment))


def is_subdomain_of(hostname: str, domain: str) -> bool:
    """
    Check whether ``hostname`` is a strict subdomain of ``domain``.

    ``podcasts.apple.com`` is a subdomain of ``apple.com``; ``apple.com`` and
    ``evilapple.com`` are not.
    """
    hostname = hostname.lower().rstrip(".")
    domain = domain.lower().rstrip(".")
    return hostname.endswith("." + domain) and len(hostname) > len(domain) + 1


def host_matches(hostname: str | None, domain: str) -> bool:
    """Check whether ``hostname`` is ``domain`` itself or one of its subdomains."""
    if not hostname:
        return False
    hostname = hostname.lower().rstrip(".")
    return hostname == domain or is_subdomain_of(hostname, domain)
