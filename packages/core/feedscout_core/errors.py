"""
Feed discovery errors.

``NoFeedsFoundError`` is the expected outcome for most websites and is kept
apart from ``DiscoveryFailedError``, which signals that every applicable
discovery service crashed.
"""


class FeedDiscoveryError(Exception):
    """Base class for feed discovery failures."""

    def __init__(self, message: str, url: str) -> None:
        super().__init__(message)
        self.url = url


class NoFeedsFoundError(FeedDiscoveryError):
    """No discovery service found a valid feed for the URL."""

    def __init__(self, url: str) -> None:
        super().__init__("No RSS or Atom feeds found on this website", url)


class DiscoveryFailedError(FeedDiscoveryError):
    """Every discovery service that matched the URL raised an exception."""

    def __init__(self, url: str, failed_services: list[str]) -> None:
        super().__init__(
            f"Feed discovery failed for {url}: all services errored ({', '.join(failed_services)})",
            url,
        )
        self.failed_services = failed_services


class FeedValidationError(ValueError):
    """A candidate URL could not be fetched or parsed as a feed."""
