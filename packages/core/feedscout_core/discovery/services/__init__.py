"""
Discovery service implementations.
"""

from .apple import ApplePodcastDiscoveryService
from .reddit import RedditDiscoveryService
from .standard import StandardDiscoveryService

__all__ = [
    "ApplePodcastDiscoveryService",
    "RedditDiscoveryService",
    "StandardDiscoveryService",
]
