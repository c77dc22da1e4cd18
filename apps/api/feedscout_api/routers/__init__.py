"""
API routers.
"""

from . import comment_links, discover

__all__ = ["comment_links", "discover"]
