"""
FeedScout Core Package.

This package contains the feed discovery engine, comment link extraction,
and shared schemas for the FeedScout application.
"""

__version__ = "0.1.0"

from .logging_config import init_logging, get_logger

__all__ = ["init_logging", "get_logger"]
