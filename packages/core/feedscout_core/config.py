"""
Discovery configuration.

This module provides configuration settings for feed discovery loaded from
environment variables.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Find .env file in project root
_env_file = Path(__file__).parent.parent.parent.parent / ".env"


class DiscoverySettings(BaseSettings):
    """
    Feed discovery configuration from environment variables.

    All settings are prefixed with FEEDSCOUT_ in environment.
    """

    model_config = SettingsConfigDict(
        env_prefix="FEEDSCOUT_",
        env_file=str(_env_file) if _env_file.exists() else None,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # HTTP client
    user_agent: str = "FeedScout/1.0 (+https://github.com/feedscout/feedscout)"
    feed_timeout: float = Field(default=10.0, gt=0, le=120)  # Feed validation fetch
    icon_timeout: float = Field(default=5.0, gt=0, le=60)  # Community icon side fetch
    lookup_timeout: float = Field(default=10.0, gt=0, le=120)  # Podcast directory lookup
    page_timeout: float = Field(default=10.0, gt=0, le=120)  # HTML page fetch

    # Discovery behavior
    itunes_country: str | None = None  # e.g. "us"; None uses the store default
    standard_exhaustive: bool = True  # False stops at the first stage that finds feeds
    untitled_feed_title: str = "Untitled Feed"

    # Logging
    log_level: str = "INFO"
    log_json: bool = False

    # Sentry (telemetry is disabled when dsn is empty)
    sentry_dsn: str | None = None
    sentry_environment: str | None = None
    sentry_traces_sample_rate: float = Field(default=0.1, ge=0.0, le=1.0)


@lru_cache
def get_settings() -> DiscoverySettings:
    """
    Get cached discovery settings.

    Returns:
        Settings instance shared by the process.
    """
    return DiscoverySettings()
