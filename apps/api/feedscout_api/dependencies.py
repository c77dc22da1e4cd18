"""
FastAPI dependencies.

Composition root for the discovery and comment link registries.
"""

from typing import Annotated

from fastapi import Depends, Request

from feedscout_core.comment_links import CommentLinkRegistry, create_default_comment_registry
from feedscout_core.config import DiscoverySettings, get_settings
from feedscout_core.discovery import DiscoveryRegistry, create_default_registry
from feedscout_core.telemetry import NoopTelemetry, TelemetryAdapter


def get_telemetry(request: Request) -> TelemetryAdapter:
    """Get the telemetry adapter configured at startup (no-op before startup)."""
    return getattr(request.app.state, "telemetry", None) or NoopTelemetry()


def get_discovery_registry(
    telemetry: Annotated[TelemetryAdapter, Depends(get_telemetry)],
    settings: Annotated[DiscoverySettings, Depends(get_settings)],
) -> DiscoveryRegistry:
    """Get a discovery registry with the default services."""
    return create_default_registry(telemetry=telemetry, settings=settings)


def get_comment_link_registry() -> CommentLinkRegistry:
    """Get a comment link registry with the default extractors."""
    return create_default_comment_registry()
