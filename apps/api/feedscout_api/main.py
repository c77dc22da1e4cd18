"""
FeedScout API - FastAPI application entry point.

This module initializes the FastAPI application and configures
routers and lifecycle events.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from feedscout_core import __version__, get_logger, init_logging
from feedscout_core.config import get_settings
from feedscout_core.telemetry import init_sentry

from .routers import comment_links, discover

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifecycle manager.

    Configures logging and telemetry on startup.

    Args:
        app: The FastAPI application instance.

    Yields:
        None during application runtime.
    """
    settings = get_settings()
    init_logging(settings.log_level, json_output=settings.log_json)
    app.state.telemetry = init_sentry(
        settings.sentry_dsn,
        environment=settings.sentry_environment,
        traces_sample_rate=settings.sentry_traces_sample_rate,
    )
    logger.info("Starting FeedScout API v%s", __version__)

    yield

    logger.info("Shutting down FeedScout API")


def create_app() -> FastAPI:
    """
    Create the FastAPI application.

    Returns:
        Configured application instance.
    """
    app = FastAPI(
        title="FeedScout API",
        description="FeedScout - feed discovery and validation API",
        version=__version__,
        lifespan=lifespan,
        docs_url="/api/docs",
        redoc_url=None,
    )

    # Register API routers
    app.include_router(discover.router, prefix="/api/discover", tags=["Discovery"])
    app.include_router(comment_links.router, prefix="/api/comment-link", tags=["Comment Links"])

    @app.get("/api/health")
    async def health_check() -> dict[str, str]:
        """
        Health check endpoint.

        Returns:
            Dictionary containing service status and version.
        """
        return {"status": "healthy", "version": __version__}

    return app


app = create_app()
