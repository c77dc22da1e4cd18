"""
Discover router.

Feed discovery endpoint.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from feedscout_core.discovery import DiscoveryRegistry
from feedscout_core.errors import DiscoveryFailedError, NoFeedsFoundError
from feedscout_core.schemas import DiscoveredFeed, DiscoverFeedRequest

from ..dependencies import get_discovery_registry

router = APIRouter()


@router.post("")
async def discover_feeds(
    data: DiscoverFeedRequest,
    registry: Annotated[DiscoveryRegistry, Depends(get_discovery_registry)],
) -> list[DiscoveredFeed]:
    """
    Discover feeds from a URL.

    Args:
        data: Feed discovery request with URL.
        registry: Discovery registry.

    Returns:
        Discovered feeds.

    Raises:
        HTTPException: 404 if no feeds were found, 502 if discovery failed.
    """
    try:
        return await registry.discover(str(data.url))
    except NoFeedsFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from None
    except DiscoveryFailedError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e)) from None
