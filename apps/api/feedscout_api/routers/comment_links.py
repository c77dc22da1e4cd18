"""
Comment link router.

Discussion URL extraction for a single feed item.
"""

from typing import Annotated

from fastapi import APIRouter, Depends

from feedscout_core.comment_links import CommentLinkRegistry
from feedscout_core.schemas import CommentLinkRequest, CommentLinkResponse

from ..dependencies import get_comment_link_registry

router = APIRouter()


@router.post("", response_model=CommentLinkResponse)
async def extract_comment_link(
    data: CommentLinkRequest,
    registry: Annotated[CommentLinkRegistry, Depends(get_comment_link_registry)],
) -> CommentLinkResponse:
    """Extract the comment link of a feed item."""
    return CommentLinkResponse(url=registry.extract(data.item))
