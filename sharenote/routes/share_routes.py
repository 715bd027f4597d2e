"""Shared content API routes: resolution, folder browsing and discovery."""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from sharenote.auth import get_optional_viewer
from sharenote.paths import normalize_relative_path
from sharenote.schemas.common import ErrorResponse, MessageResponse
from sharenote.schemas.content import (
    ContentSummaryResponse,
    ContentViewResponse,
    DiscoveryEntryResponse,
    ExploreResponse,
    ListChildrenResponse,
)
from sharenote.services.explore_service import ExploreService
from sharenote.services.moderation_service import ModerationService
from sharenote.services.navigator_service import NavigatorService
from sharenote.services.resolver_service import ResolverService

router = APIRouter(tags=["Sharing"])


@router.get("/share/{identifier}", response_model=ContentViewResponse, responses={404: {"model": ErrorResponse}})
async def resolve_share(identifier: str, viewer_id: Optional[str] = Depends(get_optional_viewer)):
    """
    Resolve a slug or a share code to shared content.

    Both identifier forms go through the same resolver. Missing, blocked,
    expired and private content all answer with the same 404.
    """
    resolver = ResolverService()
    view = resolver.resolve(identifier, viewer_id)

    return ContentViewResponse.from_view(view)


@router.post("/share/{identifier}/report", response_model=MessageResponse, status_code=status.HTTP_202_ACCEPTED)
async def report_share(identifier: str, viewer_id: Optional[str] = Depends(get_optional_viewer)):
    """
    Report shared content for moderator review.
    """
    moderation_service = ModerationService()
    moderation_service.report(identifier, viewer_id)

    return MessageResponse(message="Report received")


@router.get(
    "/shared-folder/{identifier}/contents",
    response_model=ListChildrenResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}}
)
async def list_shared_folder(
    identifier: str,
    path: str = Query("/", description="Path relative to the shared folder"),
    viewer_id: Optional[str] = Depends(get_optional_viewer)
):
    """
    List the direct children of a path inside a shared folder.

    Raises:
        - 400: Path contains '..'
        - 404: Folder not found or not visible
    """
    navigator = NavigatorService()
    summaries = navigator.list_children(identifier, path, viewer_id)

    return ListChildrenResponse(
        path=normalize_relative_path(path),
        items=[ContentSummaryResponse.from_summary(summary) for summary in summaries],
    )


@router.get("/shared-folder/{identifier}/file/{content_id}", response_model=ContentViewResponse)
async def open_shared_folder_file(
    identifier: str,
    content_id: str,
    viewer_id: Optional[str] = Depends(get_optional_viewer)
):
    """
    Read a file located inside a shared folder.
    """
    navigator = NavigatorService()
    view = navigator.open_file(identifier, content_id, viewer_id)

    return ContentViewResponse.from_view(view)


@router.get("/explore", response_model=ExploreResponse)
async def explore(
    sort: str = Query("recent", description="recent, popular or name"),
    limit: Optional[int] = Query(None, ge=1)
):
    """
    List public content for discovery. Unlisted and private content never appears here.
    """
    explore_service = ExploreService()
    entries = explore_service.list_public(sort, limit)

    return ExploreResponse(items=[DiscoveryEntryResponse.from_entry(entry) for entry in entries])
