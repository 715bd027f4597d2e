"""Owner-facing content API routes."""

from fastapi import APIRouter, Depends, Query, status

from common.constants import SHARE_URL_PREFIX
from sharenote.auth import get_current_user, get_optional_viewer
from sharenote.exceptions import InvalidAPIKeyError
from sharenote.schemas.content import (
    ContentSummaryResponse,
    CreateContentRequest,
    DeleteContentResponse,
    ListChildrenResponse,
    OwnedContentResponse,
    SharedContentItem,
    SharedContentListResponse,
    ShareRequest,
    ShareResponse,
    UpdateContentRequest,
)
from sharenote.paths import normalize_record_path
from sharenote.services.content_service import ContentService
from sharenote.services.share_service import ShareService
from sharenote.types import ContentType

router = APIRouter(prefix="/contents", tags=["Contents"])


@router.post("", response_model=OwnedContentResponse, status_code=status.HTTP_201_CREATED)
async def create_content(
    request: CreateContentRequest,
    viewer_id: str = Depends(get_optional_viewer)
):
    """
    Create a file or folder. The record gets a slug and share code immediately.

    Anonymous callers may create files only; folders need an account.

    Raises:
        - 400: Invalid title, path, custom slug or request
        - 409: Custom slug taken or path already used
    """
    if viewer_id is None and request.content_type == ContentType.FOLDER:
        raise InvalidAPIKeyError("Creating folders requires an account")

    content_service = ContentService()
    record = content_service.create_content(
        owner_id=viewer_id,
        title=request.title,
        content_type=request.content_type,
        body=request.body,
        path=request.path,
        permission=request.permission,
        expires_at=request.expires_at,
        custom_slug=request.custom_slug,
    )
    return OwnedContentResponse.from_record(record)


@router.get("", response_model=ListChildrenResponse)
async def list_own_contents(
    path: str = Query("/", description="Directory in the caller's own tree"),
    current_user: str = Depends(get_current_user)
):
    """
    List the direct children of a directory in the caller's own tree.
    """
    content_service = ContentService()
    summaries = content_service.list_own(current_user, path)

    return ListChildrenResponse(
        path=normalize_record_path(path),
        items=[ContentSummaryResponse.from_summary(summary) for summary in summaries],
    )


@router.get("/shared", response_model=SharedContentListResponse)
async def list_shared_contents(current_user: str = Depends(get_current_user)):
    """
    List the caller's records that carry share identifiers, most recently updated first.
    """
    content_service = ContentService()
    records = content_service.list_shared(current_user)

    return SharedContentListResponse(items=[SharedContentItem.from_record(record) for record in records])


@router.get("/{content_id}", response_model=OwnedContentResponse)
async def get_content(content_id: str, current_user: str = Depends(get_current_user)):
    """
    Fetch one of the caller's own records, including its share identifiers.

    Raises:
        - 404: Record missing or owned by someone else
    """
    content_service = ContentService()
    record = content_service.get_own(content_id, current_user)

    return OwnedContentResponse.from_record(record)


@router.patch("/{content_id}", response_model=OwnedContentResponse)
async def update_content(
    content_id: str,
    request: UpdateContentRequest,
    current_user: str = Depends(get_current_user)
):
    """
    Edit title, body, permission, path or expiry. Send "expires_at": null to clear the expiry.
    """
    content_service = ContentService()

    changes = {
        "title": request.title,
        "body": request.body,
        "permission": request.permission,
        "path": request.path,
    }
    if "expires_at" in request.model_fields_set:
        changes["expires_at"] = request.expires_at

    record = content_service.update_content(content_id, current_user, **changes)
    return OwnedContentResponse.from_record(record)


@router.delete("/{content_id}", response_model=DeleteContentResponse)
async def delete_content(content_id: str, current_user: str = Depends(get_current_user)):
    """
    Delete a record. Deleting a folder removes everything below it.
    """
    content_service = ContentService()
    deleted_count = content_service.delete_content(content_id, current_user)

    return DeleteContentResponse(deleted_count=deleted_count)


@router.post("/{content_id}/share", response_model=ShareResponse)
async def share_content(
    content_id: str,
    request: ShareRequest,
    current_user: str = Depends(get_current_user)
):
    """
    Ensure the record has a slug and share code.

    Repeated calls return the same identifiers. is_public switches between
    public and unlisted when given; custom_slug renames the slug.

    Raises:
        - 400: Invalid custom slug
        - 404: Record missing or owned by someone else
        - 409: Custom slug already taken
    """
    share_service = ShareService()
    result = share_service.create_or_share(
        content_id,
        current_user,
        custom_slug=request.custom_slug,
        is_public=request.is_public,
    )

    return ShareResponse(
        slug=result.slug,
        share_code=result.share_code,
        permission=result.permission,
        slug_url=f"{SHARE_URL_PREFIX}{result.slug}",
        share_code_url=f"{SHARE_URL_PREFIX}{result.share_code}",
    )
