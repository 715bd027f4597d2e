"""Moderator API routes."""

from fastapi import APIRouter, Depends

from sharenote.auth import get_admin_user
from sharenote.schemas.common import MessageResponse
from sharenote.services.moderation_service import ModerationService

router = APIRouter(prefix="/moderation", tags=["Moderation"])


@router.post("/contents/{content_id}/block", response_model=MessageResponse)
async def block_content(content_id: str, moderator_id: str = Depends(get_admin_user)):
    """
    Block a record. Blocked content is hidden from every shared surface, its owner included.
    """
    ModerationService().set_blocked(content_id, True, moderator_id)
    return MessageResponse(message="Content blocked")


@router.post("/contents/{content_id}/unblock", response_model=MessageResponse)
async def unblock_content(content_id: str, moderator_id: str = Depends(get_admin_user)):
    """
    Lift a block.
    """
    ModerationService().set_blocked(content_id, False, moderator_id)
    return MessageResponse(message="Content unblocked")
