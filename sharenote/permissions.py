"""Permission evaluation for shared content."""

from datetime import datetime
from typing import Optional

from sharenote.expiry import is_live
from sharenote.moderation import is_blocked
from sharenote.types import ContentRecord, DenyReason, Permission, Verdict


def evaluate(
    record: ContentRecord,
    viewer_id: Optional[str],
    now: Optional[datetime] = None,
) -> Verdict:
    """
    Decide whether a viewer may read a record through a shared surface.

    Checks run in a fixed order: moderation block, expiry, then the
    permission level. Pure function; callers act on the verdict.

    Args:
        record: Record being accessed
        viewer_id: Authenticated user id, or None for anonymous viewers
        now: Reference time for the expiry check

    Returns:
        Verdict.allow() or Verdict.deny(reason)
    """
    if is_blocked(record):
        return Verdict.deny(DenyReason.BLOCKED)

    if not is_live(record, now):
        return Verdict.deny(DenyReason.EXPIRED)

    permission = Permission(record.permission)

    if permission == Permission.PUBLIC:
        return Verdict.allow()
    if permission == Permission.UNLISTED:
        return Verdict.allow()
    if permission == Permission.PRIVATE:
        # Anonymous content has no owner, so it can never be read as private.
        if viewer_id is not None and record.owner_id is not None and viewer_id == record.owner_id:
            return Verdict.allow()
        return Verdict.deny(DenyReason.FORBIDDEN)

    raise ValueError(f"Unhandled permission level: {permission!r}")


def is_discoverable(record: ContentRecord, now: Optional[datetime] = None) -> bool:
    """
    Return True if the record may appear on listing and search surfaces.
    """
    return (
        Permission(record.permission) == Permission.PUBLIC
        and record.slug is not None
        and evaluate(record, None, now).allowed
    )
