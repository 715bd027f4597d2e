"""Moderation gate consulted before any owner-permission logic."""

from sharenote.types import ContentRecord


def is_blocked(record: ContentRecord) -> bool:
    """
    Return True if a moderator has blocked the record.

    A block overrides every permission level, including the owner's own access
    through shared surfaces.
    """
    return bool(record.is_blocked)
