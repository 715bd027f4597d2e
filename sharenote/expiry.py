"""Time-based expiry policy."""

from datetime import datetime
from typing import Optional

from sharenote.types import ContentRecord
from sharenote.utils import ensure_utc, utc_now


def is_live(record: ContentRecord, now: Optional[datetime] = None) -> bool:
    """
    Check whether a record is still within its lifetime.

    The lifetime is the half-open interval [created_at, expires_at): a record
    expiring exactly at `now` is already expired.

    Args:
        record: Record to check
        now: Reference time, defaults to the current UTC time

    Returns:
        True if expires_at is unset or lies strictly after now
    """
    if record.expires_at is None:
        return True
    now = ensure_utc(now) if now is not None else utc_now()
    return ensure_utc(record.expires_at) > now
