"""Discovery listing of public content."""

from typing import List, Optional

from sharenote.config import EXPLORE_DEFAULT_LIMIT, EXPLORE_MAX_LIMIT
from sharenote.permissions import is_discoverable
from sharenote.repositories.content_repository import EXPLORE_ORDERINGS, ContentRepository
from sharenote.types import DiscoveryEntry
from sharenote.utils import utc_now


class ExploreService:
    def __init__(self):
        self.content_repo = ContentRepository()

    def list_public(self, sort: str = "recent", limit: Optional[int] = None) -> List[DiscoveryEntry]:
        """
        List discoverable records, newest first by default.

        Args:
            sort: "recent", "popular" or "name"; unknown values fall back to "recent"
            limit: Maximum entries, clamped to [1, EXPLORE_MAX_LIMIT]
        """
        if sort not in EXPLORE_ORDERINGS:
            sort = "recent"
        if limit is None:
            limit = EXPLORE_DEFAULT_LIMIT
        limit = max(1, min(limit, EXPLORE_MAX_LIMIT))

        now = utc_now()
        rows = self.content_repo.list_discoverable(now, sort, limit)
        return [
            DiscoveryEntry(
                content_id=record.content_id,
                name=record.title,
                content_type=record.content_type,
                slug=record.slug,
                language=record.language,
                size=record.size,
                access_count=record.access_count,
                owner_name=owner_name,
                created_at=record.created_at,
                updated_at=record.updated_at,
            )
            for record, owner_name in rows
            if is_discoverable(record, now)
        ]
