"""Content resolver: identifier lookup behind the access-control gate."""

from datetime import datetime
from typing import Optional

from common.logging_config import get_logger
from sharenote.exceptions import ContentNotFoundError
from sharenote.permissions import evaluate
from sharenote.repositories.content_repository import ContentRepository
from sharenote.repositories.user_repository import UserRepository
from sharenote.types import ContentRecord, ContentView

logger = get_logger(__name__)


class ResolverService:
    def __init__(self):
        self.content_repo = ContentRepository()
        self.user_repo = UserRepository()

    def authorize(
        self,
        identifier: str,
        viewer_id: Optional[str],
        now: Optional[datetime] = None,
    ) -> ContentRecord:
        """
        Look up a slug or share code and run the access gate on the result.

        Every shared surface dereferences identifiers through this method.

        Raises:
            ContentNotFoundError: If the record is missing, blocked, expired or forbidden
        """
        if not identifier:
            raise ContentNotFoundError()

        record = self.content_repo.find_by_identifier(identifier)
        if record is None:
            logger.debug("Identifier lookup missed")
            raise ContentNotFoundError()

        verdict = evaluate(record, viewer_id, now)
        if not verdict.allowed:
            logger.debug(
                f"Access denied [content_id={record.content_id}] [reason={verdict.reason.value}] "
                f"[viewer={viewer_id or 'anonymous'}]"
            )
            raise ContentNotFoundError()

        return record

    def resolve(self, identifier: str, viewer_id: Optional[str]) -> ContentView:
        """
        Resolve a slug or share code to a read projection and count the access.

        Args:
            identifier: Slug or share code from the request URL
            viewer_id: Authenticated user id, or None for anonymous viewers

        Returns:
            ContentView of the record

        Raises:
            ContentNotFoundError: For any unsuccessful resolution
        """
        record = self.authorize(identifier, viewer_id)
        self.content_repo.increment_access_count(record.content_id)
        record.access_count += 1

        logger.info(f"Resolved content [content_id={record.content_id}] [viewer={viewer_id or 'anonymous'}]")
        return self.build_view(record)

    def build_view(self, record: ContentRecord) -> ContentView:
        owner_name = None
        if record.owner_id is not None:
            owner = self.user_repo.get_by_user_id(record.owner_id)
            owner_name = owner.display_name if owner is not None else None

        return ContentView(
            content_id=record.content_id,
            title=record.title,
            body=record.body,
            language=record.language,
            content_type=record.content_type,
            size=record.size,
            slug=record.slug,
            permission=record.permission,
            access_count=record.access_count,
            owner_name=owner_name,
            created_at=record.created_at,
            updated_at=record.updated_at,
            expires_at=record.expires_at,
        )
