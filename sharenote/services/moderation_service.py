"""Moderation surface: abuse reports and blocking."""

from typing import Optional

from common.logging_config import get_logger
from sharenote.exceptions import ContentNotFoundError
from sharenote.repositories.content_repository import ContentRepository
from sharenote.services.resolver_service import ResolverService

logger = get_logger(__name__)


class ModerationService:
    def __init__(self):
        self.content_repo = ContentRepository()
        self.resolver = ResolverService()

    def report(self, identifier: str, viewer_id: Optional[str]) -> None:
        """
        Record an abuse report against content the viewer can see.
        """
        record = self.resolver.authorize(identifier, viewer_id)
        self.content_repo.increment_report_count(record.content_id)
        logger.warning(f"Content reported [content_id={record.content_id}] [reporter={viewer_id or 'anonymous'}]")

    def set_blocked(self, content_id: str, blocked: bool, moderator_id: str) -> None:
        if not self.content_repo.set_blocked(content_id, blocked):
            raise ContentNotFoundError()
        action = "blocked" if blocked else "unblocked"
        logger.warning(f"Content {action} [content_id={content_id}] [moderator={moderator_id}]")
