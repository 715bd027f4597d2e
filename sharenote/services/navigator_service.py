"""Navigator service for browsing shared folders."""

from typing import List, Optional

from common.logging_config import get_logger
from sharenote.exceptions import ContentNotFoundError
from sharenote.paths import is_direct_child, is_within, join_target_path, normalize_relative_path, sort_key
from sharenote.permissions import evaluate
from sharenote.repositories.content_repository import ContentRepository
from sharenote.services.content_service import to_summary
from sharenote.services.resolver_service import ResolverService
from sharenote.types import ContentRecord, ContentSummary, ContentType, ContentView
from sharenote.utils import utc_now

logger = get_logger(__name__)


class NavigatorService:
    def __init__(self):
        self.content_repo = ContentRepository()
        self.resolver = ResolverService()

    def _authorize_folder(self, folder_identifier: str, viewer_id: Optional[str]) -> ContentRecord:
        folder = self.resolver.authorize(folder_identifier, viewer_id)
        if folder.content_type != ContentType.FOLDER:
            logger.debug(f"Identifier does not name a folder [content_id={folder.content_id}]")
            raise ContentNotFoundError()
        return folder

    def list_children(
        self,
        folder_identifier: str,
        relative_path: Optional[str],
        viewer_id: Optional[str],
    ) -> List[ContentSummary]:
        """
        List the direct children of a path inside a shared folder.

        Args:
            folder_identifier: Slug or share code of the shared folder
            relative_path: Path relative to the folder ("/" for its root)
            viewer_id: Authenticated user id, or None for anonymous viewers

        Returns:
            Summaries sorted folders first, then by name. Empty for an empty directory.

        Raises:
            InvalidPathError: If relative_path contains '..'
            ContentNotFoundError: If the folder is missing or not visible to the viewer
        """
        relative_path = normalize_relative_path(relative_path)
        folder = self._authorize_folder(folder_identifier, viewer_id)

        target_path = join_target_path(folder.path, relative_path)
        candidates = self.content_repo.find_by_owner_with_prefix(folder.owner_id, target_path)

        now = utc_now()
        children = []
        for candidate in candidates:
            if candidate.content_id == folder.content_id:
                continue
            if not is_direct_child(target_path, candidate.path):
                continue
            if not evaluate(candidate, viewer_id, now).allowed:
                continue
            children.append(to_summary(candidate))

        logger.debug(
            f"Listed {len(children)} children [folder_id={folder.content_id}] [target={target_path}]"
        )
        return sorted(children, key=sort_key)

    def open_file(
        self,
        folder_identifier: str,
        content_id: str,
        viewer_id: Optional[str],
    ) -> ContentView:
        """
        Read a file located anywhere below a shared folder.

        The access is counted on the folder.

        Raises:
            ContentNotFoundError: If the folder or file is not visible to the viewer
        """
        folder = self._authorize_folder(folder_identifier, viewer_id)

        record = self.content_repo.get_by_id(content_id)
        if (
            record is None
            or record.content_type != ContentType.FILE
            or record.owner_id != folder.owner_id
            or not is_within(folder.path, record.path)
            or not evaluate(record, viewer_id).allowed
        ):
            raise ContentNotFoundError()

        self.content_repo.increment_access_count(folder.content_id)
        logger.info(f"Opened file in shared folder [folder_id={folder.content_id}] [content_id={content_id}]")
        return self.resolver.build_view(record)
