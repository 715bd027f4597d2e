"""Content service for owner-facing create, update, delete and listing."""

from datetime import datetime
from typing import Dict, Any, List, Optional

from common.logging_config import get_logger
from sharenote.database import get_db_connection
from sharenote.exceptions import (
    ContentNotFoundError,
    IdentifierConflictError,
    InvalidContentError,
    InvalidPathError,
    PathConflictError,
)
from sharenote.paths import (
    ROOT_PATH,
    is_direct_child,
    join_target_path,
    normalize_record_path,
    sort_key,
)
from sharenote.repositories.content_repository import ContentRepository
from sharenote.services.share_service import ShareService
from sharenote.types import ContentRecord, ContentSummary, ContentType, Permission
from sharenote.utils import body_size, ensure_utc, generate_uuid, language_for_title, utc_now

logger = get_logger(__name__)

_UNSET = object()


def to_summary(record: ContentRecord) -> ContentSummary:
    return ContentSummary(
        content_id=record.content_id,
        name=record.title,
        content_type=record.content_type,
        size=record.size,
        created_at=record.created_at,
        updated_at=record.updated_at,
        path=record.path,
    )


class ContentService:
    def __init__(self):
        self.content_repo = ContentRepository()
        self.share_service = ShareService()

    def create_content(
        self,
        owner_id: Optional[str],
        title: str,
        content_type: ContentType = ContentType.FILE,
        body: str = "",
        path: Optional[str] = None,
        permission: Optional[Permission] = None,
        expires_at: Optional[datetime] = None,
        custom_slug: Optional[str] = None,
    ) -> ContentRecord:
        """
        Create a record and give it a slug and share code in the same write.

        Args:
            owner_id: Owner's user id, None for anonymous content
            title: Title, also the source of the slug
            content_type: File or folder
            body: Text payload; must be empty for folders
            path: Location in the owner's tree; defaults to "/<slug>"
            permission: Initial permission level; private for owners and
                unlisted for anonymous content when omitted
            expires_at: Optional expiry timestamp, must lie in the future
            custom_slug: Optional owner-chosen slug

        Returns:
            The stored record

        Raises:
            InvalidContentError: If the request is inconsistent
            InvalidTitleError: If the title cannot produce a slug
            InvalidCustomSlugError, SlugTakenError: For unusable custom slugs
            PathConflictError: If the owner already has a record at path
        """
        title = (title or "").strip()
        if not title:
            raise InvalidContentError("Title is required")

        content_type = ContentType(content_type)
        if permission is None:
            permission = Permission.PRIVATE if owner_id is not None else Permission.UNLISTED
        permission = Permission(permission)
        if owner_id is None and permission == Permission.PRIVATE:
            raise InvalidContentError("Anonymous content cannot be private")
        body = body or ""

        if content_type == ContentType.FOLDER:
            if owner_id is None:
                raise InvalidContentError("Anonymous users cannot create folders")
            if body:
                raise InvalidContentError("Folders cannot have a body")

        derive_path = path is None
        path = normalize_record_path(path)
        if not derive_path and path == ROOT_PATH and content_type == ContentType.FILE:
            raise InvalidPathError("Files cannot be stored at the root path")

        now = utc_now()
        expires_at = ensure_utc(expires_at)
        if expires_at is not None and expires_at <= now:
            raise InvalidContentError("Expiry must lie in the future")

        record = ContentRecord(
            content_id=generate_uuid(),
            owner_id=owner_id,
            title=title,
            body=body,
            content_type=content_type,
            path=path,
            permission=permission,
            created_at=now,
            updated_at=now,
            language=language_for_title(title) if content_type == ContentType.FILE else "plaintext",
            size=body_size(body),
            expires_at=expires_at,
        )

        def write(slug: str, share_code: str) -> None:
            record.slug = slug
            record.share_code = share_code
            if derive_path:
                record.path = "/" + slug
            try:
                self.content_repo.create_content(record)
            except PathConflictError as e:
                if not derive_path or custom_slug:
                    raise
                # The path follows the generated slug, so try the next suffix
                raise IdentifierConflictError("slug", slug) from e

        if custom_slug:
            self.share_service.store_custom_slug(custom_slug, write)
        else:
            self.share_service.store_generated_slug(title, write)

        logger.info(
            f"Created {content_type.value} [content_id={record.content_id}] "
            f"[owner_id={owner_id or 'anonymous'}] [slug={record.slug}]"
        )
        return record

    def get_own(self, content_id: str, owner_id: str) -> ContentRecord:
        record = self.content_repo.get_by_id(content_id)
        if record is None or record.owner_id is None or record.owner_id != owner_id:
            raise ContentNotFoundError()
        return record

    def update_content(
        self,
        content_id: str,
        owner_id: str,
        title: Optional[str] = None,
        body: Optional[str] = None,
        permission: Optional[Permission] = None,
        path: Optional[str] = None,
        expires_at: Any = _UNSET,
    ) -> ContentRecord:
        """
        Apply owner edits. The slug and share code never change here.

        Pass expires_at=None to clear the expiry; omit it to leave it alone.
        """
        record = self.get_own(content_id, owner_id)
        fields: Dict[str, Any] = {}

        if title is not None:
            title = title.strip()
            if not title:
                raise InvalidContentError("Title is required")
            fields["title"] = title
            if record.content_type == ContentType.FILE:
                fields["language"] = language_for_title(title)

        if body is not None:
            if record.is_folder:
                raise InvalidContentError("Folders cannot have a body")
            fields["body"] = body
            fields["size"] = body_size(body)

        if permission is not None:
            fields["permission"] = Permission(permission)

        if path is not None:
            new_path = normalize_record_path(path)
            if new_path != record.path:
                if record.is_folder:
                    raise InvalidContentError("Folders cannot be moved")
                if new_path == ROOT_PATH:
                    raise InvalidPathError("Files cannot be stored at the root path")
                fields["path"] = new_path

        if expires_at is not _UNSET:
            expires_at = ensure_utc(expires_at)
            if expires_at is not None and expires_at <= utc_now():
                raise InvalidContentError("Expiry must lie in the future")
            fields["expires_at"] = expires_at

        if not fields:
            return record

        fields["updated_at"] = utc_now()
        self.content_repo.update_fields(content_id, fields)
        logger.info(f"Updated content [content_id={content_id}] fields={sorted(fields)}")
        return self.content_repo.get_by_id(content_id)

    def delete_content(self, content_id: str, owner_id: str) -> int:
        """
        Hard-delete a record; deleting a folder also removes everything below it.

        Returns:
            Number of records removed
        """
        record = self.get_own(content_id, owner_id)

        with get_db_connection() as conn:
            try:
                removed = 0
                if record.is_folder:
                    removed += self.content_repo.delete_descendants(owner_id, record.path, conn=conn)
                if self.content_repo.delete_content(content_id, conn=conn):
                    removed += 1
                conn.commit()
            except Exception:
                conn.rollback()
                raise

        logger.info(f"Deleted {removed} record(s) [content_id={content_id}]")
        return removed

    def list_own(self, owner_id: str, path: Optional[str] = None) -> List[ContentSummary]:
        """
        Owner view of the direct children of a path in their own tree.

        Unlike shared folder browsing this is not filtered by permission,
        expiry or moderation state.
        """
        directory = normalize_record_path(path)
        target = join_target_path(ROOT_PATH, directory)
        candidates = self.content_repo.find_by_owner_with_prefix(owner_id, target)
        summaries = [
            to_summary(record)
            for record in candidates
            if record.path != directory and is_direct_child(target, record.path)
        ]
        return sorted(summaries, key=sort_key)

    def list_shared(self, owner_id: str) -> List[ContentRecord]:
        return self.content_repo.list_shared_by_owner(owner_id)
