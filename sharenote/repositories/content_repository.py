"""Content repository for database operations."""

import sqlite3
from datetime import datetime
from typing import Any, Dict, List, Optional, Set, Tuple

from common.logging_config import get_logger
from sharenote.database import get_db_connection
from sharenote.exceptions import IdentifierConflictError, PathConflictError
from sharenote.types import ContentRecord, ContentType, Permission
from sharenote.utils import from_iso, to_iso

logger = get_logger(__name__)

_CONTENT_COLUMNS = """
    content_id, owner_id, title, body, content_type, language, size, path, permission,
    slug, share_code, is_blocked, report_count, expires_at, access_count, created_at, updated_at
"""

_UPDATABLE_COLUMNS = frozenset({
    "title", "body", "language", "size", "path", "permission", "expires_at", "updated_at",
})

EXPLORE_ORDERINGS = {
    "recent": "c.created_at DESC",
    "popular": "c.access_count DESC, c.created_at DESC",
    "name": "c.title ASC",
}


def _row_to_record(row: sqlite3.Row) -> ContentRecord:
    return ContentRecord(
        content_id=row["content_id"],
        owner_id=row["owner_id"],
        title=row["title"],
        body=row["body"],
        content_type=ContentType(row["content_type"]),
        language=row["language"],
        size=row["size"],
        path=row["path"],
        permission=Permission(row["permission"]),
        slug=row["slug"],
        share_code=row["share_code"],
        is_blocked=bool(row["is_blocked"]),
        report_count=row["report_count"],
        expires_at=from_iso(row["expires_at"]),
        access_count=row["access_count"],
        created_at=from_iso(row["created_at"]),
        updated_at=from_iso(row["updated_at"]),
    )


def _translate_integrity_error(error: sqlite3.IntegrityError, slug: Optional[str], share_code: Optional[str], path: Optional[str]):
    """
    Map a unique index violation to the domain error for the offending column.
    """
    message = str(error)
    if "contents.slug" in message:
        return IdentifierConflictError("slug", slug)
    if "contents.share_code" in message:
        return IdentifierConflictError("share_code", share_code)
    if "contents.owner_id" in message or "contents.path" in message:
        return PathConflictError(f"A file or folder already exists at {path}")
    return error


class ContentRepository:
    @staticmethod
    def create_content(record: ContentRecord) -> ContentRecord:
        logger.debug(f"Creating content [content_id={record.content_id}] [path={record.path}]")
        with get_db_connection() as conn:
            cursor = conn.cursor()
            try:
                cursor.execute(
                    f"""
                    INSERT INTO contents ({_CONTENT_COLUMNS})
                    VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        record.content_id,
                        record.owner_id,
                        record.title,
                        record.body,
                        record.content_type.value,
                        record.language,
                        record.size,
                        record.path,
                        record.permission.value,
                        record.slug,
                        record.share_code,
                        int(record.is_blocked),
                        record.report_count,
                        to_iso(record.expires_at),
                        record.access_count,
                        to_iso(record.created_at),
                        to_iso(record.updated_at),
                    )
                )
                conn.commit()
            except sqlite3.IntegrityError as e:
                conn.rollback()
                raise _translate_integrity_error(e, record.slug, record.share_code, record.path) from e

        logger.info(f"Content created [content_id={record.content_id}] [type={record.content_type.value}]")
        return record

    @staticmethod
    def get_by_id(content_id: str) -> Optional[ContentRecord]:
        with get_db_connection() as conn:
            cursor = conn.cursor()
            cursor.execute(f"SELECT {_CONTENT_COLUMNS} FROM contents WHERE content_id = ?", (content_id,))
            row = cursor.fetchone()
            return _row_to_record(row) if row is not None else None

    @staticmethod
    def find_by_identifier(identifier: str) -> Optional[ContentRecord]:
        """
        Look up a record whose slug or share code equals identifier.
        """
        with get_db_connection() as conn:
            cursor = conn.cursor()
            cursor.execute(
                f"SELECT {_CONTENT_COLUMNS} FROM contents WHERE slug = ? OR share_code = ? LIMIT 1",
                (identifier, identifier)
            )
            row = cursor.fetchone()
            return _row_to_record(row) if row is not None else None

    @staticmethod
    def find_slugs_with_base(base: str) -> Set[str]:
        """
        Return the slug `base` and every slug of the form `base-...` already stored.
        """
        with get_db_connection() as conn:
            cursor = conn.cursor()
            prefix = f"{base}-"
            cursor.execute(
                "SELECT slug FROM contents WHERE slug = ? OR substr(slug, 1, ?) = ?",
                (base, len(prefix), prefix)
            )
            return {row["slug"] for row in cursor.fetchall()}

    @staticmethod
    def assign_identifiers(content_id: str, slug: str, share_code: str, updated_at: datetime) -> None:
        """
        Store a slug and, if the record has none yet, a share code.

        The unique indexes decide races between concurrent writers.

        Raises:
            IdentifierConflictError: If another record already holds the slug or share code
        """
        with get_db_connection() as conn:
            cursor = conn.cursor()
            try:
                cursor.execute(
                    """
                    UPDATE contents
                    SET slug = ?, share_code = COALESCE(share_code, ?), updated_at = ?
                    WHERE content_id = ?
                    """,
                    (slug, share_code, to_iso(updated_at), content_id)
                )
                conn.commit()
            except sqlite3.IntegrityError as e:
                conn.rollback()
                raise _translate_integrity_error(e, slug, share_code, None) from e

    @staticmethod
    def update_fields(content_id: str, fields: Dict[str, Any]) -> None:
        """
        Update owner-editable columns of a record.

        Raises:
            PathConflictError: If a path change collides with another record of the owner
        """
        unknown = set(fields) - _UPDATABLE_COLUMNS
        if unknown:
            raise ValueError(f"Columns not updatable: {sorted(unknown)}")
        if not fields:
            return

        values = []
        for column, value in fields.items():
            if isinstance(value, datetime):
                value = to_iso(value)
            elif isinstance(value, Permission):
                value = value.value
            values.append(value)

        assignments = ", ".join(f"{column} = ?" for column in fields)
        with get_db_connection() as conn:
            cursor = conn.cursor()
            try:
                cursor.execute(
                    f"UPDATE contents SET {assignments} WHERE content_id = ?",
                    values + [content_id]
                )
                conn.commit()
            except sqlite3.IntegrityError as e:
                conn.rollback()
                raise _translate_integrity_error(e, None, None, fields.get("path")) from e

    @staticmethod
    def increment_access_count(content_id: str) -> None:
        """
        Atomically add one to the access counter.
        """
        with get_db_connection() as conn:
            cursor = conn.cursor()
            cursor.execute(
                "UPDATE contents SET access_count = access_count + 1 WHERE content_id = ?",
                (content_id,)
            )
            conn.commit()

    @staticmethod
    def increment_report_count(content_id: str) -> None:
        with get_db_connection() as conn:
            cursor = conn.cursor()
            cursor.execute(
                "UPDATE contents SET report_count = report_count + 1 WHERE content_id = ?",
                (content_id,)
            )
            conn.commit()

    @staticmethod
    def set_blocked(content_id: str, blocked: bool) -> bool:
        with get_db_connection() as conn:
            cursor = conn.cursor()
            cursor.execute(
                "UPDATE contents SET is_blocked = ? WHERE content_id = ?",
                (int(blocked), content_id)
            )
            conn.commit()
            return cursor.rowcount > 0

    @staticmethod
    def find_by_owner_with_prefix(owner_id: str, prefix: str) -> List[ContentRecord]:
        """
        Fetch the owner's records whose path starts with prefix.

        instr() compares literally, so characters in prefix carry no pattern
        meaning.
        """
        with get_db_connection() as conn:
            cursor = conn.cursor()
            cursor.execute(
                f"SELECT {_CONTENT_COLUMNS} FROM contents WHERE owner_id = ? AND instr(path, ?) = 1",
                (owner_id, prefix)
            )
            return [_row_to_record(row) for row in cursor.fetchall()]

    @staticmethod
    def list_shared_by_owner(owner_id: str) -> List[ContentRecord]:
        with get_db_connection() as conn:
            cursor = conn.cursor()
            cursor.execute(
                f"""
                SELECT {_CONTENT_COLUMNS} FROM contents
                WHERE owner_id = ? AND share_code IS NOT NULL AND is_blocked = 0
                ORDER BY updated_at DESC
                """,
                (owner_id,)
            )
            return [_row_to_record(row) for row in cursor.fetchall()]

    @staticmethod
    def list_discoverable(now: datetime, sort: str, limit: int) -> List[Tuple[ContentRecord, str]]:
        """
        Fetch public, unblocked, live, slugged records with their owner's display name.
        """
        ordering = EXPLORE_ORDERINGS.get(sort, EXPLORE_ORDERINGS["recent"])
        columns = ", ".join(f"c.{column.strip()}" for column in _CONTENT_COLUMNS.split(","))
        with get_db_connection() as conn:
            cursor = conn.cursor()
            cursor.execute(
                f"""
                SELECT {columns}, COALESCE(u.display_name, u.username) AS owner_name
                FROM contents c
                JOIN users u ON u.user_id = c.owner_id
                WHERE c.permission = 'public'
                AND c.is_blocked = 0
                AND c.slug IS NOT NULL
                AND (c.expires_at IS NULL OR c.expires_at > ?)
                ORDER BY {ordering}
                LIMIT ?
                """,
                (to_iso(now), limit)
            )
            return [(_row_to_record(row), row["owner_name"]) for row in cursor.fetchall()]

    @staticmethod
    def delete_content(content_id: str, conn=None) -> bool:
        should_close = conn is None
        if conn is None:
            conn = get_db_connection().__enter__()

        try:
            cursor = conn.cursor()
            cursor.execute("DELETE FROM contents WHERE content_id = ?", (content_id,))
            if should_close:
                conn.commit()
            return cursor.rowcount > 0
        finally:
            if should_close:
                conn.close()

    @staticmethod
    def delete_descendants(owner_id: str, folder_path: str, conn=None) -> int:
        """
        Delete every record of the owner located below folder_path.
        """
        prefix = folder_path.rstrip("/") + "/"
        should_close = conn is None
        if conn is None:
            conn = get_db_connection().__enter__()

        try:
            cursor = conn.cursor()
            cursor.execute(
                "DELETE FROM contents WHERE owner_id = ? AND instr(path, ?) = 1 AND path != ?",
                (owner_id, prefix, folder_path)
            )
            if should_close:
                conn.commit()
            return cursor.rowcount
        finally:
            if should_close:
                conn.close()
