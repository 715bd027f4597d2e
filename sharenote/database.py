"""Database schema and connection management for SQLite."""

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Generator, Optional

from sharenote import config


def init_database() -> None:
    """
    Initialize database and create tables if they don't exist.
    """
    db_path = Path(config.DATABASE_PATH)
    db_path.parent.mkdir(parents=True, exist_ok=True)

    with get_db_connection() as conn:
        cursor = conn.cursor()

        cursor.execute("PRAGMA journal_mode=WAL")

        cursor.execute("""
            CREATE TABLE IF NOT EXISTS users (
                user_id TEXT PRIMARY KEY,
                username TEXT UNIQUE NOT NULL,
                display_name TEXT,
                password_hash TEXT NOT NULL,
                api_key TEXT UNIQUE,
                created_at TEXT NOT NULL,
                key_updated_at TEXT
            )
        """)

        cursor.execute("""
            CREATE TABLE IF NOT EXISTS contents (
                content_id TEXT PRIMARY KEY,
                owner_id TEXT,
                title TEXT NOT NULL,
                body TEXT NOT NULL DEFAULT '',
                content_type TEXT NOT NULL CHECK (content_type IN ('file', 'folder')),
                language TEXT NOT NULL DEFAULT 'plaintext',
                size INTEGER NOT NULL DEFAULT 0,
                path TEXT NOT NULL,
                permission TEXT NOT NULL CHECK (permission IN ('public', 'unlisted', 'private')),
                slug TEXT,
                share_code TEXT,
                is_blocked INTEGER NOT NULL DEFAULT 0,
                report_count INTEGER NOT NULL DEFAULT 0,
                expires_at TEXT,
                access_count INTEGER NOT NULL DEFAULT 0,
                created_at TEXT NOT NULL,
                updated_at TEXT NOT NULL,
                FOREIGN KEY(owner_id) REFERENCES users(user_id)
            )
        """)

        # NULLs are distinct in SQLite unique indexes, so unshared records
        # and anonymous records do not collide.
        cursor.execute("""
            CREATE UNIQUE INDEX IF NOT EXISTS idx_contents_slug_unique ON contents(slug)
        """)

        cursor.execute("""
            CREATE UNIQUE INDEX IF NOT EXISTS idx_contents_share_code_unique ON contents(share_code)
        """)

        cursor.execute("""
            CREATE UNIQUE INDEX IF NOT EXISTS idx_contents_owner_path_unique ON contents(owner_id, path)
        """)

        cursor.execute("""
            CREATE INDEX IF NOT EXISTS idx_contents_explore ON contents(permission, is_blocked, created_at)
        """)

        conn.commit()


@contextmanager
def get_db_connection() -> Generator[sqlite3.Connection, None, None]:
    """
    Context manager for database connections.
    """
    conn = sqlite3.connect(config.DATABASE_PATH, timeout=config.DB_BUSY_TIMEOUT_SECONDS)
    conn.row_factory = sqlite3.Row
    try:
        yield conn
    finally:
        conn.close()


def row_to_dict(row: Optional[sqlite3.Row]) -> Optional[Dict[str, Any]]:
    """
    Convert a sqlite3.Row to a plain dict.
    """
    if row is None:
        return None
    return dict(row)


def get_row_value(row: sqlite3.Row, column: str, default: Any = None) -> Any:
    """
    Read a column from a row, returning default if it is missing or NULL.
    """
    if column not in row.keys():
        return default
    value = row[column]
    return default if value is None else value
