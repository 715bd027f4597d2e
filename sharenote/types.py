"""Domain data type definitions shared by the engine, services and routes."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


class Permission(str, Enum):
    """
    Owner-selected visibility of a record.

    PUBLIC: discoverable and reachable by anyone holding an identifier.
    UNLISTED: reachable by anyone holding an identifier, never discoverable.
    PRIVATE: reachable only by the owner.
    """
    PUBLIC = "public"
    UNLISTED = "unlisted"
    PRIVATE = "private"


class ContentType(str, Enum):
    FILE = "file"
    FOLDER = "folder"


class DenyReason(str, Enum):
    BLOCKED = "blocked"
    EXPIRED = "expired"
    FORBIDDEN = "forbidden"


@dataclass(frozen=True)
class Verdict:
    """
    Outcome of a permission evaluation.
    """
    allowed: bool
    reason: Optional[DenyReason] = None

    @classmethod
    def allow(cls) -> "Verdict":
        return cls(allowed=True)

    @classmethod
    def deny(cls, reason: DenyReason) -> "Verdict":
        return cls(allowed=False, reason=reason)


@dataclass
class ContentRecord:
    """
    The unit of shareable content as stored.
    """
    content_id: str
    owner_id: Optional[str]
    title: str
    body: str
    content_type: ContentType
    path: str
    permission: Permission
    created_at: datetime
    updated_at: datetime
    language: str = "plaintext"
    size: int = 0
    slug: Optional[str] = None
    share_code: Optional[str] = None
    is_blocked: bool = False
    report_count: int = 0
    expires_at: Optional[datetime] = None
    access_count: int = 0

    @property
    def is_folder(self) -> bool:
        return self.content_type == ContentType.FOLDER

    @property
    def is_shared(self) -> bool:
        return self.slug is not None and self.share_code is not None


@dataclass(frozen=True)
class ContentView:
    """
    Read projection returned to viewers of shared content.

    Moderation state, owner identifiers and the share code are never part of
    this projection.
    """
    content_id: str
    title: str
    body: str
    language: str
    content_type: ContentType
    size: int
    slug: Optional[str]
    permission: Permission
    access_count: int
    owner_name: Optional[str]
    created_at: datetime
    updated_at: datetime
    expires_at: Optional[datetime] = None


@dataclass(frozen=True)
class ContentSummary:
    """
    Listing entry for folder traversal. Carries no body.
    """
    content_id: str
    name: str
    content_type: ContentType
    size: int
    created_at: datetime
    updated_at: datetime
    path: str


@dataclass(frozen=True)
class ShareResult:
    slug: str
    share_code: str
    permission: Permission


@dataclass(frozen=True)
class DiscoveryEntry:
    """
    Public listing entry. Carries no body.
    """
    content_id: str
    name: str
    content_type: ContentType
    slug: str
    language: str
    size: int
    access_count: int
    owner_name: str
    created_at: datetime
    updated_at: datetime
