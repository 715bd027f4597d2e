"""Pydantic schemas for content, sharing and browsing endpoints."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from sharenote.types import (
    ContentRecord,
    ContentSummary,
    ContentType,
    ContentView,
    DiscoveryEntry,
    Permission,
)


class CreateContentRequest(BaseModel):
    """Request model for creating a file or folder."""
    title: str = Field(..., min_length=1, max_length=255)
    content_type: ContentType = ContentType.FILE
    body: str = ""
    path: Optional[str] = None
    permission: Optional[Permission] = None
    expires_at: Optional[datetime] = None
    custom_slug: Optional[str] = None


class UpdateContentRequest(BaseModel):
    """Request model for owner edits. Omitted fields are left unchanged."""
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    body: Optional[str] = None
    permission: Optional[Permission] = None
    path: Optional[str] = None
    expires_at: Optional[datetime] = None


class ShareRequest(BaseModel):
    """Request model for sharing a record."""
    custom_slug: Optional[str] = None
    is_public: Optional[bool] = None


class ShareResponse(BaseModel):
    """Response model for sharing a record."""
    slug: str
    share_code: str
    permission: Permission
    slug_url: str
    share_code_url: str


class OwnedContentResponse(BaseModel):
    """Owner's view of one of their records."""
    content_id: str
    title: str
    body: str
    content_type: ContentType
    language: str
    size: int
    path: str
    permission: Permission
    slug: Optional[str]
    share_code: Optional[str]
    access_count: int
    expires_at: Optional[datetime]
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_record(cls, record: ContentRecord) -> "OwnedContentResponse":
        return cls(
            content_id=record.content_id,
            title=record.title,
            body=record.body,
            content_type=record.content_type,
            language=record.language,
            size=record.size,
            path=record.path,
            permission=record.permission,
            slug=record.slug,
            share_code=record.share_code,
            access_count=record.access_count,
            expires_at=record.expires_at,
            created_at=record.created_at,
            updated_at=record.updated_at,
        )


class SharedContentItem(BaseModel):
    """Entry of the owner's shared-records listing. Carries no body."""
    content_id: str
    title: str
    content_type: ContentType
    slug: Optional[str]
    share_code: Optional[str]
    permission: Permission
    access_count: int
    size: int
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_record(cls, record: ContentRecord) -> "SharedContentItem":
        return cls(
            content_id=record.content_id,
            title=record.title,
            content_type=record.content_type,
            slug=record.slug,
            share_code=record.share_code,
            permission=record.permission,
            access_count=record.access_count,
            size=record.size,
            created_at=record.created_at,
            updated_at=record.updated_at,
        )


class SharedContentListResponse(BaseModel):
    items: List[SharedContentItem]


class DeleteContentResponse(BaseModel):
    """Response model for deletion."""
    deleted_count: int


class ContentViewResponse(BaseModel):
    """Public read projection of shared content."""
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
    expires_at: Optional[datetime]

    @classmethod
    def from_view(cls, view: ContentView) -> "ContentViewResponse":
        return cls(
            content_id=view.content_id,
            title=view.title,
            body=view.body,
            language=view.language,
            content_type=view.content_type,
            size=view.size,
            slug=view.slug,
            permission=view.permission,
            access_count=view.access_count,
            owner_name=view.owner_name,
            created_at=view.created_at,
            updated_at=view.updated_at,
            expires_at=view.expires_at,
        )


class ContentSummaryResponse(BaseModel):
    """Directory listing entry."""
    content_id: str
    name: str
    content_type: ContentType
    size: int
    created_at: datetime
    updated_at: datetime
    path: str

    @classmethod
    def from_summary(cls, summary: ContentSummary) -> "ContentSummaryResponse":
        return cls(
            content_id=summary.content_id,
            name=summary.name,
            content_type=summary.content_type,
            size=summary.size,
            created_at=summary.created_at,
            updated_at=summary.updated_at,
            path=summary.path,
        )


class ListChildrenResponse(BaseModel):
    path: str
    items: List[ContentSummaryResponse]


class DiscoveryEntryResponse(BaseModel):
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

    @classmethod
    def from_entry(cls, entry: DiscoveryEntry) -> "DiscoveryEntryResponse":
        return cls(
            content_id=entry.content_id,
            name=entry.name,
            content_type=entry.content_type,
            slug=entry.slug,
            language=entry.language,
            size=entry.size,
            access_count=entry.access_count,
            owner_name=entry.owner_name,
            created_at=entry.created_at,
            updated_at=entry.updated_at,
        )


class ExploreResponse(BaseModel):
    items: List[DiscoveryEntryResponse]
