"""Pydantic schemas for API requests and responses."""

from sharenote.schemas.auth import (
    RegisterRequest,
    RegisterResponse,
    LoginRequest,
    LoginResponse
)
from sharenote.schemas.content import (
    CreateContentRequest,
    UpdateContentRequest,
    ShareRequest,
    ShareResponse,
    OwnedContentResponse,
    SharedContentListResponse,
    DeleteContentResponse,
    ContentViewResponse,
    ListChildrenResponse,
    ExploreResponse
)
from sharenote.schemas.common import ErrorResponse, MessageResponse

__all__ = [
    "RegisterRequest",
    "RegisterResponse",
    "LoginRequest",
    "LoginResponse",
    "CreateContentRequest",
    "UpdateContentRequest",
    "ShareRequest",
    "ShareResponse",
    "OwnedContentResponse",
    "SharedContentListResponse",
    "DeleteContentResponse",
    "ContentViewResponse",
    "ListChildrenResponse",
    "ExploreResponse",
    "ErrorResponse",
    "MessageResponse"
]
