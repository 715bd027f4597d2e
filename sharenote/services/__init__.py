"""Service layer for business logic."""

from sharenote.services.auth_service import AuthService
from sharenote.services.share_service import ShareService
from sharenote.services.content_service import ContentService
from sharenote.services.resolver_service import ResolverService
from sharenote.services.navigator_service import NavigatorService
from sharenote.services.explore_service import ExploreService
from sharenote.services.moderation_service import ModerationService

__all__ = [
    "AuthService",
    "ShareService",
    "ContentService",
    "ResolverService",
    "NavigatorService",
    "ExploreService",
    "ModerationService",
]
