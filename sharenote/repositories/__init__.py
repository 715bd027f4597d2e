"""Repository layer for data access."""

from sharenote.repositories.user_repository import UserRepository
from sharenote.repositories.content_repository import ContentRepository

__all__ = [
    "UserRepository",
    "ContentRepository",
]
