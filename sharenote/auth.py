"""Authentication and security utilities."""

import uuid
from typing import Optional

import bcrypt
from fastapi import Header, Request

from sharenote import config
from sharenote.config import KEY_PREFIX
from sharenote.exceptions import InvalidAPIKeyError, UnauthorizedAccessError


def hash_password(password: str) -> str:
    """
    Hash a password using bcrypt.

    Args:
        password: Plain text password to hash

    Returns:
        Bcrypt hash of the password
    """
    password_bytes = password.encode('utf-8')
    salt = bcrypt.gensalt()
    hashed = bcrypt.hashpw(password_bytes, salt)
    return hashed.decode('utf-8')


def verify_password(password: str, password_hash: str) -> bool:
    """
    Verify a password against a bcrypt hash.

    Args:
        password: Plain text password to verify
        password_hash: Bcrypt hash to verify against

    Returns:
        True if password matches hash, False otherwise
    """
    password_bytes = password.encode('utf-8')
    hash_bytes = password_hash.encode('utf-8')
    return bcrypt.checkpw(password_bytes, hash_bytes)


def generate_api_key() -> str:
    """
    Generate a new API Key with the configured prefix.

    Returns:
        API Key string in format: {prefix}{uuid4}
    """
    return f"{KEY_PREFIX}{uuid.uuid4()}"


def _extract_api_key(authorization: str) -> str:
    if not authorization.startswith("Bearer "):
        raise InvalidAPIKeyError("Invalid authorization header format")
    api_key = authorization[len("Bearer "):].strip()
    if not api_key:
        raise InvalidAPIKeyError("Missing API key")
    return api_key


def _authenticate(request: Request, authorization: str) -> str:
    from sharenote.services.auth_service import AuthService

    api_key = _extract_api_key(authorization)
    user_id = AuthService().validate_api_key(api_key)
    if user_id is None:
        raise InvalidAPIKeyError("Invalid API key")

    request.state.user_id = user_id
    return user_id


async def get_current_user(request: Request, authorization: str = Header(...)) -> str:
    """
    FastAPI dependency to validate API Key and extract user_id.

    Args:
        authorization: Authorization header value (format: "Bearer <api_key>")

    Returns:
        user_id of the authenticated user

    Raises:
        InvalidAPIKeyError: If the API Key is invalid or malformed
    """
    return _authenticate(request, authorization)


async def get_optional_viewer(
    request: Request,
    authorization: Optional[str] = Header(None),
) -> Optional[str]:
    """
    FastAPI dependency for read surfaces open to anonymous viewers.

    Returns:
        user_id when a valid API Key is sent, None when the header is absent

    Raises:
        InvalidAPIKeyError: If a header is sent but the key is invalid
    """
    if authorization is None:
        return None
    return _authenticate(request, authorization)


async def get_admin_user(request: Request, authorization: str = Header(...)) -> str:
    """
    FastAPI dependency for moderation endpoints.

    Raises:
        UnauthorizedAccessError: If the authenticated user is not a moderator
    """
    from sharenote.repositories.user_repository import UserRepository

    user_id = _authenticate(request, authorization)
    user = UserRepository.get_by_user_id(user_id)
    if user is None or user.username not in config.ADMIN_USERNAMES:
        raise UnauthorizedAccessError("Moderator privileges required")
    return user_id
