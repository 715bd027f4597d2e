"""Slug and share code generation."""

import re
import secrets
from typing import AbstractSet

from sharenote.config import SHARE_CODE_BYTES, SLUG_MAX_LENGTH
from sharenote.exceptions import InvalidCustomSlugError, InvalidTitleError

_DISALLOWED_CHARS = re.compile(r"[^a-z0-9\s-]")
_WHITESPACE_RUN = re.compile(r"\s+")
_HYPHEN_RUN = re.compile(r"-{2,}")

SLUG_PATTERN = re.compile(r"^[a-z0-9]+(-[a-z0-9]+)*$")


def _normalize(text: str) -> str:
    slug = _DISALLOWED_CHARS.sub("", text.lower())
    slug = _WHITESPACE_RUN.sub("-", slug.strip())
    slug = _HYPHEN_RUN.sub("-", slug)
    slug = slug.strip("-")
    if len(slug) > SLUG_MAX_LENGTH:
        slug = slug[:SLUG_MAX_LENGTH].rstrip("-")
    return slug


def slugify(title: str) -> str:
    """
    Derive a URL-safe slug candidate from a title.

    Args:
        title: User-authored title (e.g., "My First Note")

    Returns:
        Lowercase slug matching SLUG_PATTERN (e.g., "my-first-note")

    Raises:
        InvalidTitleError: If nothing usable remains after normalization
    """
    slug = _normalize(title or "")
    if not slug:
        raise InvalidTitleError(f"Title {title!r} does not contain any URL-safe characters")
    return slug


def unique_slug(candidate: str, existing_slugs: AbstractSet[str]) -> str:
    """
    Return the first free slug among candidate, candidate-2, candidate-3, ...

    Deterministic for a given set so that concurrent retries converge.

    Args:
        candidate: Normalized slug candidate
        existing_slugs: Slugs already taken

    Returns:
        A slug not contained in existing_slugs
    """
    if candidate not in existing_slugs:
        return candidate

    suffix = 2
    while f"{candidate}-{suffix}" in existing_slugs:
        suffix += 1
    return f"{candidate}-{suffix}"


def normalize_custom_slug(raw: str) -> str:
    """
    Normalize a slug chosen by the owner.

    Args:
        raw: Slug as typed by the user

    Returns:
        Normalized slug

    Raises:
        InvalidCustomSlugError: If the input is too long or normalizes to nothing
    """
    if raw is None or not raw.strip():
        raise InvalidCustomSlugError("Custom slug must not be empty")
    if len(raw.strip()) > SLUG_MAX_LENGTH:
        raise InvalidCustomSlugError(f"Custom slug must be at most {SLUG_MAX_LENGTH} characters")

    slug = _normalize(raw)
    if not slug:
        raise InvalidCustomSlugError(
            f"Custom slug {raw!r} contains no letters or digits; use a-z, 0-9 and hyphens"
        )
    return slug


def generate_share_code() -> str:
    """
    Generate an opaque share code: 32 hex characters from 16 random bytes.
    """
    return secrets.token_hex(SHARE_CODE_BYTES)
