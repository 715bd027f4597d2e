"""Share service: slug and share code assignment."""

import re
from typing import Callable, Optional

from common.logging_config import get_logger
from sharenote.config import SLUG_MAX_ATTEMPTS
from sharenote.exceptions import (
    ContentNotFoundError,
    IdentifierConflictError,
    InvalidCustomSlugError,
    SlugGenerationExhaustedError,
    SlugTakenError,
)
from sharenote.identifiers import generate_share_code, normalize_custom_slug, slugify, unique_slug
from sharenote.repositories.content_repository import ContentRepository
from sharenote.types import Permission, ShareResult
from sharenote.utils import utc_now

logger = get_logger(__name__)

# Slugs shaped like share codes would make identifier lookups ambiguous.
_SHARE_CODE_SHAPE = re.compile(r"^[0-9a-f]{32}$")


class ShareService:
    def __init__(self):
        self.content_repo = ContentRepository()

    def store_generated_slug(
        self,
        title: str,
        write: Callable[[str, str], None],
        share_code: Optional[str] = None,
    ) -> tuple[str, str]:
        """
        Derive a slug from title and persist it through write().

        write(slug, share_code) performs the storage call and raises
        IdentifierConflictError when a unique index rejects it. On a conflict
        the taken slugs are re-read, slugs rejected by write() are added to
        them, and the suffix search runs again.

        Args:
            title: Title to derive the slug from
            write: Callable persisting (slug, share_code)
            share_code: Existing share code to keep, or None to generate one

        Returns:
            (slug, share_code) as stored

        Raises:
            InvalidTitleError: If the title has no URL-safe characters
            SlugGenerationExhaustedError: If every attempt lost a race
        """
        base = slugify(title)
        keep_share_code = share_code is not None
        if share_code is None:
            share_code = generate_share_code()

        rejected = set()
        for attempt in range(1, SLUG_MAX_ATTEMPTS + 1):
            taken = self.content_repo.find_slugs_with_base(base) | rejected
            if _SHARE_CODE_SHAPE.match(base):
                taken.add(base)
            slug = unique_slug(base, taken)

            try:
                write(slug, share_code)
                logger.debug(f"Stored slug '{slug}' on attempt {attempt}")
                return slug, share_code
            except IdentifierConflictError as e:
                if e.field == "slug":
                    rejected.add(slug)
                if e.field == "share_code" and not keep_share_code:
                    share_code = generate_share_code()
                logger.warning(
                    f"Identifier conflict on {e.field} (attempt {attempt}/{SLUG_MAX_ATTEMPTS}) for slug base '{base}'"
                )

        logger.error(f"Slug generation exhausted after {SLUG_MAX_ATTEMPTS} attempts for slug base '{base}'")
        raise SlugGenerationExhaustedError(
            f"Could not allocate a unique slug for '{base}' after {SLUG_MAX_ATTEMPTS} attempts"
        )

    def store_custom_slug(
        self,
        raw_slug: str,
        write: Callable[[str, str], None],
        share_code: Optional[str] = None,
    ) -> tuple[str, str]:
        """
        Normalize and persist a slug chosen by the owner.

        Raises:
            InvalidCustomSlugError: If the slug is unusable after normalization
            SlugTakenError: If another record already holds the slug
        """
        slug = normalize_custom_slug(raw_slug)
        if _SHARE_CODE_SHAPE.match(slug):
            raise InvalidCustomSlugError("Custom slug must not look like a share code")

        keep_share_code = share_code is not None
        if share_code is None:
            share_code = generate_share_code()

        for attempt in range(1, SLUG_MAX_ATTEMPTS + 1):
            try:
                write(slug, share_code)
                return slug, share_code
            except IdentifierConflictError as e:
                if e.field == "slug":
                    logger.info(f"Custom slug '{slug}' is already taken")
                    raise SlugTakenError(f"The slug '{slug}' is already taken") from e
                if keep_share_code:
                    raise
                share_code = generate_share_code()

        raise SlugGenerationExhaustedError("Could not allocate a unique share code")

    def create_or_share(
        self,
        content_id: str,
        owner_id: str,
        custom_slug: Optional[str] = None,
        is_public: Optional[bool] = None,
    ) -> ShareResult:
        """
        Ensure a record owned by owner_id has a slug and a share code.

        Idempotent: existing identifiers are returned unchanged unless a
        different custom slug is requested. is_public=True makes the record
        public, False makes it unlisted, None leaves the permission alone.

        Raises:
            ContentNotFoundError: If the record does not exist or belongs to someone else
            InvalidCustomSlugError: If custom_slug is unusable
            SlugTakenError: If custom_slug belongs to another record
        """
        record = self.content_repo.get_by_id(content_id)
        if record is None or record.owner_id is None or record.owner_id != owner_id:
            raise ContentNotFoundError()

        if is_public is not None:
            permission = Permission.PUBLIC if is_public else Permission.UNLISTED
            if permission != record.permission:
                self.content_repo.update_fields(content_id, {"permission": permission, "updated_at": utc_now()})
                logger.info(f"Permission changed to {permission.value} [content_id={content_id}]")
                record.permission = permission

        def write(slug: str, share_code: str) -> None:
            self.content_repo.assign_identifiers(content_id, slug, share_code, utc_now())

        if custom_slug is not None and (record.slug is None or normalize_custom_slug(custom_slug) != record.slug):
            slug, share_code = self.store_custom_slug(custom_slug, write, record.share_code)
            logger.info(f"Custom slug assigned [content_id={content_id}] [slug={slug}]")
        elif not record.is_shared:
            slug, share_code = self.store_generated_slug(record.title, write, record.share_code)
            logger.info(f"Identifiers generated [content_id={content_id}] [slug={slug}]")
        else:
            slug, share_code = record.slug, record.share_code

        return ShareResult(slug=slug, share_code=share_code, permission=record.permission)
