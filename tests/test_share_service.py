"""Tests for slug allocation and idempotent sharing."""

import pytest

from sharenote.exceptions import (
    ContentNotFoundError,
    IdentifierConflictError,
    InvalidCustomSlugError,
    SlugGenerationExhaustedError,
    SlugTakenError,
)
from sharenote.identifiers import SLUG_PATTERN
from sharenote.repositories.content_repository import ContentRepository
from sharenote.services.share_service import ShareService
from sharenote.types import Permission


@pytest.fixture
def share_service(test_db):
    return ShareService()


class TestCreationAssignsIdentifiers:
    def test_new_record_gets_slug_and_share_code(self, alice, make_note):
        record = make_note(alice, "My First Note")
        assert record.slug == "my-first-note"
        assert len(record.share_code) == 32
        assert record.path == "/my-first-note"

    def test_colliding_titles_get_distinct_slugs(self, alice, bob, make_note):
        slugs = [make_note(owner, "Weekly Report").slug for owner in [alice, bob, alice, None, bob]]

        assert slugs == [
            "weekly-report",
            "weekly-report-2",
            "weekly-report-3",
            "weekly-report-4",
            "weekly-report-5",
        ]
        assert all(SLUG_PATTERN.match(slug) for slug in slugs)

    def test_custom_slug_is_used(self, alice, make_note):
        record = make_note(alice, "Anything", custom_slug="Project Plan")
        assert record.slug == "project-plan"

    def test_taken_custom_slug_raises(self, alice, bob, make_note):
        make_note(alice, "Project Plan")
        with pytest.raises(SlugTakenError):
            make_note(bob, "Other", custom_slug="project-plan")

    def test_custom_slug_shaped_like_share_code_is_rejected(self, alice, make_note):
        with pytest.raises(InvalidCustomSlugError):
            make_note(alice, "Sneaky", custom_slug="0123456789abcdef0123456789abcdef")


class TestStoreGeneratedSlug:
    def test_conflict_retries_with_fresh_lookup(self, share_service, monkeypatch):
        taken = [set(), {"race"}]
        monkeypatch.setattr(ContentRepository, "find_slugs_with_base", staticmethod(lambda base: taken.pop(0)))
        attempts = []

        def write(slug, share_code):
            attempts.append(slug)
            if len(attempts) == 1:
                raise IdentifierConflictError("slug", slug)

        slug, _ = share_service.store_generated_slug("Race", write)
        assert attempts == ["race", "race-2"]
        assert slug == "race-2"

    def test_share_code_conflict_regenerates_code(self, share_service):
        codes = []

        def write(slug, share_code):
            codes.append(share_code)
            if len(codes) == 1:
                raise IdentifierConflictError("share_code", share_code)

        _, share_code = share_service.store_generated_slug("Fresh", write)
        assert len(codes) == 2
        assert codes[0] != codes[1]
        assert share_code == codes[1]

    def test_exhaustion_raises_after_bounded_attempts(self, share_service, monkeypatch):
        monkeypatch.setattr(ContentRepository, "find_slugs_with_base", staticmethod(lambda base: set()))
        calls = []

        def write(slug, share_code):
            calls.append(slug)
            raise IdentifierConflictError("slug", slug)

        with pytest.raises(SlugGenerationExhaustedError):
            share_service.store_generated_slug("Always Taken", write)
        assert len(calls) == 5


class TestCreateOrShare:
    def test_sharing_twice_returns_same_identifiers(self, share_service, alice, make_note):
        record = make_note(alice, "Stable Note", permission=Permission.PRIVATE)

        first = share_service.create_or_share(record.content_id, alice)
        second = share_service.create_or_share(record.content_id, alice)

        assert (first.slug, first.share_code) == (second.slug, second.share_code)
        assert first.slug == record.slug
        assert first.share_code == record.share_code

    def test_is_public_switches_permission(self, share_service, alice, make_note):
        record = make_note(alice, "Toggle", permission=Permission.PRIVATE)

        assert share_service.create_or_share(record.content_id, alice, is_public=True).permission == Permission.PUBLIC
        assert share_service.create_or_share(record.content_id, alice, is_public=False).permission == Permission.UNLISTED
        assert share_service.create_or_share(record.content_id, alice).permission == Permission.UNLISTED

    def test_custom_slug_renames_but_keeps_share_code(self, share_service, alice, make_note):
        record = make_note(alice, "Rename Me")

        result = share_service.create_or_share(record.content_id, alice, custom_slug="renamed")

        assert result.slug == "renamed"
        assert result.share_code == record.share_code
        assert ContentRepository.find_by_identifier("rename-me") is None

    def test_same_custom_slug_is_a_no_op(self, share_service, alice, make_note):
        record = make_note(alice, "Same", custom_slug="same-slug")
        result = share_service.create_or_share(record.content_id, alice, custom_slug="Same Slug")
        assert result.slug == "same-slug"

    def test_missing_identifiers_are_backfilled(self, share_service, alice, record_factory):
        record = record_factory(owner_id=alice, title="Legacy Note", slug=None, share_code=None)
        ContentRepository.create_content(record)

        result = share_service.create_or_share(record.content_id, alice)

        assert result.slug == "legacy-note"
        assert len(result.share_code) == 32

    def test_non_owner_gets_not_found(self, share_service, alice, bob, make_note):
        record = make_note(alice, "Mine")
        with pytest.raises(ContentNotFoundError):
            share_service.create_or_share(record.content_id, bob)

    def test_anonymous_content_cannot_be_reshared(self, share_service, make_note):
        record = make_note(None, "Anonymous")
        with pytest.raises(ContentNotFoundError):
            share_service.create_or_share(record.content_id, None)
