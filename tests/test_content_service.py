"""Tests for owner-facing content management."""

from datetime import timedelta

import pytest

from sharenote.exceptions import (
    ContentNotFoundError,
    InvalidContentError,
    InvalidPathError,
    InvalidTitleError,
    PathConflictError,
)
from sharenote.repositories.content_repository import ContentRepository
from sharenote.types import ContentType, Permission
from sharenote.utils import utc_now


class TestCreate:
    def test_file_defaults(self, content_service, alice):
        record = content_service.create_content(alice, "script.py", body="print('hi')")

        assert record.permission == Permission.PRIVATE
        assert record.language == "python"
        assert record.size == len("print('hi')")
        assert record.path == "/scriptpy"

    def test_size_counts_utf8_bytes(self, content_service, alice):
        record = content_service.create_content(alice, "Greeting", body="héllo")
        assert record.size == 6

    def test_title_is_required(self, content_service, alice):
        with pytest.raises(InvalidContentError):
            content_service.create_content(alice, "   ")

    def test_title_without_slug_characters_is_rejected(self, content_service, alice):
        with pytest.raises(InvalidTitleError):
            content_service.create_content(alice, "???")

    def test_anonymous_files_default_to_unlisted(self, content_service):
        record = content_service.create_content(None, "Quick Paste", body="x")
        assert record.permission == Permission.UNLISTED

    def test_anonymous_private_files_are_rejected(self, content_service):
        with pytest.raises(InvalidContentError):
            content_service.create_content(None, "Secret", body="x", permission=Permission.PRIVATE)

    def test_anonymous_folders_are_rejected(self, content_service):
        with pytest.raises(InvalidContentError):
            content_service.create_content(None, "Folder", content_type=ContentType.FOLDER, path="/f")

    def test_folders_have_no_body(self, content_service, alice):
        with pytest.raises(InvalidContentError):
            content_service.create_content(alice, "Folder", content_type=ContentType.FOLDER, body="x", path="/f")

    def test_files_cannot_sit_at_root(self, content_service, alice):
        with pytest.raises(InvalidPathError):
            content_service.create_content(alice, "Rootfile", path="/")

    def test_expiry_in_the_past_is_rejected(self, content_service, alice):
        with pytest.raises(InvalidContentError):
            content_service.create_content(alice, "Old", expires_at=utc_now() - timedelta(minutes=1))

    def test_same_path_twice_conflicts(self, content_service, alice):
        content_service.create_content(alice, "One", path="/same.txt")
        with pytest.raises(PathConflictError):
            content_service.create_content(alice, "Two", path="/same.txt")

    def test_derived_path_skips_taken_explicit_path(self, content_service, alice, make_note):
        make_note(alice, "Elsewhere", path="/report")

        record = content_service.create_content(alice, "Report", body="q3")

        assert (record.slug, record.path) == ("report-2", "/report-2")

    def test_explicit_path_conflict_is_not_retried(self, content_service, alice, make_note):
        make_note(alice, "Elsewhere", path="/report")
        with pytest.raises(PathConflictError):
            content_service.create_content(alice, "Report", path="/report")

    def test_failed_create_leaves_no_record(self, content_service, alice):
        content_service.create_content(alice, "One", path="/same.txt")
        with pytest.raises(PathConflictError):
            content_service.create_content(alice, "Two", path="/same.txt")
        assert ContentRepository.find_by_identifier("two") is None


class TestUpdate:
    def test_update_keeps_identifiers(self, content_service, alice):
        record = content_service.create_content(alice, "Draft")

        updated = content_service.update_content(
            record.content_id, alice, title="Final.md", body="done", permission=Permission.PUBLIC
        )

        assert updated.title == "Final.md"
        assert updated.language == "markdown"
        assert updated.permission == Permission.PUBLIC
        assert (updated.slug, updated.share_code) == (record.slug, record.share_code)

    def test_expiry_can_be_set_and_cleared(self, content_service, alice):
        record = content_service.create_content(alice, "Temp")
        expires = utc_now() + timedelta(hours=1)

        assert content_service.update_content(record.content_id, alice, expires_at=expires).expires_at == expires
        assert content_service.update_content(record.content_id, alice, title="Temp").expires_at == expires
        assert content_service.update_content(record.content_id, alice, expires_at=None).expires_at is None

    def test_folders_cannot_move(self, content_service, alice):
        folder = content_service.create_content(alice, "Docs", content_type=ContentType.FOLDER, path="/docs")
        with pytest.raises(InvalidContentError):
            content_service.update_content(folder.content_id, alice, path="/elsewhere")

    def test_non_owner_update_is_not_found(self, content_service, alice, bob):
        record = content_service.create_content(alice, "Mine")
        with pytest.raises(ContentNotFoundError):
            content_service.update_content(record.content_id, bob, title="Yours")


class TestDelete:
    def test_deleting_folder_removes_descendants(self, content_service, alice, make_folder, make_note):
        docs = make_folder(alice, "/docs")
        make_folder(alice, "/docs/sub")
        make_note(alice, "a.txt", path="/docs/a.txt")
        make_note(alice, "b.txt", path="/docs/sub/b.txt")
        survivor = make_note(alice, "c.txt", path="/docs-archive/c.txt")

        assert content_service.delete_content(docs.content_id, alice) == 4
        assert ContentRepository.get_by_id(docs.content_id) is None
        assert ContentRepository.get_by_id(survivor.content_id) is not None
        assert [summary.name for summary in content_service.list_own(alice, "/docs-archive")] == ["c.txt"]

    def test_non_owner_delete_is_not_found(self, content_service, alice, bob):
        record = content_service.create_content(alice, "Keep")
        with pytest.raises(ContentNotFoundError):
            content_service.delete_content(record.content_id, bob)
        assert ContentRepository.get_by_id(record.content_id) is not None


class TestOwnerListings:
    def test_list_own_is_unrestricted(self, content_service, alice, make_folder, make_note):
        make_folder(alice, "/docs", permission=Permission.PRIVATE)
        blocked = make_note(alice, "blocked.txt", path="/blocked.txt")
        ContentRepository.set_blocked(blocked.content_id, True)
        make_note(alice, "private.txt", path="/private.txt", permission=Permission.PRIVATE)
        make_note(alice, "nested.txt", path="/docs/nested.txt")

        names = [summary.name for summary in content_service.list_own(alice, "/")]

        assert names == ["docs", "blocked.txt", "private.txt"]
        assert [s.name for s in content_service.list_own(alice, "/docs")] == ["nested.txt"]

    def test_list_own_only_shows_callers_records(self, content_service, alice, bob, make_note):
        make_note(bob, "bobs.txt", path="/bobs.txt")
        assert content_service.list_own(alice, "/") == []

    def test_list_shared_excludes_blocked(self, content_service, alice, make_note):
        kept = make_note(alice, "Kept")
        blocked = make_note(alice, "Blocked")
        ContentRepository.set_blocked(blocked.content_id, True)

        assert [record.content_id for record in content_service.list_shared(alice)] == [kept.content_id]
