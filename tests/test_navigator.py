"""Tests for shared folder browsing."""

import pytest

from sharenote.exceptions import ContentNotFoundError, InvalidPathError
from sharenote.repositories.content_repository import ContentRepository
from sharenote.services.navigator_service import NavigatorService
from sharenote.types import ContentType, Permission


@pytest.fixture
def navigator(test_db):
    return NavigatorService()


@pytest.fixture
def tree(alice, make_folder, make_note):
    """
    alice's tree: / (shared root), /a, /a/b, /a/b/c.txt
    """
    root = make_folder(alice, "/", title="Alice Root")
    folder_a = make_folder(alice, "/a")
    folder_b = make_folder(alice, "/a/b")
    deep_file = make_note(alice, "c.txt", path="/a/b/c.txt")
    return {"root": root, "a": folder_a, "b": folder_b, "c": deep_file}


def _names(summaries):
    return [summary.name for summary in summaries]


class TestListChildren:
    def test_only_direct_children_are_listed(self, navigator, tree):
        children = navigator.list_children(tree["root"].slug, "/a", None)
        assert [child.path for child in children] == ["/a/b"]

    def test_root_listing_excludes_the_folder_itself(self, navigator, tree):
        children = navigator.list_children(tree["root"].slug, "/", None)
        assert [child.path for child in children] == ["/a"]

    def test_listing_relative_to_a_nested_shared_folder(self, navigator, tree):
        assert _names(navigator.list_children(tree["a"].share_code, "/", None)) == ["b"]
        assert _names(navigator.list_children(tree["a"].slug, "/b", None)) == ["c.txt"]

    def test_empty_directory_is_an_empty_list(self, navigator, tree):
        assert navigator.list_children(tree["b"].slug, "/nothing-here", None) == []

    def test_folders_are_listed_before_files(self, navigator, alice, make_folder, make_note):
        docs = make_folder(alice, "/docs")
        make_note(alice, "alpha.txt", path="/docs/alpha.txt")
        make_note(alice, "Beta.txt", path="/docs/Beta.txt")
        make_folder(alice, "/docs/zeta")
        make_folder(alice, "/docs/Archive")

        children = navigator.list_children(docs.slug, "/", None)

        assert _names(children) == ["Archive", "zeta", "alpha.txt", "Beta.txt"]
        assert [child.content_type for child in children[:2]] == [ContentType.FOLDER, ContentType.FOLDER]

    def test_pattern_characters_in_paths_match_literally(self, navigator, alice, make_folder, make_note):
        make_folder(alice, "/a.b")
        make_folder(alice, "/aXb")
        make_folder(alice, "/a(b")
        root = make_folder(alice, "/", title="Root")
        make_note(alice, "in-dot.txt", path="/a.b/in-dot.txt")
        make_note(alice, "in-x.txt", path="/aXb/in-x.txt")
        make_note(alice, "in-paren.txt", path="/a(b/in-paren.txt")

        assert _names(navigator.list_children(root.slug, "/a.b", None)) == ["in-dot.txt"]
        assert _names(navigator.list_children(root.slug, "/a(b", None)) == ["in-paren.txt"]

    def test_parent_segments_are_rejected(self, navigator, tree):
        with pytest.raises(InvalidPathError):
            navigator.list_children(tree["a"].slug, "/../secret", None)

    def test_children_failing_the_gate_are_hidden(self, navigator, alice, bob, make_folder, make_note):
        shared = make_folder(alice, "/shared")
        make_note(alice, "open.txt", path="/shared/open.txt")
        make_note(alice, "link-only.txt", path="/shared/link-only.txt", permission=Permission.UNLISTED)
        make_note(alice, "mine.txt", path="/shared/mine.txt", permission=Permission.PRIVATE)
        blocked = make_note(alice, "blocked.txt", path="/shared/blocked.txt")
        ContentRepository.set_blocked(blocked.content_id, True)

        assert _names(navigator.list_children(shared.slug, "/", bob)) == ["link-only.txt", "open.txt"]
        assert _names(navigator.list_children(shared.slug, "/", alice)) == ["link-only.txt", "mine.txt", "open.txt"]

    def test_other_owners_records_never_appear(self, navigator, alice, bob, make_folder, make_note):
        shared = make_folder(alice, "/notes")
        make_note(bob, "intruder.txt", path="/notes/intruder.txt")
        assert navigator.list_children(shared.slug, "/", None) == []

    def test_private_folder_is_not_found_for_others(self, navigator, alice, bob, make_folder):
        folder = make_folder(alice, "/private", permission=Permission.PRIVATE)
        with pytest.raises(ContentNotFoundError):
            navigator.list_children(folder.share_code, "/", bob)
        assert navigator.list_children(folder.share_code, "/", alice) == []

    def test_file_identifier_is_not_a_folder(self, navigator, tree):
        with pytest.raises(ContentNotFoundError):
            navigator.list_children(tree["c"].slug, "/", None)


class TestOpenFile:
    def test_open_nested_file_counts_access_on_folder(self, navigator, tree):
        view = navigator.open_file(tree["a"].slug, tree["c"].content_id, None)

        assert view.title == "c.txt"
        assert ContentRepository.get_by_id(tree["a"].content_id).access_count == 1
        assert ContentRepository.get_by_id(tree["c"].content_id).access_count == 0

    def test_file_outside_folder_is_not_found(self, navigator, alice, tree, make_folder, make_note):
        other = make_folder(alice, "/other")
        outside = make_note(alice, "outside.txt", path="/other/outside.txt")

        with pytest.raises(ContentNotFoundError):
            navigator.open_file(tree["a"].slug, outside.content_id, None)
        assert navigator.open_file(other.slug, outside.content_id, None).title == "outside.txt"

    def test_private_file_inside_shared_folder_is_not_found(self, navigator, alice, bob, tree, make_note):
        hidden = make_note(alice, "hidden.txt", path="/a/hidden.txt", permission=Permission.PRIVATE)
        with pytest.raises(ContentNotFoundError):
            navigator.open_file(tree["a"].slug, hidden.content_id, bob)

    def test_folder_cannot_be_opened_as_file(self, navigator, tree):
        with pytest.raises(ContentNotFoundError):
            navigator.open_file(tree["root"].slug, tree["b"].content_id, None)
