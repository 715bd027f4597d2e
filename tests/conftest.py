"""Shared pytest fixtures for all tests."""

import tempfile
from pathlib import Path
from typing import Callable, Generator

import pytest

from cli.config import Config
from sharenote.database import init_database
from sharenote.repositories.user_repository import UserRepository
from sharenote.services.content_service import ContentService
from sharenote.types import ContentRecord, ContentType, Permission
from sharenote.utils import generate_uuid, utc_now


@pytest.fixture
def temp_config_dir(tmp_path):
    """
    Create temporary config directory.

    Args:
        tmp_path: pytest tmp_path fixture

    Returns:
        Path to temporary .sharenote directory
    """
    config_dir = tmp_path / '.sharenote'
    config_dir.mkdir()
    return config_dir


@pytest.fixture
def temp_config(temp_config_dir):
    """
    Create temporary config instance.

    Args:
        temp_config_dir: Temporary config directory fixture

    Returns:
        Config instance with temp config file
    """
    return Config(temp_config_dir / 'config.json')


@pytest.fixture
def test_db(monkeypatch) -> Generator[Path, None, None]:
    """
    Create a temporary test database for each test.
    """
    with tempfile.TemporaryDirectory() as tmpdir:
        db_path = Path(tmpdir) / "test.db"
        monkeypatch.setattr("sharenote.config.DATABASE_PATH", str(db_path))
        init_database()
        yield db_path


@pytest.fixture
def make_user(test_db) -> Callable[..., str]:
    """
    Factory inserting a user row directly and returning its user_id.
    """
    def _make_user(username: str, display_name: str = None) -> str:
        user_id = generate_uuid()
        UserRepository.create_user(
            user_id=user_id,
            username=username,
            password_hash="not-a-real-hash",
            api_key=f"sn_{generate_uuid()}",
            created_at=utc_now(),
            display_name=display_name,
        )
        return user_id

    return _make_user


@pytest.fixture
def alice(make_user) -> str:
    return make_user("alice", "Alice")


@pytest.fixture
def bob(make_user) -> str:
    return make_user("bob", "Bob")


@pytest.fixture
def content_service(test_db) -> ContentService:
    return ContentService()


@pytest.fixture
def make_note(content_service) -> Callable[..., ContentRecord]:
    """
    Factory creating a file record through the service layer.
    """
    def _make_note(owner_id, title, body="hello", path=None, permission=Permission.PUBLIC, **kwargs):
        return content_service.create_content(
            owner_id=owner_id,
            title=title,
            content_type=ContentType.FILE,
            body=body,
            path=path,
            permission=permission,
            **kwargs,
        )

    return _make_note


@pytest.fixture
def make_folder(content_service) -> Callable[..., ContentRecord]:
    def _make_folder(owner_id, path, permission=Permission.PUBLIC, title=None):
        name = title or (path.strip("/").split("/")[-1] or "root")
        return content_service.create_content(
            owner_id=owner_id,
            title=name,
            content_type=ContentType.FOLDER,
            path=path,
            permission=permission,
        )

    return _make_folder


@pytest.fixture
def record_factory() -> Callable[..., ContentRecord]:
    """
    Factory building in-memory ContentRecords for pure policy tests.
    """
    def _build(**overrides) -> ContentRecord:
        now = utc_now()
        fields = dict(
            content_id=generate_uuid(),
            owner_id="owner-1",
            title="Note",
            body="body",
            content_type=ContentType.FILE,
            path="/note",
            permission=Permission.PUBLIC,
            created_at=now,
            updated_at=now,
            slug="note",
            share_code="0" * 32,
        )
        fields.update(overrides)
        return ContentRecord(**fields)

    return _build
