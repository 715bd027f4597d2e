"""Command request data types for CLI."""

from dataclasses import dataclass
from typing import Literal


@dataclass(frozen=True)
class RegisterCommand:
    """Register a new user account."""

    username: str
    password: str
    display_name: str | None = None
    command: Literal["register"] = "register"


@dataclass(frozen=True)
class LoginCommand:
    """Login with username and password."""

    username: str
    password: str
    command: Literal["login"] = "login"


@dataclass(frozen=True)
class NewCommand:
    """Create a note, from inline text or a local file."""

    title: str
    body: str | None = None
    file_path: str | None = None
    path: str | None = None
    permission: str | None = None
    slug: str | None = None
    command: Literal["new"] = "new"


@dataclass(frozen=True)
class MkdirCommand:
    """Create a folder."""

    path: str
    permission: str | None = None
    command: Literal["mkdir"] = "mkdir"


@dataclass(frozen=True)
class ListCommand:
    """List the caller's own tree."""

    path: str = "/"
    command: Literal["ls"] = "ls"


@dataclass(frozen=True)
class ShareCommand:
    """Ensure share links for a record, optionally changing slug or visibility."""

    content_id: str
    slug: str | None = None
    is_public: bool | None = None
    command: Literal["share"] = "share"


@dataclass(frozen=True)
class OpenCommand:
    """Read shared content by slug or share code."""

    identifier: str
    command: Literal["open"] = "open"


@dataclass(frozen=True)
class BrowseCommand:
    """List a path inside a shared folder."""

    identifier: str
    path: str = "/"
    command: Literal["browse"] = "browse"


@dataclass(frozen=True)
class ExploreCommand:
    """List public content."""

    sort: str = "recent"
    limit: int | None = None
    command: Literal["explore"] = "explore"


CommandRequest = (
    RegisterCommand
    | LoginCommand
    | NewCommand
    | MkdirCommand
    | ListCommand
    | ShareCommand
    | OpenCommand
    | BrowseCommand
    | ExploreCommand
)
