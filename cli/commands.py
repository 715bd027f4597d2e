"""Command handler functions for CLI operations."""

from pathlib import Path
from typing import Optional

from common.logging_config import get_logger
from cli.client import ShareNoteClient
from cli.config import Config
from cli.models import (
    BrowseCommand,
    ExploreCommand,
    ListCommand,
    LoginCommand,
    MkdirCommand,
    NewCommand,
    OpenCommand,
    RegisterCommand,
    ShareCommand,
)

logger = get_logger(__name__)


_client: Optional[ShareNoteClient] = None


def get_client() -> ShareNoteClient:
    """
    Get or create global ShareNoteClient instance.

    Returns:
        ShareNoteClient instance
    """
    global _client
    if _client is None:
        logger.debug("Creating new ShareNoteClient instance")
        config = Config(Path.home() / '.sharenote' / 'config.json')
        _client = ShareNoteClient(config)
    return _client


def handle_register(cmd: RegisterCommand, client: Optional[ShareNoteClient] = None) -> str:
    """
    Handle 'register' command.

    Args:
        cmd: RegisterCommand with username, password and optional display name
        client: Optional ShareNoteClient for dependency injection (testing)

    Returns:
        Success or error message
    """
    if client is None:
        client = get_client()
    return client.register(cmd.username, cmd.password, cmd.display_name)


def handle_login(cmd: LoginCommand, client: Optional[ShareNoteClient] = None) -> str:
    if client is None:
        client = get_client()
    return client.login(cmd.username, cmd.password)


def handle_new(cmd: NewCommand, client: Optional[ShareNoteClient] = None) -> str:
    """
    Handle 'new' command.

    Args:
        cmd: NewCommand with title, content source and placement options
        client: Optional ShareNoteClient for dependency injection (testing)

    Returns:
        Result message with share links
    """
    logger.info(f"Executing new command: title={cmd.title!r} path={cmd.path}")
    if client is None:
        client = get_client()
    return client.create_note(
        cmd.title,
        body=cmd.body,
        file_path=cmd.file_path,
        path=cmd.path,
        permission=cmd.permission,
        custom_slug=cmd.slug,
    )


def handle_mkdir(cmd: MkdirCommand, client: Optional[ShareNoteClient] = None) -> str:
    if client is None:
        client = get_client()
    return client.create_folder(cmd.path, cmd.permission)


def handle_ls(cmd: ListCommand, client: Optional[ShareNoteClient] = None) -> str:
    if client is None:
        client = get_client()
    return client.list_own(cmd.path)


def handle_share(cmd: ShareCommand, client: Optional[ShareNoteClient] = None) -> str:
    """
    Handle 'share' command.

    Returns:
        Share links or error message
    """
    logger.info(f"Executing share command: content_id={cmd.content_id} slug={cmd.slug} is_public={cmd.is_public}")
    if client is None:
        client = get_client()
    return client.share(cmd.content_id, custom_slug=cmd.slug, is_public=cmd.is_public)


def handle_open(cmd: OpenCommand, client: Optional[ShareNoteClient] = None) -> str:
    if client is None:
        client = get_client()
    return client.open_shared(cmd.identifier)


def handle_browse(cmd: BrowseCommand, client: Optional[ShareNoteClient] = None) -> str:
    if client is None:
        client = get_client()
    return client.browse(cmd.identifier, cmd.path)


def handle_explore(cmd: ExploreCommand, client: Optional[ShareNoteClient] = None) -> str:
    if client is None:
        client = get_client()
    return client.explore(cmd.sort, cmd.limit)
