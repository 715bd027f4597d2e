"""Command parser for CLI input."""

import shlex

from cli.constants import EXPLORE_SORTS, PERMISSIONS
from cli.models import (
    BrowseCommand,
    CommandRequest,
    ExploreCommand,
    ListCommand,
    LoginCommand,
    MkdirCommand,
    NewCommand,
    OpenCommand,
    RegisterCommand,
    ShareCommand,
)


class ParseError(Exception):
    """Raised when command parsing fails."""

    pass


def parse_command(input_line: str) -> CommandRequest:
    """Parse user input into a CommandRequest object.

    Args:
        input_line: Raw user input from REPL

    Returns:
        CommandRequest object (one of the dataclasses in cli.models)

    Raises:
        ParseError: If command syntax is invalid
    """
    if not input_line.strip():
        raise ParseError("Empty command")

    try:
        tokens = shlex.split(input_line)
    except ValueError as e:
        raise ParseError(f"Invalid syntax: {e}")

    if not tokens:
        raise ParseError("Empty command")

    command_name = tokens[0]

    if command_name == "register":
        return _parse_register(tokens[1:])
    elif command_name == "login":
        return _parse_login(tokens[1:])
    elif command_name == "new":
        return _parse_new(tokens[1:])
    elif command_name == "mkdir":
        return _parse_mkdir(tokens[1:])
    elif command_name == "ls":
        return _parse_ls(tokens[1:])
    elif command_name == "share":
        return _parse_share(tokens[1:])
    elif command_name == "open":
        return _parse_open(tokens[1:])
    elif command_name == "browse":
        return _parse_browse(tokens[1:])
    elif command_name == "explore":
        return _parse_explore(tokens[1:])
    else:
        raise ParseError(f"Unknown command: {command_name}")


def _split_options(
    command: str,
    args: list[str],
    value_flags: tuple[str, ...] = (),
    bool_flags: tuple[str, ...] = (),
) -> tuple[list[str], dict]:
    """Separate positional arguments from --flags.

    Returns:
        (positionals, options) where options maps flag name without dashes to
        its value, or True for boolean flags
    """
    positionals = []
    options = {}
    index = 0
    while index < len(args):
        arg = args[index]
        if arg.startswith("--"):
            name = arg[2:]
            if name in value_flags:
                if index + 1 >= len(args):
                    raise ParseError(f"{command}: {arg} requires a value")
                options[name] = args[index + 1]
                index += 2
                continue
            if name in bool_flags:
                options[name] = True
                index += 1
                continue
            raise ParseError(f"{command}: unknown option {arg}")
        positionals.append(arg)
        index += 1
    return positionals, options


def _check_permission(command: str, permission: str | None) -> str | None:
    if permission is not None and permission not in PERMISSIONS:
        raise ParseError(f"{command}: permission must be one of {', '.join(PERMISSIONS)}")
    return permission


def _parse_register(args: list[str]) -> RegisterCommand:
    """Parse 'register <username> <password> [display-name]' command."""
    if len(args) not in (2, 3):
        raise ParseError("register requires 2 or 3 arguments: <username> <password> [display-name]")

    display_name = args[2] if len(args) == 3 else None
    return RegisterCommand(username=args[0], password=args[1], display_name=display_name)


def _parse_login(args: list[str]) -> LoginCommand:
    """Parse 'login <username> <password>' command."""
    if len(args) != 2:
        raise ParseError("login requires exactly 2 arguments: <username> <password>")

    username, password = args
    return LoginCommand(username=username, password=password)


def _parse_new(args: list[str]) -> NewCommand:
    """Parse 'new <title> [--body TEXT | --file PATH] [--path P] [--permission L] [--slug S]'."""
    positionals, options = _split_options(
        "new", args, value_flags=("body", "file", "path", "permission", "slug")
    )
    if len(positionals) != 1:
        raise ParseError("new requires exactly one title (quote titles with spaces)")
    if "body" in options and "file" in options:
        raise ParseError("new accepts either --body or --file, not both")

    return NewCommand(
        title=positionals[0],
        body=options.get("body"),
        file_path=options.get("file"),
        path=options.get("path"),
        permission=_check_permission("new", options.get("permission")),
        slug=options.get("slug"),
    )


def _parse_mkdir(args: list[str]) -> MkdirCommand:
    """Parse 'mkdir <path> [--permission L]' command."""
    positionals, options = _split_options("mkdir", args, value_flags=("permission",))
    if len(positionals) != 1:
        raise ParseError("mkdir requires exactly 1 argument: <path>")

    path = positionals[0]
    if not path.strip("/"):
        raise ParseError("mkdir requires a path below /")

    return MkdirCommand(path=path, permission=_check_permission("mkdir", options.get("permission")))


def _parse_ls(args: list[str]) -> ListCommand:
    """Parse 'ls [path]' command."""
    if len(args) > 1:
        raise ParseError("ls accepts at most 1 argument: [path]")

    return ListCommand(path=args[0] if args else "/")


def _parse_share(args: list[str]) -> ShareCommand:
    """Parse 'share <content-id> [--slug S] [--public|--unlisted]' command."""
    positionals, options = _split_options(
        "share", args, value_flags=("slug",), bool_flags=("public", "unlisted")
    )
    if len(positionals) != 1:
        raise ParseError("share requires exactly 1 argument: <content-id>")
    if options.get("public") and options.get("unlisted"):
        raise ParseError("share accepts either --public or --unlisted, not both")

    is_public = None
    if options.get("public"):
        is_public = True
    elif options.get("unlisted"):
        is_public = False

    return ShareCommand(content_id=positionals[0], slug=options.get("slug"), is_public=is_public)


def _parse_open(args: list[str]) -> OpenCommand:
    """Parse 'open <slug-or-code>' command."""
    if len(args) != 1:
        raise ParseError("open requires exactly 1 argument: <slug-or-code>")

    return OpenCommand(identifier=args[0])


def _parse_browse(args: list[str]) -> BrowseCommand:
    """Parse 'browse <folder-slug-or-code> [path]' command."""
    if len(args) not in (1, 2):
        raise ParseError("browse requires 1 or 2 arguments: <folder-slug-or-code> [path]")

    return BrowseCommand(identifier=args[0], path=args[1] if len(args) == 2 else "/")


def _parse_explore(args: list[str]) -> ExploreCommand:
    """Parse 'explore [recent|popular|name] [limit]' command."""
    if len(args) > 2:
        raise ParseError("explore accepts at most 2 arguments: [recent|popular|name] [limit]")

    sort = "recent"
    limit = None
    for arg in args:
        if arg in EXPLORE_SORTS:
            sort = arg
        elif arg.isdigit() and int(arg) > 0:
            limit = int(arg)
        else:
            raise ParseError(f"explore: expected a sort order ({', '.join(EXPLORE_SORTS)}) or a positive limit, got '{arg}'")

    return ExploreCommand(sort=sort, limit=limit)
