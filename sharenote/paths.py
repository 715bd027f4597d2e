"""Path algebra for the owner-scoped virtual filesystem."""

from typing import List, Optional

from sharenote.exceptions import InvalidPathError
from sharenote.types import ContentSummary, ContentType

ROOT_PATH = "/"


def _segments(path: str) -> List[str]:
    if "\x00" in path:
        raise InvalidPathError("Path must not contain NUL characters")

    segments = []
    for segment in path.split("/"):
        if segment in ("", "."):
            continue
        if segment == "..":
            raise InvalidPathError(f"Path {path!r} must not contain '..' segments")
        segments.append(segment)
    return segments


def normalize_relative_path(path: Optional[str]) -> str:
    """
    Normalize a path relative to a shared folder.

    Empty and '.' segments are dropped. '..' is rejected instead of resolved
    because prefix matching offers no sandbox of its own.

    Args:
        path: Raw path from the request (None or "" mean the folder root)

    Returns:
        "/" or "/seg1/seg2" without a trailing slash

    Raises:
        InvalidPathError: If the path contains '..' or NUL characters
    """
    if not path:
        return ROOT_PATH
    segments = _segments(path)
    if not segments:
        return ROOT_PATH
    return "/" + "/".join(segments)


def normalize_record_path(path: Optional[str]) -> str:
    """
    Normalize the stored location of a record. Same rules as relative paths.
    """
    return normalize_relative_path(path)


def join_target_path(folder_path: str, relative_path: str) -> str:
    """
    Combine a folder location with a relative path.

    Args:
        folder_path: Normalized location of the shared folder
        relative_path: Normalized path relative to that folder

    Returns:
        Target directory path ending with exactly one "/"
    """
    if folder_path == ROOT_PATH:
        target = relative_path
    elif relative_path == ROOT_PATH:
        target = folder_path
    else:
        target = folder_path + relative_path
    return target.rstrip("/") + "/"


def child_segments(target_path: str, candidate_path: str) -> List[str]:
    """
    Path segments of candidate_path below target_path.

    Args:
        target_path: Directory path ending with "/"
        candidate_path: Path that starts with target_path

    Returns:
        Non-empty segments after the prefix
    """
    if not candidate_path.startswith(target_path):
        raise ValueError(f"{candidate_path!r} is not below {target_path!r}")
    return [segment for segment in candidate_path[len(target_path):].split("/") if segment]


def is_direct_child(target_path: str, candidate_path: str) -> bool:
    """
    True when candidate_path lies zero or one segment below target_path.
    """
    if not candidate_path.startswith(target_path):
        return False
    return len(child_segments(target_path, candidate_path)) <= 1


def is_within(folder_path: str, candidate_path: str) -> bool:
    """
    True when candidate_path is strictly inside folder_path at any depth.
    """
    prefix = folder_path.rstrip("/") + "/"
    return candidate_path != folder_path and candidate_path.startswith(prefix)


def sort_key(summary: ContentSummary):
    """
    Folders before files, then case-insensitive name with an ordinal tie-break.
    """
    return (
        0 if summary.content_type == ContentType.FOLDER else 1,
        summary.name.casefold(),
        summary.name,
    )
