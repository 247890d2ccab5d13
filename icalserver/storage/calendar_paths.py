"""Mapping of URL paths to calendar files under the storage root."""

import posixpath
from dataclasses import dataclass
from pathlib import Path, PurePosixPath

from icalserver.constants import CALENDAR_SUFFIX
from icalserver.exceptions import InvalidPathError


@dataclass(frozen=True)
class CalendarLocation:
    """Resolved location of a calendar resource.

    Always describes a path inside the storage root, whether or not the
    file exists yet.
    """

    owner: str
    relative_path: PurePosixPath  # e.g. alice/work.ics
    path: Path  # absolute path under the storage root

    @property
    def name(self) -> str:
        """Calendar name without the .ics suffix."""
        return self.relative_path.name[: -len(CALENDAR_SUFFIX)]

    @property
    def directory(self) -> Path:
        return self.path.parent

    @property
    def exists(self) -> bool:
        return self.path.is_file()


def normalize_url_path(url_path: str) -> str:
    """
    Lexically normalize a URL path relative to the root.

    Collapses '.', '..' and repeated separators. A '..' above the root is
    dropped, so the result never starts with '..'.

    Args:
        url_path: Request path, e.g. '/alice/../bob//work.ics'

    Returns:
        Normalized path without leading or trailing separators, e.g. 'bob/work.ics'
    """
    return posixpath.normpath("/" + url_path).lstrip("/")


def resolve_calendar_path(root: Path, url_path: str) -> CalendarLocation:
    """
    Resolve a URL path to a calendar location under root.

    Args:
        root: Storage root directory
        url_path: Request path, e.g. '/alice/work.ics'

    Returns:
        CalendarLocation for the path

    Raises:
        InvalidPathError: If the path lacks the .ics suffix, has no owner
            segment, or would resolve outside root
    """
    if not url_path.endswith(CALENDAR_SUFFIX):
        raise InvalidPathError(f"Invalid path. Must end with {CALENDAR_SUFFIX}")

    relative = normalize_url_path(url_path)
    parts = [part for part in relative.split("/") if part]
    if (
        len(parts) < 2
        or not relative.endswith(CALENDAR_SUFFIX)
        or "\x00" in relative
    ):
        raise InvalidPathError(
            "Invalid path format. Expected /{username}/{calendar}.ics"
        )

    resolved_root = root.resolve()
    try:
        path = resolved_root.joinpath(*parts).resolve()
    except (OSError, ValueError) as e:
        raise InvalidPathError("Invalid path") from e

    # Symlinks inside the tree could still point elsewhere
    if path == resolved_root or not path.is_relative_to(resolved_root):
        raise InvalidPathError("Invalid path. Resolves outside the storage root")

    return CalendarLocation(
        owner=parts[0],
        relative_path=PurePosixPath(*parts),
        path=path,
    )
