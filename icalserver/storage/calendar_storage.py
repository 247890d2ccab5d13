"""Calendar storage for file management."""

import logging
from pathlib import Path

from icalserver.exceptions import CalendarNotFoundError, StorageError
from icalserver.storage.calendar_paths import CalendarLocation, resolve_calendar_path
from icalserver.utils import atomic_write

logger = logging.getLogger(__name__)


class CalendarStorage:
    """File management for calendars stored as {root}/{owner}/{name}.ics."""

    def __init__(self, root: Path):
        """Initialize storage rooted at root."""
        self.root = Path(root)

    def ensure_root(self) -> None:
        """Ensure the storage root exists."""
        self.root.mkdir(parents=True, exist_ok=True)

    def resolve(self, url_path: str) -> CalendarLocation:
        """Resolve a URL path to a location under this storage root."""
        return resolve_calendar_path(self.root, url_path)

    def read_calendar(self, location: CalendarLocation) -> bytes:
        """
        Read a calendar file.

        Args:
            location: Resolved calendar location

        Returns:
            The calendar content as bytes

        Raises:
            CalendarNotFoundError: If the calendar has never been written
            StorageError: If the file exists but cannot be read
        """
        try:
            if not location.exists:
                raise CalendarNotFoundError(
                    f"Calendar '{location.relative_path}' not found"
                )
            return location.path.read_bytes()
        except FileNotFoundError as e:
            # Removed between the check and the read
            raise CalendarNotFoundError(
                f"Calendar '{location.relative_path}' not found"
            ) from e
        except OSError as e:
            logger.error(f"Error reading file {location.path}: {e}")
            raise StorageError(f"Could not read {location.path}") from e

    def save_calendar(self, location: CalendarLocation, content: bytes) -> Path:
        """
        Create or fully replace a calendar file.

        Args:
            location: Resolved calendar location
            content: Raw calendar document, stored as-is

        Returns:
            Path to saved file

        Raises:
            StorageError: If the owner directory or the file cannot be written
        """
        try:
            location.directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.error(f"Error creating directory {location.directory}: {e}")
            raise StorageError(f"Could not create {location.directory}") from e

        try:
            with atomic_write(location.path) as f:
                f.write(content)
        except OSError as e:
            logger.error(f"Error writing file {location.path}: {e}")
            raise StorageError(f"Could not write {location.path}") from e

        logger.info(f"Updated calendar: {location.path}")
        return location.path
