"""Calendar read and write operations behind the HTTP routes."""

import logging
from collections.abc import Callable
from pathlib import Path

from icalserver.exceptions import CalendarNotFoundError, ForbiddenError, InvalidPathError
from icalserver.models.identity import Identity
from icalserver.storage.calendar_storage import CalendarStorage

logger = logging.getLogger(__name__)


def get_calendar(storage: CalendarStorage, url_path: str) -> bytes:
    """
    Read a calendar for anyone who asks.

    Args:
        storage: Calendar storage
        url_path: Request path, e.g. '/alice/work.ics'

    Returns:
        The stored calendar bytes

    Raises:
        CalendarNotFoundError: If the path is malformed or nothing is stored there
    """
    try:
        location = storage.resolve(url_path)
    except InvalidPathError as e:
        raise CalendarNotFoundError(str(e)) from e

    return storage.read_calendar(location)


def put_calendar(
    storage: CalendarStorage,
    identity: Identity,
    url_path: str,
    read_body: Callable[[], bytes],
) -> Path:
    """
    Create or replace a calendar owned by identity.

    Args:
        storage: Calendar storage
        identity: Identity returned by the authenticator for this request
        url_path: Request path, e.g. '/alice/work.ics'
        read_body: Returns the full request body; only called once the
            path and owner are accepted

    Returns:
        Path to saved file

    Raises:
        InvalidPathError: If the path does not address a calendar
        ForbiddenError: If the path's owner is not identity
        StorageError: If the file cannot be written
    """
    location = storage.resolve(url_path)

    if not identity.owns(location.owner):
        logger.warning(
            f"User '{identity.username}' tried to write {location.relative_path}"
        )
        raise ForbiddenError("Forbidden. You can only edit your own calendars.")

    return storage.save_calendar(location, read_body())
