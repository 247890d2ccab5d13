"""Storage layer for calendar files."""

from icalserver.storage.calendar_paths import CalendarLocation, resolve_calendar_path
from icalserver.storage.calendar_storage import CalendarStorage

__all__ = [
    "CalendarLocation",
    "CalendarStorage",
    "resolve_calendar_path",
]
