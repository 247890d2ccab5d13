"""Models for the calendar server."""

from icalserver.models.identity import Identity

__all__ = [
    "Identity",
]
