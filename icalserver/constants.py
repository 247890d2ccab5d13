"""Shared constants for the calendar server."""

# Every calendar resource path ends with this suffix
CALENDAR_SUFFIX = ".ics"

# Media type for calendar responses
CALENDAR_CONTENT_TYPE = "text/calendar; charset=utf-8"

# Basic auth realm sent with 401 challenges
DEFAULT_REALM = "Restricted"

# Placeholder credentials written when no users file exists
DEFAULT_USERS = {
    "user1": "changeme",
    "user2": "pleasereset",
}
