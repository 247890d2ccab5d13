"""Exception hierarchy for calendar server operations."""


class CalendarServerError(Exception):
    """Base exception for calendar server operations."""

    pass


class StartupError(CalendarServerError):
    """Fatal error raised before the server starts serving traffic."""

    pass


class CredentialsNotFoundError(StartupError):
    """Credential document does not exist."""

    pass


class CredentialsParseError(StartupError):
    """Credential document is not a JSON object of username to secret."""

    pass


class InvalidPathError(CalendarServerError):
    """URL path does not address a calendar inside the storage root."""

    pass


class UnauthenticatedError(CalendarServerError):
    """Missing or incorrect credentials."""

    pass


class ForbiddenError(CalendarServerError):
    """Authenticated user may not write to another owner's calendars."""

    pass


class CalendarNotFoundError(CalendarServerError):
    """Calendar not found."""

    pass


class StorageError(CalendarServerError):
    """Error creating directories or writing calendar files."""

    pass
