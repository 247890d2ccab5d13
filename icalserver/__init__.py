import logging

from flask import Flask, Response, request, send_file
from werkzeug.exceptions import ClientDisconnected

from .auth import Authenticator, CredentialStore
from .config import ServerConfig
from .constants import CALENDAR_CONTENT_TYPE
from .exceptions import (
    CalendarNotFoundError,
    CalendarServerError,
    ForbiddenError,
    InvalidPathError,
    StorageError,
    UnauthenticatedError,
)
from .handlers import get_calendar, put_calendar
from .storage import CalendarStorage

logger = logging.getLogger(__name__)

# Status for each request-time error, most specific first
ERROR_STATUS = [
    (UnauthenticatedError, 401),
    (ForbiddenError, 403),
    (CalendarNotFoundError, 404),
    (InvalidPathError, 400),
    (StorageError, 500),
]


def create_app(
    config: ServerConfig | None = None, credentials: CredentialStore | None = None
):
    """
    Build the calendar server.

    Args:
        config: Server configuration (default: from environment)
        credentials: Loaded credential store (default: loaded from config.users_file)

    Returns:
        Flask application
    """
    config = config or ServerConfig.from_env()
    if credentials is None:
        credentials = CredentialStore.load(config.users_file)

    storage = CalendarStorage(config.data_dir)
    storage.ensure_root()
    authenticator = Authenticator(credentials, realm=config.realm)

    # No static route, so an owner named "static" is still routed to calendars
    app = Flask(__name__, static_folder=None)
    # Path normalization happens in the resolver, not via redirects
    app.url_map.merge_slashes = False

    @app.errorhandler(CalendarServerError)
    def handle_calendar_error(error: CalendarServerError):
        status = next(
            (code for exc_type, code in ERROR_STATUS if isinstance(error, exc_type)),
            500,
        )
        headers = {}
        if status == 401:
            message = "Unauthorized"
            headers["WWW-Authenticate"] = authenticator.challenge
        elif status == 500:
            # Details are logged where the error is raised
            message = "Internal Server Error"
        else:
            message = str(error)
        return Response(message, status=status, mimetype="text/plain", headers=headers)

    def read_body() -> bytes:
        try:
            return request.get_data(cache=False)
        except (ClientDisconnected, OSError) as e:
            logger.error(f"Error reading request body: {e}")
            raise StorageError("Could not read request body") from e

    @app.route("/", methods=["GET"])
    def index():
        """Serve the web interface page."""
        if not config.index_file.is_file():
            return Response("Not Found", status=404, mimetype="text/plain")
        return send_file(config.index_file.resolve(), mimetype="text/html")

    @app.route(
        "/<path:calendar_path>",
        methods=["GET", "PUT"],
        provide_automatic_options=False,
    )
    def calendar(calendar_path: str):
        """Public read or owner-only write of a calendar file."""
        if request.method == "PUT":
            identity = authenticator.authenticate(request.authorization)
            put_calendar(storage, identity, request.path, read_body)
            return Response(status=204)

        content = get_calendar(storage, request.path)
        return Response(content, content_type=CALENDAR_CONTENT_TYPE)

    return app


__all__ = ["create_app"]
