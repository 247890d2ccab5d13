"""Start the calendar server."""

import logging

import typer
from typing_extensions import Annotated

from icalserver import create_app
from icalserver.auth.credentials import CredentialStore
from icalserver.exceptions import CredentialsNotFoundError, CredentialsParseError
from cli.context import get_context
from cli.display import console

logger = logging.getLogger(__name__)


def serve_command(
    host: Annotated[
        str | None,
        typer.Option("--host", help="Interface to listen on (overrides ICAL_HOST)"),
    ] = None,
    port: Annotated[
        int | None,
        typer.Option("--port", "-p", help="Port to listen on (overrides ICAL_PORT)"),
    ] = None,
    debug: Annotated[
        bool,
        typer.Option("--debug", help="Run Flask in debug mode"),
    ] = False,
) -> None:
    """
    Start the calendar server.

    Loads the users file before serving. If it does not exist, a default one
    with placeholder passwords is written and the server exits so the
    passwords can be changed first.
    """
    ctx = get_context()
    config = ctx.config

    try:
        credentials = ctx.credentials
    except CredentialsNotFoundError:
        logger.warning(f"User file '{config.users_file}' not found.")
        try:
            CredentialStore.bootstrap(config.users_file)
        except OSError as e:
            logger.error(f"Could not write default user file: {e}")
            raise typer.Exit(1)
        logger.error(
            f"A default '{config.users_file}' has been created. "
            "Please edit it with real credentials and restart the server."
        )
        raise typer.Exit(1)
    except CredentialsParseError as e:
        logger.error(f"Failed to load users: {e}")
        raise typer.Exit(1)

    try:
        app = create_app(config, credentials)
    except OSError as e:
        logger.error(f"Failed to create data directory '{config.data_dir}': {e}")
        raise typer.Exit(1)

    host = host or config.host
    port = port or config.port

    console.print(f"iCal Server starting on [cyan]http://{host}:{port}[/cyan]")
    console.print(f"Storing calendar files in [cyan]{config.data_dir.resolve()}[/cyan]")
    logger.info(f"Serving {len(credentials)} users on {host}:{port}")

    app.run(host=host, port=port, debug=debug, threaded=True, use_reloader=False)
