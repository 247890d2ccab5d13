"""List users allowed to publish calendars."""

import logging

import typer
from rich.table import Table

from icalserver.exceptions import StartupError
from cli.context import get_context
from cli.display import console

logger = logging.getLogger(__name__)


def users_command() -> None:
    """List usernames from the users file and their stored calendar counts."""
    ctx = get_context()
    config = ctx.config

    try:
        credentials = ctx.credentials
    except StartupError as e:
        logger.error(str(e))
        raise typer.Exit(1)

    table = Table(show_header=True, header_style="bold", box=None, padding=(0, 2))
    table.add_column("USER", style="cyan", no_wrap=True)
    table.add_column("CALENDARS", justify="right")

    for username in sorted(credentials):
        user_dir = config.data_dir / username
        count = len(list(user_dir.rglob("*.ics"))) if user_dir.is_dir() else 0
        table.add_row(username, str(count))

    console.print(table)
