"""Write a placeholder users file."""

import logging

import typer
from typing_extensions import Annotated

from icalserver.auth.credentials import CredentialStore
from cli.context import get_context

logger = logging.getLogger(__name__)


def init_users_command(
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Overwrite an existing users file"),
    ] = False,
) -> None:
    """Create a users file with placeholder credentials to edit."""
    config = get_context().config
    users_file = config.users_file

    if users_file.exists():
        if not force:
            logger.error(f"User file '{users_file}' already exists (use --force to overwrite)")
            raise typer.Exit(1)
        users_file.unlink()

    store = CredentialStore.bootstrap(users_file)

    print(f"{typer.style('✓', fg=typer.colors.GREEN, bold=True)} Created {users_file}")
    print(f"  Users: {', '.join(sorted(store))}")
    print(
        f"\n{typer.style('Hint:', bold=True)} Replace the placeholder passwords "
        "before starting the server."
    )
