"""CLI application and command registration."""

import typer
from typing_extensions import Annotated

from cli import setup_logging
from cli.commands import config_command, init_users_command, serve_command, users_command
from cli.context import CLIContext, get_context, set_context

app = typer.Typer(
    name="ical-server",
    help="Serve per-user iCal files with public reads and owner-only writes.",
    no_args_is_help=True,
)


@app.callback()
def main(
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Show info-level log output")
    ] = False,
    quiet: Annotated[
        bool, typer.Option("--quiet", "-q", help="Only show errors")
    ] = False,
) -> None:
    """Calendar server command line."""
    set_context(CLIContext())
    setup_logging(verbose=verbose, quiet=quiet, config=get_context().config)


app.command("serve")(serve_command)
app.command("init-users")(init_users_command)
app.command("users")(users_command)
app.command("config")(config_command)
