"""CLI commands package."""

from cli.commands.config import config_command
from cli.commands.init_users import init_users_command
from cli.commands.serve import serve_command
from cli.commands.users import users_command

__all__ = [
    "config_command",
    "init_users_command",
    "serve_command",
    "users_command",
]
