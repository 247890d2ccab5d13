"""Shared Rich console instance for terminal output."""

from rich.console import Console

# Used by every command that prints tables or status lines
console = Console()
