"""Display helpers for CLI output."""

from cli.display.console import console

__all__ = ["console"]
