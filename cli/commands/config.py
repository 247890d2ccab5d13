"""Display configuration file path and settings."""

import os
from pathlib import Path

from rich.table import Table

from icalserver.config import ServerConfig
from cli.display import console


def _find_env_file() -> Path | None:
    """Find .env file by searching current directory and parent directories."""
    current = Path.cwd()

    # Check current directory and all parent directories
    for path in [current] + list(current.parents):
        env_file = path / ".env"
        if env_file.exists():
            return env_file.resolve()

    return None


def _get_source(env_key: str, value, default_value) -> str:
    """Determine the source of a config value."""
    if env_key in os.environ or value != default_value:
        return "env"
    return "default"


def _create_table(setting_width: int, source_width: int) -> Table:
    """Create a styled table for config sections with fixed column widths."""
    table = Table(show_header=True, header_style="bold", box=None, padding=(0, 2))
    table.add_column("SETTING", style="cyan", min_width=setting_width, no_wrap=True)
    table.add_column("SOURCE", style="dim", min_width=source_width, no_wrap=True)
    table.add_column("VALUE")
    return table


def _path_row(name: str, env_key: str, cfg: ServerConfig, default: ServerConfig):
    value = getattr(cfg, name)
    return (
        name,
        str(value.resolve()),
        _get_source(env_key, str(value), str(getattr(default, name))),
    )


def config_command() -> None:
    """Display configuration file path and settings."""
    env_file = _find_env_file()

    # Get default config for comparison
    default_config = ServerConfig()

    # Load config (from .env and environment)
    cfg = ServerConfig.from_env()

    sections: list[tuple[str, list[tuple[str, str, str]]]] = [
        (
            "Storage Paths",
            [
                _path_row("data_dir", "ICAL_DATA_DIR", cfg, default_config),
                _path_row("users_file", "ICAL_USERS_FILE", cfg, default_config),
                _path_row("index_file", "ICAL_INDEX_FILE", cfg, default_config),
                _path_row("log_dir", "ICAL_LOG_DIR", cfg, default_config),
            ],
        ),
        (
            "File Naming",
            [
                (
                    "log_filename",
                    cfg.log_filename,
                    _get_source(
                        "ICAL_LOG_FILENAME", cfg.log_filename, default_config.log_filename
                    ),
                ),
            ],
        ),
        (
            "Network",
            [
                ("host", cfg.host, _get_source("ICAL_HOST", cfg.host, default_config.host)),
                (
                    "port",
                    str(cfg.port),
                    _get_source("ICAL_PORT", cfg.port, default_config.port),
                ),
            ],
        ),
        (
            "Authentication",
            [
                (
                    "realm",
                    cfg.realm,
                    _get_source("ICAL_REALM", cfg.realm, default_config.realm),
                ),
            ],
        ),
    ]

    # Calculate max widths across all sections
    all_rows = [row for _, rows in sections for row in rows]
    setting_width = max(max(len(row[0]) for row in all_rows), len("SETTING"))
    source_width = max(max(len(row[2]) for row in all_rows), len("SOURCE"))

    # Header
    console.print()
    console.print("━" * 50)
    console.print("[bold]  Configuration[/bold]")
    console.print("━" * 50)

    # Config file section
    console.print("\n[bold]Config File:[/bold]")
    if env_file:
        console.print(f"  [cyan]{env_file}[/cyan]")
    else:
        console.print("  [dim]Not found (using defaults and environment variables)[/dim]")

    # Render each section
    for section_name, rows in sections:
        console.print(f"\n[bold]{section_name}:[/bold]")
        table = _create_table(setting_width, source_width)
        for setting, value, source in rows:
            table.add_row(setting, source, value)
        console.print(table)

    console.print()
