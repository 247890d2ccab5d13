"""CLI package for the calendar server."""

import logging
import sys

from icalserver.config import ServerConfig

# Werkzeug's development server logs one INFO line per request here
ACCESS_LOGGER = "werkzeug"
SERVER_LOGGER = "icalserver"


class AccessLogFilter(logging.Filter):
    """Drop per-request access lines from the console unless asked for."""

    def __init__(self, show_access: bool):
        super().__init__()
        self.show_access = show_access

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name != ACCESS_LOGGER and not record.name.startswith(
            ACCESS_LOGGER + "."
        ):
            return True
        return self.show_access or record.levelno >= logging.WARNING


def setup_logging(
    verbose: bool = False, quiet: bool = False, config: ServerConfig | None = None
) -> None:
    """Send server and access logs to the log file and a terse console.

    The log file records everything, including one access line per request
    and each calendar update or rejected write. The console shows warnings
    and errors by default; with verbose it also shows server activity and
    request lines.

    Args:
        verbose: Show INFO output and access lines on the console
        quiet: Show only errors on the console
        config: ServerConfig for log directory/filename (default: from environment)
    """
    if config is None:
        config = ServerConfig.from_env()

    config.log_dir.mkdir(parents=True, exist_ok=True)

    file_handler = logging.FileHandler(config.log_dir / config.log_filename)
    file_handler.setFormatter(
        logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    )
    file_handler.setLevel(logging.DEBUG)

    # Werkzeug access lines already carry their own timestamp
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    console_handler.addFilter(AccessLogFilter(show_access=verbose and not quiet))
    if quiet:
        console_handler.setLevel(logging.ERROR)
    elif verbose:
        console_handler.setLevel(logging.INFO)
    else:
        console_handler.setLevel(logging.WARNING)

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    for handler in root_logger.handlers:
        handler.close()
    root_logger.handlers.clear()
    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)

    # Both record at INFO so the file keeps requests and calendar updates
    logging.getLogger(ACCESS_LOGGER).setLevel(logging.INFO)
    logging.getLogger(SERVER_LOGGER).setLevel(logging.INFO)


def main() -> None:
    """Main entry point for the CLI."""
    from cli.parser import app

    app()


__all__ = ["AccessLogFilter", "main", "setup_logging"]
