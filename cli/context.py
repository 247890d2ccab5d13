"""CLI context holding lazily loaded configuration and credentials."""

from icalserver.auth.credentials import CredentialStore
from icalserver.config import ServerConfig


class CLIContext:
    """Shared state for a single CLI invocation."""

    def __init__(self, config: ServerConfig | None = None):
        self._config = config
        self._credentials: CredentialStore | None = None

    @property
    def config(self) -> ServerConfig:
        """Get configuration (lazy-loaded)."""
        if self._config is None:
            self._config = ServerConfig.from_env()
        return self._config

    @property
    def credentials(self) -> CredentialStore:
        """Get credential store (lazy-loaded).

        Raises:
            CredentialsNotFoundError: If the users file does not exist
            CredentialsParseError: If the users file is malformed
        """
        if self._credentials is None:
            self._credentials = CredentialStore.load(self.config.users_file)
        return self._credentials


# Global context instance (set by Typer callback)
_ctx: CLIContext | None = None


def get_context() -> CLIContext:
    """Get the current CLI context.

    Returns:
        The global CLI context instance

    Raises:
        RuntimeError: If context not initialized
    """
    if _ctx is None:
        raise RuntimeError("CLI context not initialized. This should not happen.")
    return _ctx


def set_context(ctx: CLIContext) -> None:
    """Set the global CLI context.

    Args:
        ctx: The CLI context instance to set
    """
    global _ctx
    _ctx = ctx
