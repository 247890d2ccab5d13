"""Username to secret mapping loaded from a JSON document."""

import json
import logging
from collections.abc import Iterator, Mapping
from pathlib import Path
from types import MappingProxyType

from icalserver.constants import DEFAULT_USERS
from icalserver.exceptions import CredentialsNotFoundError, CredentialsParseError

logger = logging.getLogger(__name__)


class CredentialStore(Mapping[str, str]):
    """Read-only mapping of username to secret.

    Built once at startup and never mutated, so any number of request
    threads may query it concurrently. Restart the server to pick up
    changes to the users file.
    """

    def __init__(self, users: Mapping[str, str]):
        self._users = MappingProxyType(dict(users))

    def lookup(self, username: str) -> str | None:
        """Return the secret for username, or None if unknown."""
        return self._users.get(username)

    def __getitem__(self, username: str) -> str:
        return self._users[username]

    def __iter__(self) -> Iterator[str]:
        return iter(self._users)

    def __len__(self) -> int:
        return len(self._users)

    def __repr__(self) -> str:
        # Never expose secrets
        return f"CredentialStore(users={sorted(self._users)!r})"

    @classmethod
    def load(cls, path: Path) -> "CredentialStore":
        """
        Load credentials from a JSON object of username to secret.

        Args:
            path: Path to the users file

        Returns:
            CredentialStore with every entry in the file

        Raises:
            CredentialsNotFoundError: If the file does not exist
            CredentialsParseError: If the file is not a JSON object of strings
        """
        path = Path(path)
        try:
            raw = path.read_text(encoding="utf-8")
        except FileNotFoundError as e:
            raise CredentialsNotFoundError(
                f"Could not read user file '{path}': file not found"
            ) from e
        except (OSError, UnicodeDecodeError) as e:
            raise CredentialsParseError(f"Could not read user file '{path}': {e}") from e

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise CredentialsParseError(
                f"Could not parse user file '{path}' as JSON: {e}"
            ) from e

        if not isinstance(data, dict):
            raise CredentialsParseError(
                f"User file '{path}' must contain a JSON object of username to password"
            )
        for username, secret in data.items():
            if not isinstance(secret, str):
                raise CredentialsParseError(
                    f"Password for user '{username}' in '{path}' must be a string"
                )

        logger.info(f"Successfully loaded {len(data)} users from {path}")
        return cls(data)

    @classmethod
    def bootstrap(cls, path: Path) -> "CredentialStore":
        """
        Write a placeholder users file and return its credentials.

        The placeholder secrets are public; callers must stop and ask the
        operator to edit the file rather than serve with them.

        Args:
            path: Path where the users file is created

        Returns:
            CredentialStore holding the placeholder users

        Raises:
            FileExistsError: If path already exists
        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "x", encoding="utf-8") as f:
            json.dump(DEFAULT_USERS, f, indent=2)
            f.write("\n")
        logger.warning(f"Created default user file '{path}'")
        return cls(DEFAULT_USERS)
