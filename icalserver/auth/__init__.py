"""Authentication for calendar writes."""

from icalserver.auth.authenticator import Authenticator
from icalserver.auth.credentials import CredentialStore

__all__ = [
    "Authenticator",
    "CredentialStore",
]
