"""HTTP Basic authentication against the credential store."""

import hmac
import logging

from werkzeug.datastructures import Authorization

from icalserver.auth.credentials import CredentialStore
from icalserver.constants import DEFAULT_REALM
from icalserver.exceptions import UnauthenticatedError
from icalserver.models.identity import Identity

logger = logging.getLogger(__name__)

# Compared against when the username is unknown, so both failure
# cases run the same comparison
_DUMMY_SECRET = "\x00" * 32


class Authenticator:
    """Validates Basic credentials and produces an Identity."""

    def __init__(self, credentials: CredentialStore, realm: str = DEFAULT_REALM):
        self.credentials = credentials
        self.realm = realm

    @property
    def challenge(self) -> str:
        """Value for the WWW-Authenticate header on 401 responses."""
        return f'Basic realm="{self.realm}"'

    def authenticate(self, authorization: Authorization | None) -> Identity:
        """
        Verify the request's Basic credentials.

        Args:
            authorization: Parsed Authorization header (request.authorization)

        Returns:
            Identity for the verified username

        Raises:
            UnauthenticatedError: If the header is missing, malformed, not
                Basic, or the credentials do not match. The error carries
                no hint of which check failed.
        """
        if (
            authorization is None
            or authorization.type != "basic"
            or authorization.username is None
            or authorization.password is None
        ):
            raise UnauthenticatedError("Unauthorized")

        username = authorization.username
        expected = self.credentials.lookup(username)
        matches = hmac.compare_digest(
            (expected if expected is not None else _DUMMY_SECRET).encode("utf-8"),
            authorization.password.encode("utf-8"),
        )
        if expected is None or not matches:
            logger.info("Rejected credentials for a write request")
            raise UnauthenticatedError("Unauthorized")

        return Identity(username=username)
