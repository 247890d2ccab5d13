import base64

import pytest

from icalserver import create_app
from icalserver.auth.credentials import CredentialStore
from icalserver.config import ServerConfig


def _basic_auth_header(username: str, password: str) -> dict:
    """Build an Authorization header for HTTP Basic credentials."""
    token = base64.b64encode(f"{username}:{password}".encode("utf-8")).decode("ascii")
    return {"Authorization": f"Basic {token}"}


@pytest.fixture
def basic_auth():
    """Factory for Basic Authorization headers."""
    return _basic_auth_header


@pytest.fixture
def alice_auth():
    return _basic_auth_header("alice", "s3cr3t")


@pytest.fixture
def bob_auth():
    return _basic_auth_header("bob", "hunter2")


@pytest.fixture
def credentials():
    """Credential store with two users."""
    return CredentialStore({"alice": "s3cr3t", "bob": "hunter2"})


@pytest.fixture
def config(tmp_path):
    """Server config pointing at temporary directories."""
    return ServerConfig(
        data_dir=tmp_path / "calendars",
        users_file=tmp_path / "users.json",
        log_dir=tmp_path / "logs",
    )


@pytest.fixture
def app(config, credentials):
    """Create and configure a Flask app for testing."""
    app = create_app(config, credentials)
    app.config.update({"TESTING": True})
    return app


@pytest.fixture
def client(app):
    """Create a test client for the app."""
    return app.test_client()


@pytest.fixture
def data_dir(config):
    return config.data_dir
