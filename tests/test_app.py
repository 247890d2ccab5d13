"""Tests for the HTTP routes."""

from pathlib import Path

import pytest

from icalserver import create_app
from icalserver.auth.credentials import CredentialStore
from icalserver.config import ServerConfig
from icalserver.exceptions import CredentialsNotFoundError


def test_app_factory_exists():
    """Test that the app factory function exists."""
    assert callable(create_app)


def test_app_factory_creates_data_dir(app, data_dir):
    """Test that building the app creates the storage root."""
    assert data_dir.is_dir()


def test_app_factory_requires_users_file(tmp_path):
    """Without explicit credentials the users file must exist."""
    config = ServerConfig(data_dir=tmp_path / "calendars", users_file=tmp_path / "missing.json")
    with pytest.raises(CredentialsNotFoundError):
        create_app(config)


def test_index_serves_web_interface(client):
    """GET / serves the packaged index page."""
    response = client.get("/")
    assert response.status_code == 200
    assert response.mimetype == "text/html"
    assert b"iCal Server" in response.data


def test_index_missing_returns_404(tmp_path, credentials):
    """GET / returns 404 when the configured index page does not exist."""
    config = ServerConfig(
        data_dir=tmp_path / "calendars", index_file=tmp_path / "nope.html"
    )
    client = create_app(config, credentials).test_client()
    assert client.get("/").status_code == 404


def test_put_then_get_round_trip(client, alice_auth):
    """Writing a calendar as its owner makes it readable by anyone."""
    response = client.put("/alice/work.ics", data=b"X", headers=alice_auth)
    assert response.status_code == 204
    assert response.data == b""

    response = client.get("/alice/work.ics")
    assert response.status_code == 200
    assert response.data == b"X"
    assert response.headers["Content-Type"] == "text/calendar; charset=utf-8"


def test_put_stores_bytes_verbatim(client, data_dir, alice_auth):
    """The payload is stored without validation or re-encoding."""
    payload = b"BEGIN:VCALENDAR\r\n\xff\xfenot really ical\r\nEND:VCALENDAR\r\n"
    assert client.put("/alice/work.ics", data=payload, headers=alice_auth).status_code == 204
    assert (data_dir / "alice" / "work.ics").read_bytes() == payload
    assert client.get("/alice/work.ics").data == payload


def test_put_empty_body(client, alice_auth):
    """An empty body creates an empty calendar file."""
    assert client.put("/alice/empty.ics", data=b"", headers=alice_auth).status_code == 204
    response = client.get("/alice/empty.ics")
    assert response.status_code == 200
    assert response.data == b""


def test_rewrite_replaces_content(client, alice_auth):
    """A second write fully replaces the first."""
    client.put("/alice/work.ics", data=b"A", headers=alice_auth)
    client.put("/alice/work.ics", data=b"B", headers=alice_auth)
    assert client.get("/alice/work.ics").data == b"B"


def test_put_nested_calendar(client, data_dir, alice_auth):
    """Calendars may sit in subdirectories of the owner's directory."""
    assert client.put("/alice/team/work.ics", data=b"T", headers=alice_auth).status_code == 204
    assert (data_dir / "alice" / "team" / "work.ics").read_bytes() == b"T"
    assert client.get("/alice/team/work.ics").data == b"T"


def test_get_never_written_returns_404(client):
    """Reading a calendar that was never written is 404."""
    assert client.get("/bob/work.ics").status_code == 404


def test_get_needs_no_credentials(client, basic_auth, alice_auth):
    """Reads ignore credentials entirely, even wrong ones."""
    client.put("/alice/work.ics", data=b"X", headers=alice_auth)
    response = client.get("/alice/work.ics", headers=basic_auth("alice", "wrong"))
    assert response.status_code == 200
    assert response.data == b"X"


def test_head_returns_headers_only(client, alice_auth):
    """HEAD mirrors GET without a body."""
    client.put("/alice/work.ics", data=b"X", headers=alice_auth)
    response = client.head("/alice/work.ics")
    assert response.status_code == 200
    assert response.headers["Content-Type"] == "text/calendar; charset=utf-8"
    assert response.data == b""


@pytest.mark.parametrize("path", ["/alice/work.txt", "/alice/work", "/work.ics", "/alice/"])
def test_get_malformed_path_returns_404(client, path):
    """GETs for paths that are not calendars are 404."""
    assert client.get(path).status_code == 404


@pytest.mark.parametrize("path", ["/alice/work.txt", "/alice/work", "/work.ics"])
def test_put_malformed_path_returns_400(client, path, alice_auth):
    """Authenticated PUTs to paths that are not calendars are 400."""
    assert client.put(path, data=b"X", headers=alice_auth).status_code == 400


def test_put_malformed_path_checks_credentials_first(client):
    """Authentication runs before the path is validated."""
    assert client.put("/alice/work.txt", data=b"X").status_code == 401


def test_put_without_credentials_returns_challenge(client, data_dir):
    """A PUT with no credentials is 401 with a Basic challenge."""
    response = client.put("/alice/work.ics", data=b"X")
    assert response.status_code == 401
    assert response.headers["WWW-Authenticate"] == 'Basic realm="Restricted"'
    assert not (data_dir / "alice" / "work.ics").exists()


def test_put_uses_configured_realm(tmp_path, credentials):
    """The challenge names the configured realm."""
    config = ServerConfig(data_dir=tmp_path / "calendars", realm="Calendars")
    client = create_app(config, credentials).test_client()
    response = client.put("/alice/work.ics", data=b"X")
    assert response.headers["WWW-Authenticate"] == 'Basic realm="Calendars"'


def test_auth_failures_are_indistinguishable(client, basic_auth):
    """No credentials, a wrong secret and an unknown user look the same."""
    responses = [
        client.put("/alice/work.ics", data=b"X"),
        client.put("/alice/work.ics", data=b"X", headers=basic_auth("alice", "wrong")),
        client.put("/alice/work.ics", data=b"X", headers=basic_auth("mallory", "s3cr3t")),
        client.put(
            "/alice/work.ics", data=b"X", headers={"Authorization": "Bearer s3cr3t"}
        ),
        client.put(
            "/alice/work.ics", data=b"X", headers={"Authorization": "Basic !!!notbase64"}
        ),
    ]
    first = responses[0]
    for response in responses:
        assert response.status_code == 401
        assert response.data == first.data
        assert response.headers["WWW-Authenticate"] == first.headers["WWW-Authenticate"]
        assert response.headers["Content-Type"] == first.headers["Content-Type"]


def test_put_other_owner_is_forbidden(client, data_dir, bob_auth):
    """An authenticated user cannot write another owner's calendar."""
    response = client.put("/alice/work.ics", data=b"evil", headers=bob_auth)
    assert response.status_code == 403
    assert not (data_dir / "alice" / "work.ics").exists()


def test_put_other_owner_leaves_existing_calendar(client, alice_auth, bob_auth):
    """A rejected write does not touch the existing calendar."""
    client.put("/alice/work.ics", data=b"X", headers=alice_auth)
    assert client.put("/alice/work.ics", data=b"evil", headers=bob_auth).status_code == 403
    assert client.get("/alice/work.ics").data == b"X"


def test_scenario_alice_and_bob(client, basic_auth, alice_auth, bob_auth):
    """Walk through a typical session for two users."""
    assert client.put("/alice/work.ics", data=b"X", headers=alice_auth).status_code == 204
    response = client.get("/alice/work.ics")
    assert response.status_code == 200
    assert response.data == b"X"
    assert client.put("/alice/work.ics", data=b"Y", headers=bob_auth).status_code == 403
    assert (
        client.put("/alice/work.ics", data=b"Y", headers=basic_auth("carol", "x")).status_code
        == 401
    )
    assert client.get("/bob/work.ics").status_code == 404


def test_put_traversal_cannot_spoof_owner(client, data_dir, alice_auth):
    """Owner is taken from the normalized path, not the raw first segment."""
    response = client.put("/alice/%2e%2e/bob/work.ics", data=b"evil", headers=alice_auth)
    assert response.status_code == 403
    assert not (data_dir / "bob" / "work.ics").exists()


def test_put_traversal_stays_under_root(client, data_dir, tmp_path, alice_auth):
    """Leading '..' segments are dropped and the write lands under the root."""
    response = client.put("/%2e%2e/%2e%2e/alice/escape.ics", data=b"X", headers=alice_auth)
    assert response.status_code == 204
    assert (data_dir / "alice" / "escape.ics").read_bytes() == b"X"
    assert not (tmp_path / "alice").exists()


def test_get_traversal_stays_under_root(client, tmp_path):
    """GETs cannot read files outside the storage root."""
    (tmp_path / "secret").mkdir()
    (tmp_path / "secret" / "passwd.ics").write_bytes(b"secret")
    response = client.get("/alice/%2e%2e/%2e%2e/secret/passwd.ics")
    assert response.status_code == 404


def test_get_dot_segments_are_collapsed(client, alice_auth):
    """Equivalent spellings of a path reach the same calendar."""
    client.put("/alice/work.ics", data=b"X", headers=alice_auth)
    assert client.get("/alice/./work.ics").data == b"X"
    assert client.get("/bob/%2e%2e/alice/work.ics").data == b"X"


@pytest.mark.parametrize("method", ["POST", "DELETE", "PATCH", "OPTIONS"])
def test_other_methods_not_allowed(client, method, alice_auth):
    """Only GET and PUT are accepted on calendar paths."""
    response = client.open("/alice/work.ics", method=method, headers=alice_auth)
    assert response.status_code == 405


def test_storage_failure_returns_generic_500(client, data_dir, alice_auth):
    """I/O failures surface as a bare 500 without internal details."""
    # A file where the owner directory should be
    (data_dir / "alice").write_bytes(b"")
    response = client.put("/alice/work.ics", data=b"X", headers=alice_auth)
    assert response.status_code == 500
    assert response.data == b"Internal Server Error"
    assert str(data_dir).encode() not in response.data


def test_owner_named_static_is_a_calendar_owner(tmp_path, basic_auth):
    """No built-in static route shadows calendar paths."""
    config = ServerConfig(data_dir=tmp_path / "calendars")
    client = create_app(config, CredentialStore({"static": "pw"})).test_client()
    auth = basic_auth("static", "pw")
    assert client.put("/static/work.ics", data=b"S", headers=auth).status_code == 204
    assert client.get("/static/work.ics").data == b"S"
    assert client.get("/static/index.html").status_code == 404


def test_unreadable_calendar_returns_plain_500(client, alice_auth, monkeypatch):
    """A read failure goes through the same generic 500 as a write failure."""
    client.put("/alice/work.ics", data=b"X", headers=alice_auth)

    def deny(self):
        raise PermissionError(13, "Permission denied", str(self))

    monkeypatch.setattr(Path, "read_bytes", deny)

    response = client.get("/alice/work.ics")
    assert response.status_code == 500
    assert response.mimetype == "text/plain"
    assert response.data == b"Internal Server Error"
