import http.client
import io
import json
import urllib.error
import urllib.parse

import pytest

from seafile_link import api
from seafile_link.errors import AuthError, PermanentError


class Resp:
    def __init__(self, status=200, body=b"", headers=None):
        self.status = status
        self.headers = headers or {}
        self._body = body

    def __enter__(self):
        return self

    def __exit__(self, *a):
        return False

    def read(self):
        return self._body


def http_error(url, code, body=b"", headers=None):
    return urllib.error.HTTPError(url, code, "err", headers or {}, io.BytesIO(body))


def fake_urlopen(monkeypatch, handler):
    calls = []

    def urlopen(req, timeout=None):
        calls.append(req)
        result = handler(req)
        if isinstance(result, Exception):
            raise result
        return result

    monkeypatch.setattr(api.urllib.request, "urlopen", urlopen)
    return calls


def test_api_base_strips_trailing_slashes():
    assert api.api_base("https://seafile.example.com///") == "https://seafile.example.com/api2/"
    assert api.api_base("https://seafile.example.com") == "https://seafile.example.com/api2/"


def test_login_success_installs_token(monkeypatch):
    calls = fake_urlopen(
        monkeypatch, lambda req: Resp(200, json.dumps({"token": "abc123"}).encode())
    )
    client = api.SeafileClient("https://seafile.example.com/")
    assert client.login("me@example.com", "pw") == "abc123"
    assert client.logged_in is True

    req = calls[0]
    assert req.get_method() == "POST"
    assert req.full_url == "https://seafile.example.com/api2/auth-token/"
    assert urllib.parse.parse_qs(req.data.decode()) == {
        "username": ["me@example.com"],
        "password": ["pw"],
    }


@pytest.mark.parametrize("code", [400, 403])
def test_login_bad_credentials_is_auth_error(monkeypatch, code):
    fake_urlopen(
        monkeypatch,
        lambda req: http_error(req.full_url, code, b'{"non_field_errors": ["bad"]}'),
    )
    client = api.SeafileClient("https://seafile.example.com")
    with pytest.raises(AuthError):
        client.login("me", "wrong")
    assert client.logged_in is False


def test_login_connection_failure_is_permanent(monkeypatch):
    fake_urlopen(monkeypatch, lambda req: urllib.error.URLError("refused"))
    client = api.SeafileClient("https://seafile.example.com")
    with pytest.raises(PermanentError):
        client.login("me", "pw")


def test_login_server_error_is_permanent(monkeypatch):
    fake_urlopen(monkeypatch, lambda req: http_error(req.full_url, 500, b"oops"))
    with pytest.raises(PermanentError):
        api.SeafileClient("https://s").login("me", "pw")


def test_list_repos_requires_token(monkeypatch):
    calls = fake_urlopen(monkeypatch, lambda req: Resp(200, b"[]"))
    client = api.SeafileClient("https://s")
    with pytest.raises(AuthError):
        client.list_repos()
    assert calls == []


def test_list_repos_sends_token_and_parses(monkeypatch):
    body = json.dumps(
        [
            {"id": "r1", "name": "Documents", "size": 12, "owner": "me"},
            {"id": "r2", "name": "Photos"},
        ]
    ).encode()
    calls = fake_urlopen(monkeypatch, lambda req: Resp(200, body))
    client = api.SeafileClient("https://s")
    client.set_token("tok\n")
    repos = client.list_repos()
    assert [(r.id, r.name) for r in repos] == [("r1", "Documents"), ("r2", "Photos")]
    assert repos[0].extra["owner"] == "me"
    assert calls[0].get_method() == "GET"
    assert calls[0].full_url == "https://s/api2/repos/"
    assert calls[0].get_header("Authorization") == "Token tok"


def test_list_repos_403_is_auth_error(monkeypatch):
    fake_urlopen(monkeypatch, lambda req: http_error(req.full_url, 403, b'{"detail": "x"}'))
    client = api.SeafileClient("https://s")
    client.set_token("stale")
    with pytest.raises(AuthError):
        client.list_repos()


def test_list_repos_non_list_is_permanent(monkeypatch):
    fake_urlopen(monkeypatch, lambda req: Resp(200, b'{"error": "nope"}'))
    client = api.SeafileClient("https://s")
    client.set_token("t")
    with pytest.raises(PermanentError):
        client.list_repos()


def test_list_repos_malformed_entries_is_permanent(monkeypatch):
    fake_urlopen(monkeypatch, lambda req: Resp(200, b'[{"name": "no id"}]'))
    client = api.SeafileClient("https://s")
    client.set_token("t")
    with pytest.raises(PermanentError):
        client.list_repos()


def test_create_link_returns_location(monkeypatch):
    calls = fake_urlopen(
        monkeypatch,
        lambda req: Resp(201, b"", {"Location": "https://s/f/abc/"}),
    )
    client = api.SeafileClient("https://s")
    client.set_token("t")
    assert client.create_link("r1", "/dir/file name.txt") == "https://s/f/abc/"
    req = calls[0]
    assert req.get_method() == "PUT"
    assert req.full_url == "https://s/api2/repos/r1/file/shared-link/"
    assert urllib.parse.parse_qs(req.data.decode()) == {"p": ["/dir/file name.txt"]}


def test_create_link_403_is_auth_error(monkeypatch):
    fake_urlopen(monkeypatch, lambda req: http_error(req.full_url, 403))
    client = api.SeafileClient("https://s")
    client.set_token("t")
    with pytest.raises(AuthError):
        client.create_link("r1", "/f")


def test_create_link_without_location_is_permanent(monkeypatch):
    fake_urlopen(monkeypatch, lambda req: Resp(201, b""))
    client = api.SeafileClient("https://s")
    client.set_token("t")
    with pytest.raises(PermanentError):
        client.create_link("r1", "/f")


def test_create_link_wrong_status_is_permanent(monkeypatch):
    fake_urlopen(
        monkeypatch, lambda req: Resp(200, b"", {"Location": "https://s/f/abc/"})
    )
    client = api.SeafileClient("https://s")
    client.set_token("t")
    with pytest.raises(PermanentError):
        client.create_link("r1", "/f")


def test_create_link_requires_token(monkeypatch):
    calls = fake_urlopen(monkeypatch, lambda req: Resp(201, b"", {"Location": "x"}))
    with pytest.raises(AuthError):
        api.SeafileClient("https://s").create_link("r1", "/f")
    assert calls == []


def test_failures_are_logged_at_debug(monkeypatch, caplog):
    fake_urlopen(monkeypatch, lambda req: http_error(req.full_url, 502, b"bad gateway"))
    client = api.SeafileClient("https://s")
    client.set_token("t")
    caplog.set_level("DEBUG")
    with pytest.raises(PermanentError):
        client.list_repos()
    assert any("HTTP 502" in r.getMessage() for r in caplog.records)


def test_truncated_body_is_permanent(monkeypatch):
    class Truncated(Resp):
        def read(self):
            raise http.client.IncompleteRead(b"[{", 100)

    fake_urlopen(monkeypatch, lambda req: Truncated(200))
    client = api.SeafileClient("https://s")
    client.set_token("t")
    with pytest.raises(PermanentError):
        client.list_repos()


def test_malformed_status_line_is_permanent(monkeypatch):
    fake_urlopen(monkeypatch, lambda req: http.client.LineTooLong("status line"))
    with pytest.raises(PermanentError):
        api.SeafileClient("https://s").login("me", "pw")


def test_default_timeout_comes_from_settings():
    from seafile_link import config

    assert api.DEFAULT_TIMEOUT is config.DEFAULT_TIMEOUT
    assert api.SeafileClient("https://s").timeout == config.Settings().timeout
