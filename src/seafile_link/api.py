"""Minimal client for the parts of the Seafile web API we need.

Only three calls are wrapped: obtaining an auth token, listing the user's
repositories (libraries) and creating a share link for one file. Outcomes
are folded into the two error kinds from :mod:`seafile_link.errors`:

 - HTTP 403 on any authenticated call (and 400/403 on login) raises
   ``AuthError`` so the caller can ask for new credentials.
 - Transport failures and any other unexpected response raise
   ``PermanentError``.

Design notes
- stdlib ``urllib`` only; requests are form encoded and responses are
  decoded as JSON where the endpoint returns JSON.
- ``logged_in`` is a local flag set by :meth:`SeafileClient.set_token`. It
  only guards against calling the API with no token at all; whether the
  token is valid is learned from the server's 403.
"""

from __future__ import annotations

import http.client
import json
import logging
import urllib.error
import urllib.parse
import urllib.request
from typing import Any, Dict, List, Mapping, Optional, Tuple

from .config import DEFAULT_TIMEOUT
from .errors import AuthError, PermanentError
from .logging_utils import log_event
from .models import Repository


def api_base(server: str) -> str:
    """Return ``<server>/api2/`` with any trailing slashes on ``server`` removed."""
    return server.rstrip("/") + "/api2/"

class SeafileClient:
    """Token-authenticated access to ``<server>/api2/``."""

    def __init__(
        self,
        server: str,
        timeout: float = DEFAULT_TIMEOUT,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.base_url = api_base(server)
        self.timeout = timeout
        self.logger = logger or logging.getLogger(__name__)
        self.logged_in = False
        self._headers: Dict[str, str] = {"Accept": "application/json"}

    # ------------------------------------------------------------------ HTTP

    def _url(self, path: str) -> str:
        return self.base_url + path.lstrip("/")

    def _request(
        self,
        method: str,
        path: str,
        form: Optional[Mapping[str, str]] = None,
    ) -> Tuple[int, Mapping[str, str], bytes]:
        """Perform one request and return ``(status, headers, body)``.

        HTTP error statuses are returned like successes so callers can map
        them; only transport-level failures raise (as ``PermanentError``).
        """
        url = self._url(path)
        data = None
        headers = dict(self._headers)
        if form is not None:
            data = urllib.parse.urlencode(form).encode("utf-8")
            headers["Content-Type"] = "application/x-www-form-urlencoded"
        req = urllib.request.Request(url, data=data, headers=headers, method=method)
        self.logger.debug("%s %s", method, url)
        try:
            with urllib.request.urlopen(req, timeout=self.timeout) as resp:
                return resp.status, resp.headers, resp.read()
        except urllib.error.HTTPError as e:
            try:
                body = e.read() or b""
            except Exception:
                body = b""
            return e.code, e.headers or {}, body
        except (
            urllib.error.URLError,
            http.client.HTTPException,
            OSError,
            ValueError,
        ) as e:
            raise PermanentError(f"Connection error: {e}") from e

    @staticmethod
    def _json(body: bytes) -> Any:
        try:
            return json.loads(body.decode("utf-8", errors="replace"))
        except ValueError:
            return None

    def _log_failure(self, method: str, path: str, status: int, body: bytes) -> None:
        self.logger.debug(
            "%s %s failed: HTTP %s %s",
            method,
            self._url(path),
            status,
            body[:500].decode("utf-8", errors="replace"),
        )

    def _require_login(self) -> None:
        if not self.logged_in:
            raise AuthError("No auth token present")

    # ------------------------------------------------------------ operations

    def set_token(self, token: str) -> None:
        """Use ``token`` for every following request. It is not validated."""
        self._headers["Authorization"] = "Token " + token.strip()
        self.logged_in = True

    def login(self, username: str, password: str) -> str:
        """Exchange credentials for an auth token, install and return it.

        Raises ``AuthError`` when the server answers 400 or 403, and
        ``PermanentError`` for any other failure.
        """
        path = "auth-token/"
        status, _, body = self._request(
            "POST", path, {"username": username, "password": password}
        )
        data = self._json(body)
        if isinstance(data, dict) and data.get("token"):
            token = str(data["token"])
            self.set_token(token)
            log_event("login", logging.DEBUG, username=username)
            return token
        self._log_failure("POST", path, status, body)
        if status in (400, 403):
            raise AuthError("Invalid credentials in login.")
        raise PermanentError("Connection error in login.")

    def list_repos(self) -> List[Repository]:
        """Return all repositories visible to the authenticated user."""
        self._require_login()
        path = "repos/"
        status, _, body = self._request("GET", path)
        data = self._json(body)
        if isinstance(data, list):
            try:
                return [Repository.from_json(item) for item in data]
            except (KeyError, TypeError) as e:
                self._log_failure("GET", path, status, body)
                raise PermanentError(f"Unexpected repository list: {e}") from e
        self._log_failure("GET", path, status, body)
        if status == 403:
            raise AuthError("Invalid credentials in repos.")
        raise PermanentError("Connection error in repos.")

    def create_link(self, repo_id: str, path: str) -> str:
        """Create a share link for ``path`` in repository ``repo_id``.

        ``path`` is relative to the repository root and starts with ``/``.
        Returns the link the server puts in the ``Location`` header.
        """
        self._require_login()
        endpoint = f"repos/{urllib.parse.quote(repo_id, safe='')}/file/shared-link/"
        status, headers, body = self._request("PUT", endpoint, {"p": path})
        location = headers.get("Location") if headers else None
        if status == 201 and location:
            return location
        self._log_failure("PUT", endpoint, status, body)
        if status == 403:
            raise AuthError("Invalid credentials in create_link.")
        raise PermanentError("Connection error in create_link.")

__all__ = ["SeafileClient", "api_base", "DEFAULT_TIMEOUT"]
