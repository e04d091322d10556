"""Error kinds raised while creating a share link.

Two kinds matter to the caller:
 - ``AuthError``: the server rejected (or we never had) valid credentials;
   the orchestrator reacts by forcing an interactive re-login and retrying.
 - ``PermanentError``: anything else that cannot be fixed automatically
   (transport failures, unexpected responses, cancelled prompts, no matching
   repository). It is shown to the user and ends the run for that file.

Everything else is treated as an unknown error by the orchestrator.
"""

from __future__ import annotations

from typing import Optional


class LinkError(Exception):
    """Base class for errors raised by seafile-link itself."""


class AuthError(LinkError):
    """Credentials are missing, invalid, or were rejected by the server."""


class PermanentError(LinkError):
    """A failure that a retry will not fix."""


class UserAbort(PermanentError):
    """The user dismissed or cancelled a prompt."""

    def __init__(self, message: str = "User abort") -> None:
        super().__init__(message)


class RepoNotFoundError(PermanentError):
    """No repository name appears as a directory in the file's path."""

    def __init__(self, path: str, message: Optional[str] = None) -> None:
        self.path = path
        super().__init__(
            message or f"Cannot find a matching Seafile repo for {path}!"
        )


__all__ = [
    "LinkError",
    "AuthError",
    "PermanentError",
    "UserAbort",
    "RepoNotFoundError",
]
