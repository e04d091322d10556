"""Create a share link for one local file and report it to the user.

One run walks a file through: progress start → session (cached token or
interactive login) → repository list → path matching → link creation →
result dialog → clipboard. ``AuthError`` anywhere restarts the run with a
forced interactive login; every other failure ends it with an error dialog.
"""

from __future__ import annotations

import logging
from typing import Optional

from .api import SeafileClient
from .config import DEFAULT_MAX_AUTH_RETRIES
from .dialogs import Dialog
from .errors import AuthError, PermanentError, RepoNotFoundError
from .logging_utils import log_event
from .matcher import repo_for_path
from .token_store import TokenStore

ASK_USERNAME = "Seafile E-Mail Address:"
ASK_PASSWORD = "Seafile Password:"


def login(
    client: SeafileClient,
    dialog: Dialog,
    tokens: TokenStore,
    force: bool = False,
    logger: Optional[logging.Logger] = None,
) -> None:
    """Give ``client`` a token.

    Uses the cached token unless ``force`` is set or none is cached; otherwise
    asks for credentials, logs in and caches the new token.
    """
    log = logger or logging.getLogger(__name__)
    if not force:
        token = tokens.read()
        if token:
            client.set_token(token)
            log_event("token_loaded", logging.DEBUG, token_path=str(tokens.path))
            return
    username = dialog.ask(ASK_USERNAME)
    password = dialog.ask(ASK_PASSWORD, secret=True)
    token = client.login(username, password)
    tokens.write(token)
    log.info("Logged in as %s", username)


def register_link(
    path: str,
    client: SeafileClient,
    dialog: Dialog,
    tokens: TokenStore,
    max_auth_retries: int = DEFAULT_MAX_AUTH_RETRIES,
    logger: Optional[logging.Logger] = None,
) -> Optional[str]:
    """Create, show and copy a share link for the absolute ``path``.

    Parameters
    - ``max_auth_retries``: How many forced re-logins to attempt after an
      ``AuthError``. ``0`` gives up on the first one; a negative value retries
      for as long as the server keeps rejecting credentials.

    Returns the link, or ``None`` when the run ended with an error (which has
    already been shown to the user). The progress indicator is always closed
    on return.
    """
    log = logger or logging.getLogger(__name__)
    force_login = False
    auth_failures = 0
    while True:
        try:
            dialog.progress_start()
            login(client, dialog, tokens, force=force_login, logger=log)

            dialog.progress_report(33, "Searching repo")
            match = repo_for_path(client.list_repos(), path, logger=log)
            if not match:
                raise RepoNotFoundError(path)

            dialog.progress_report(66, "Creating link...")
            link = client.create_link(match.repo_id, match.path)

            dialog.progress_report(100, "Link created")
            dialog.progress_stop()

            dialog.info(link)
            dialog.copy(link)
            log_event("link_created", repo_id=match.repo_id, link=link)
            return link
        except AuthError as e:
            log.error("Auth Error: %s", e)
            log.debug("Auth error details", exc_info=True)
            auth_failures += 1
            dialog.progress_stop()
            if 0 <= max_auth_retries < auth_failures:
                dialog.error(f"Authentication failed: {e}")
                return None
            force_login = True
        except PermanentError as e:
            log.error("Permanent Error: %s", e)
            log.debug("Permanent error details", exc_info=True)
            dialog.error(str(e))
            return None
        except Exception as e:
            log.error("Unknown Error: %s", e)
            log.debug("Unknown error details", exc_info=True)
            dialog.error(f"Unknown Error: {e}")
            return None
        finally:
            dialog.progress_stop()


__all__ = ["login", "register_link", "ASK_USERNAME", "ASK_PASSWORD"]
