"""Command-line entry: create a share link for every file argument."""

from __future__ import annotations

import logging
import os
import sys
from typing import List, Optional

from .api import SeafileClient
from .config import Settings
from .dialogs import make_dialog
from .linker import register_link
from .logging_utils import configure_logging, parse_level
from .token_store import TokenStore

NO_FILES = "No files given."


def main(argv: Optional[List[str]] = None) -> int:
    """Process each path in ``argv`` (default ``sys.argv[1:]``) in order.

    Paths are resolved against the current working directory. Returns ``0``
    when every file got a link and ``1`` otherwise, including when no file
    was given.
    """
    if argv is None:
        argv = sys.argv[1:]
    settings = Settings.from_env()
    configure_logging(parse_level(settings.log_level), settings.log_file)
    log = logging.getLogger("seafile_link")
    dialog = make_dialog(settings.dialog, settings.title, logger=log)

    if not argv:
        dialog.error(NO_FILES)
        return 1

    tokens = TokenStore(settings.token_path, logger=log)
    failed = 0
    for name in argv:
        path = os.path.abspath(name)
        log.info("Creating link for %s", path)
        client = SeafileClient(settings.server, timeout=settings.timeout, logger=log)
        link = register_link(
            path,
            client,
            dialog,
            tokens,
            max_auth_retries=settings.max_auth_retries,
            logger=log,
        )
        if link is None:
            failed += 1
        else:
            log.info("Link for %s: %s", path, link)
    return 1 if failed else 0


__all__ = ["main", "NO_FILES"]
