"""Logging configuration helpers.

Sets up the root logger for the command-line run:
 - Plain human-readable logs to stdout
 - Optional file logs (handy when the tool is started from a file manager
   and stdout goes nowhere)

Design goals
 - stdlib logging only
 - Idempotent configuration for tests and repeated calls
"""

from __future__ import annotations
import logging
import sys
from typing import Optional

LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}

FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def parse_level(name: Optional[str], default: int = logging.INFO) -> int:
    """Map a level name (any case) to a ``logging`` level; unknown → ``default``."""
    if not name:
        return default
    return LEVELS.get(name.strip().lower(), default)


def configure_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> None:
    """Configure the root logger.

    Parameters
    - ``level``: Level applied to the root logger and every handler added here.
    - ``log_file``: Optional path to tee logs to a file.

    Handlers added by a previous call are removed first so repeated
    invocations (common in tests) never duplicate output.
    """
    logger = logging.getLogger()
    logger.setLevel(level)

    for h in list(logger.handlers):
        if getattr(h, "_added_by_configure_logging", False):
            logger.removeHandler(h)
            h.close()

    stream = logging.StreamHandler(sys.stdout)
    stream.setFormatter(logging.Formatter(FORMAT))
    setattr(stream, "_added_by_configure_logging", True)
    logger.addHandler(stream)

    if log_file:
        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setFormatter(logging.Formatter(FORMAT))
        setattr(fh, "_added_by_configure_logging", True)
        logger.addHandler(fh)

    for handler in logger.handlers:
        handler.setLevel(level)


def log_event(event: str, level: int = logging.INFO, **fields) -> None:
    """Emit a structured event log at the given level.

    ``fields`` are attached to the record via ``extra`` (e.g. ``repo_id``,
    ``path``, ``link``). The function never raises.
    """
    try:
        logging.getLogger("seafile_link").log(
            level, event, extra={"event": event, **fields}
        )
    except Exception:
        # Never let logging break the link flow
        pass


__all__ = ["configure_logging", "log_event", "parse_level", "LEVELS"]
