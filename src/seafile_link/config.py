"""Runtime settings resolved from the environment.

The command line only takes file paths, so everything tunable comes from
environment variables (``SEAFILE_SERVER``, ``SEAFILE_TOKEN_PATH`` and the
``SEAFILE_LINK_*`` family). Missing or malformed values fall back to the
defaults below; malformed numbers are logged as warnings.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

DEFAULT_SERVER = "https://cloud.seafile.com"
DEFAULT_TOKEN_PATH = Path.home() / ".seafile_token"
DEFAULT_TITLE = "Seafile Link"
DEFAULT_DIALOG = "auto"
DEFAULT_TIMEOUT = 30.0
DEFAULT_MAX_AUTH_RETRIES = 3
DEFAULT_LOG_LEVEL = "info"

DIALOG_KINDS = ("auto", "zenity", "console")

log = logging.getLogger(__name__)


def _env_float(env: Mapping[str, str], name: str, default: float) -> float:
    raw = env.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError:
        log.warning("Ignoring %s=%r: not a number", name, raw)
        return default
    if value <= 0:
        log.warning("Ignoring %s=%r: must be positive", name, raw)
        return default
    return value


def _env_int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        log.warning("Ignoring %s=%r: not an integer", name, raw)
        return default


@dataclass
class Settings:
    """Everything the entry point needs to wire up one invocation.

    ``max_auth_retries`` caps forced re-logins per file; ``0`` disables the
    retry and a negative value removes the cap.
    """

    server: str = DEFAULT_SERVER
    token_path: Path = DEFAULT_TOKEN_PATH
    title: str = DEFAULT_TITLE
    dialog: str = DEFAULT_DIALOG
    timeout: float = DEFAULT_TIMEOUT
    max_auth_retries: int = DEFAULT_MAX_AUTH_RETRIES
    log_level: str = DEFAULT_LOG_LEVEL
    log_file: Optional[str] = None

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ
        dialog = (env.get("SEAFILE_LINK_DIALOG") or DEFAULT_DIALOG).strip().lower()
        if dialog not in DIALOG_KINDS:
            log.warning("Unknown SEAFILE_LINK_DIALOG=%r; using auto", dialog)
            dialog = DEFAULT_DIALOG
        token_path = env.get("SEAFILE_TOKEN_PATH")
        return cls(
            server=env.get("SEAFILE_SERVER") or DEFAULT_SERVER,
            token_path=Path(token_path).expanduser() if token_path else DEFAULT_TOKEN_PATH,
            title=env.get("SEAFILE_LINK_TITLE") or DEFAULT_TITLE,
            dialog=dialog,
            timeout=_env_float(env, "SEAFILE_LINK_TIMEOUT", DEFAULT_TIMEOUT),
            max_auth_retries=_env_int(
                env, "SEAFILE_LINK_MAX_AUTH_RETRIES", DEFAULT_MAX_AUTH_RETRIES
            ),
            log_level=env.get("SEAFILE_LINK_LOG_LEVEL") or DEFAULT_LOG_LEVEL,
            log_file=env.get("SEAFILE_LINK_LOG_FILE") or None,
        )


__all__ = [
    "Settings",
    "DEFAULT_SERVER",
    "DEFAULT_TOKEN_PATH",
    "DEFAULT_TITLE",
    "DIALOG_KINDS",
]
