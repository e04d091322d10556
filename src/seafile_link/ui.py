"""Console UI helpers (color and messages).

Tiny helpers for terminal output used by the console dialog:
 - ANSI color codes gated by a conservative capability check
 - Printers for info/ok/error with consistent prefixes

Respects ``NO_COLOR`` and only emits ANSI when stdout is a TTY.
"""

from __future__ import annotations
import os
import sys

RESET = "\033[0m"
RED = "\033[31m"
GREEN = "\033[32m"
BLUE = "\033[34m"
GRAY = "\033[90m"


def supports_color() -> bool:
    """Return True when ANSI colors are likely supported."""
    try:
        if os.environ.get("NO_COLOR"):
            return False
        return bool(getattr(sys.stdout, "isatty", lambda: False)())
    except Exception:
        return False


def c(s: str, color: str) -> str:
    """Colorize ``s`` when supported, otherwise return it unchanged."""
    return f"{color}{s}{RESET}" if supports_color() else s


def info(msg: str) -> None:
    """Print an informational message prefixed with "ℹ"."""
    print(c("ℹ ", BLUE) + msg)


def ok(msg: str) -> None:
    """Print a success message prefixed with "✓"."""
    print(c("✓ ", GREEN) + msg)


def err(msg: str) -> None:
    """Print an error message prefixed with "✗" to stderr."""
    print(c("✗ ", RED) + msg, file=sys.stderr)


__all__ = [
    "supports_color",
    "c",
    "info",
    "ok",
    "err",
    "RESET",
    "RED",
    "GREEN",
    "BLUE",
    "GRAY",
]
