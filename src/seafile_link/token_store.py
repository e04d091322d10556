"""Cached auth token on disk.

The token lives alone on the first line of a plain text file (by default
``~/.seafile_token``). It is read at start-up unless a re-login is forced and
rewritten after every interactive login. The file is written atomically with
owner-only permissions since it grants full access to the account.
"""

from __future__ import annotations
import logging
import os
import tempfile
from pathlib import Path
from typing import Optional, Union


def atomic_write(path: Path, text: str, mode: int = 0o600) -> None:
    """Atomically write UTF-8 text to ``path`` with fsync.

    Writes to a temporary file in the same directory, then renames it into
    place. Propagates write errors after removing the temporary file.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmppath = tempfile.mkstemp(
        prefix=path.name + ".", suffix=".tmp", dir=str(path.parent)
    )
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as f:
            f.write(text)
            f.flush()
            try:
                os.fsync(f.fileno())
            except OSError:  # pragma: no cover
                pass
        os.chmod(tmppath, mode)
        os.replace(tmppath, path)
    except Exception:
        try:
            os.remove(tmppath)
        except OSError:  # pragma: no cover
            pass
        raise


class TokenStore:
    """Read and write the cached token file at ``path``."""

    def __init__(
        self, path: Union[str, Path], logger: Optional[logging.Logger] = None
    ) -> None:
        self.path = Path(path).expanduser()
        self.logger = logger or logging.getLogger(__name__)

    def exists(self) -> bool:
        return self.path.is_file()

    def read(self) -> Optional[str]:
        """Return the cached token, or ``None`` if there is none.

        Only the first line counts; surrounding whitespace is dropped. An empty
        file is treated as no token.
        """
        if not self.exists():
            return None
        self.logger.debug("Reading %s", self.path)
        lines = self.path.read_text(encoding="utf-8").splitlines()
        token = lines[0].strip() if lines else ""
        return token or None

    def write(self, token: str) -> None:
        """Replace the cached token with ``token``."""
        self.logger.debug("Writing %s", self.path)
        atomic_write(self.path, token.strip() + "\n")


__all__ = ["TokenStore", "atomic_write"]
