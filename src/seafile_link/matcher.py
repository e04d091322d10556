"""Map a local file path to the Seafile repository that owns it.

Seafile clients sync each library into a directory named after it, so a
library whose name shows up as a directory in the file's path probably holds
that file. When several library names appear, the deepest one (the one that
leaves the shortest path behind) wins.

This is a heuristic: library names are not unique across the filesystem and
a name may also be used by an unrelated directory. Matching on whole path
segments keeps ``proj`` from matching ``proj-sub``, but nothing more.
"""

from __future__ import annotations

import logging
import re
from typing import Iterable, Optional, Pattern

from .models import Repository, RepoMatch

_LEADING_SEPARATORS = re.compile(r"^/*")


def _repo_pattern(name: str) -> Pattern[str]:
    # Everything from the start of the path through the last "<name>/" segment.
    return re.compile(r".*(^|/)" + re.escape(name) + "/")


def relative_path(name: str, path: str) -> Optional[str]:
    """Return ``path`` relative to a directory called ``name``.

    The result always starts with exactly one ``/``. Returns ``None`` when no
    directory segment of ``path`` is named ``name``.
    """
    m = _repo_pattern(name).search(path)
    if not m:
        return None
    return _LEADING_SEPARATORS.sub("/", path[m.end():], count=1)


def repo_for_path(
    repos: Iterable[Repository],
    path: str,
    logger: Optional[logging.Logger] = None,
) -> RepoMatch:
    """Find the repository owning ``path`` and the path inside it.

    Parameters
    - ``repos``: Repositories in server order.
    - ``path``: Absolute local path of the file.

    Returns a :class:`RepoMatch`; it is empty when no repository name appears
    as a directory in ``path``. Among several matches the strictly shortest
    relative path wins, so ties keep the earlier repository.
    """
    log = logger or logging.getLogger(__name__)
    best_id: Optional[str] = None
    best_path: Optional[str] = None
    for repo in repos:
        candidate = relative_path(repo.name, path)
        if candidate is None:
            continue
        log.debug("Repo %r (%s) matches %s as %s", repo.name, repo.id, path, candidate)
        if best_path is None or len(candidate) < len(best_path):
            best_id, best_path = repo.id, candidate
    if best_id is None:
        return RepoMatch.none()
    return RepoMatch(repo_id=best_id, path=best_path)


__all__ = ["repo_for_path", "relative_path"]
