"""Plain data carriers shared by the client, matcher and orchestrator."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class Repository:
    """A Seafile library as returned by ``GET /api2/repos/``.

    Only ``id`` and ``name`` are used; every other field the server sends is
    kept in ``extra`` and otherwise ignored.
    """

    id: str
    name: str
    extra: Dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def from_json(cls, obj: Dict[str, Any]) -> "Repository":
        """Build a repository from one element of the repos JSON array.

        Raises ``KeyError`` when ``id`` or ``name`` is missing and
        ``TypeError`` when ``obj`` is not a mapping.
        """
        if not isinstance(obj, dict):
            raise TypeError(f"repository entry is not an object: {obj!r}")
        extra = {k: v for k, v in obj.items() if k not in ("id", "name")}
        return cls(id=str(obj["id"]), name=str(obj["name"]), extra=extra)


@dataclass(frozen=True)
class RepoMatch:
    """Outcome of matching a local path against the repository list.

    Either both ``repo_id`` and ``path`` are set (a repository owns the file
    and ``path`` is relative to its root, starting with ``/``) or both are
    ``None``.
    """

    repo_id: Optional[str] = None
    path: Optional[str] = None

    def __post_init__(self) -> None:
        if (self.repo_id is None) != (self.path is None):
            raise ValueError("repo_id and path must be set together")

    @classmethod
    def none(cls) -> "RepoMatch":
        return cls()

    def __bool__(self) -> bool:
        return self.repo_id is not None


__all__ = ["Repository", "RepoMatch"]
