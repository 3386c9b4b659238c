"""History-query abstraction."""

from __future__ import annotations
from typing import Iterator, Protocol

from ..models import CommitRecord


class HistoryStore(Protocol):
    """Read-only view of a repository's commit history."""

    def iter_commits(self) -> Iterator[CommitRecord]:
        """Yield commits reachable from HEAD, most recent first, with their refs."""
        ...

    def count_commits(self, base: str, head: str = "HEAD") -> int:
        """Count commits reachable from ``head`` but not from ``base``."""
        ...

    def head_commit(self) -> str:
        """Full identifier of HEAD."""
        ...
