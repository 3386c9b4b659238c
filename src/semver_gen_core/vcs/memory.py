"""In-memory history store for linear histories."""

from __future__ import annotations

from typing import Iterable, Iterator, List, Sequence

from ..errors import HistoryQueryError
from ..models import CommitRecord


class InMemoryHistoryStore:
    """Linear history given oldest commit first; the last commit is HEAD."""

    def __init__(self, commits: Iterable[CommitRecord] = ()):
        self._commits: List[CommitRecord] = list(commits)

    @classmethod
    def from_spec(cls, entries: Sequence[tuple]) -> "InMemoryHistoryStore":
        """Build from ``(commit_id, [refs...])`` pairs, oldest first."""
        return cls(CommitRecord(commit_id=cid, refs=tuple(refs)) for cid, refs in entries)

    def add_commit(self, commit_id: str, *refs: str) -> CommitRecord:
        record = CommitRecord(commit_id=commit_id, refs=tuple(refs))
        self._commits.append(record)
        return record

    def iter_commits(self) -> Iterator[CommitRecord]:
        return iter(reversed(self._commits))

    def _index(self, rev: str) -> int:
        if rev == "HEAD":
            if not self._commits:
                raise HistoryQueryError(["rev-parse", rev], message="HEAD does not point to a commit")
            return len(self._commits) - 1
        for idx, record in enumerate(self._commits):
            if record.commit_id == rev:
                return idx
        raise HistoryQueryError(["rev-parse", rev], message=f"unknown revision: {rev}")

    def count_commits(self, base: str, head: str = "HEAD") -> int:
        return max(self._index(head) - self._index(base), 0)

    def head_commit(self) -> str:
        return self._commits[self._index("HEAD")].commit_id
