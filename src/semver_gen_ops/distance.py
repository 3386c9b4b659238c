"""Distance between a located commit and HEAD."""

from __future__ import annotations

from semver_gen_core.errors import HistoryQueryError
from semver_gen_core.vcs.base import HistoryStore


def commits_since(store: HistoryStore, commit_id: str, head: str = "HEAD") -> int:
    """Commits reachable from ``head`` but not from ``commit_id``."""
    count = store.count_commits(commit_id, head)
    if count < 0:
        raise HistoryQueryError(
            ["rev-list", "--count", f"{commit_id}..{head}"],
            message=f"negative commit count {count} for {commit_id}..{head}",
        )
    return count
