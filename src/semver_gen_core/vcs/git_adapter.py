"""Git history store."""

from __future__ import annotations

import logging
import shutil
import subprocess
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Tuple

from ..errors import HistoryQueryError, RepositoryNotFoundError, ToolUnavailableError
from ..models import CommitRecord

logger = logging.getLogger(__name__)

# show-ref --dereference suffixes the fully peeled line of an annotated tag
_PEELED_SUFFIX = "^{}"


class GitHistoryStore:
    """History store backed by the ``git`` binary."""

    def __init__(self, repo_root: Optional[Path] = None, git_executable: str = "git"):
        self.repo_root = Path(repo_root) if repo_root is not None else Path.cwd()
        self.git_executable = git_executable
        self._checked = False
        self._ref_map: Optional[Dict[str, Tuple[str, ...]]] = None

    def _git(self, *args: str) -> subprocess.CompletedProcess:
        cmd = [self.git_executable, *args]
        logger.debug(f"Running {' '.join(cmd)} in {self.repo_root}")
        try:
            return subprocess.run(
                cmd,
                cwd=self.repo_root,
                capture_output=True,
                text=True,
                check=False,
            )
        except OSError as e:
            if isinstance(e, FileNotFoundError) and shutil.which(self.git_executable) is None:
                raise ToolUnavailableError(self.git_executable) from e
            raise HistoryQueryError(cmd, message=f"cannot run {' '.join(cmd)} in {self.repo_root}: {e}") from e

    def _query(self, *args: str) -> str:
        self.ensure_available()
        result = self._git(*args)
        if result.returncode != 0:
            raise HistoryQueryError([self.git_executable, *args], result.stderr)
        return result.stdout

    def ensure_available(self) -> None:
        """Fail unless git is installed and ``repo_root`` is inside a repository."""
        if self._checked:
            return
        if shutil.which(self.git_executable) is None:
            raise ToolUnavailableError(self.git_executable)
        if not self.repo_root.exists():
            raise RepositoryNotFoundError(str(self.repo_root), "directory does not exist")
        if not self.repo_root.is_dir():
            raise RepositoryNotFoundError(str(self.repo_root), "not a directory")
        result = self._git("rev-parse", "--git-dir")
        if result.returncode != 0:
            raise RepositoryNotFoundError(str(self.repo_root), result.stderr.strip())
        self._checked = True

    def has_commits(self) -> bool:
        """False for a freshly initialized repository."""
        self.ensure_available()
        result = self._git("rev-parse", "--verify", "--quiet", "HEAD^{commit}")
        return result.returncode == 0

    def refs_by_commit(self) -> Dict[str, Tuple[str, ...]]:
        """Map commit id to the refs pointing at it, annotated tags fully peeled."""
        if self._ref_map is None:
            self.ensure_available()
            result = self._git("show-ref", "--dereference")
            # exit 1 with no output: repository without any refs (e.g. detached, all branches deleted)
            if result.returncode != 0 and (result.returncode != 1 or result.stdout.strip()):
                raise HistoryQueryError([self.git_executable, "show-ref", "--dereference"], result.stderr)

            targets: Dict[str, str] = {}
            for line in result.stdout.splitlines():
                if not line.strip():
                    continue
                sha, refname = line.split(" ", 1)
                if refname.endswith(_PEELED_SUFFIX):
                    targets[refname[: -len(_PEELED_SUFFIX)]] = sha
                else:
                    targets.setdefault(refname, sha)

            grouped: Dict[str, List[str]] = {}
            for refname, commit in targets.items():
                grouped.setdefault(commit, []).append(refname)
            self._ref_map = {commit: tuple(refs) for commit, refs in grouped.items()}
        return self._ref_map

    def iter_commits(self) -> Iterator[CommitRecord]:
        if not self.has_commits():
            logger.debug("Repository has no commits")
            return
        refs = self.refs_by_commit()
        for line in self._query("rev-list", "HEAD").splitlines():
            commit_id = line.strip()
            if commit_id:
                yield CommitRecord(commit_id=commit_id, refs=refs.get(commit_id, ()))

    def count_commits(self, base: str, head: str = "HEAD") -> int:
        output = self._query("rev-list", "--count", f"{base}..{head}").strip()
        try:
            return int(output)
        except ValueError as e:
            raise HistoryQueryError(
                [self.git_executable, "rev-list", "--count", f"{base}..{head}"],
                message=f"unexpected commit count output: {output!r}",
            ) from e

    def head_commit(self) -> str:
        return self._query("rev-parse", "HEAD").strip()
