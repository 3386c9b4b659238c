"""Error taxonomy for semver-gen.

Every error here is fatal for a single invocation; the CLI maps them to
exit status 1.
"""

from __future__ import annotations

from typing import Optional, Sequence


class SemverGenError(Exception):
    """Base class for all semver-gen errors."""


class ConfigError(SemverGenError):
    """Invalid configuration file or value."""


class ToolUnavailableError(SemverGenError):
    """The history-query tool cannot be invoked at all."""

    def __init__(self, tool: str):
        self.tool = tool
        super().__init__(f"'{tool}' binary is required.")


class RepositoryNotFoundError(SemverGenError):
    """The working directory is not inside a repository."""

    def __init__(self, path: str, detail: str = ""):
        self.path = path
        self.detail = detail
        message = f"not a git repository: {path}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


class HistoryQueryError(SemverGenError):
    """A query against the history store failed."""

    def __init__(self, command: Sequence[str], stderr: Optional[str] = None, message: Optional[str] = None):
        self.command = list(command)
        self.stderr = (stderr or "").strip()
        if message is None:
            message = f"history query failed: {' '.join(self.command)}"
            if self.stderr:
                message = f"{message}: {self.stderr}"
        super().__init__(message)


class MissingCommitError(SemverGenError):
    """No commit identifier could be extracted from the located record."""

    def __init__(self, message: str = "no commit hash found."):
        super().__init__(message)
