"""
doctor.py - Environment health check command.

Checks that the history store is usable and reports the nearest release tag.
"""

from __future__ import annotations

import json
import shutil
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Optional, List

import typer
from rich.console import Console
from rich.table import Table

from semver_gen_core.config import SemverSettings
from semver_gen_core.errors import SemverGenError
from semver_gen_core.vcs import GitHistoryStore
from semver_gen_ops import find_tagged_commit, matching_tags

app = typer.Typer()
console = Console()


@dataclass
class CheckResult:
    """Result of a single check."""
    name: str
    passed: bool
    message: str
    details: Optional[str] = None


@dataclass
class DoctorResult:
    """Overall doctor check result."""
    all_passed: bool
    checks: List[CheckResult]


def check_git_binary(settings: SemverSettings) -> CheckResult:
    """Check that the git executable is on PATH."""
    location = shutil.which(settings.git_executable)
    if location is None:
        return CheckResult(
            name="Git Binary",
            passed=False,
            message=f"'{settings.git_executable}' not found on PATH",
            details="Install git or set git_executable in .semver-gen.toml",
        )
    return CheckResult(name="Git Binary", passed=True, message=location)


def check_repository(store: GitHistoryStore) -> CheckResult:
    """Check that the target directory is inside a repository with commits."""
    try:
        store.ensure_available()
        has_commits = store.has_commits()
    except SemverGenError as e:
        return CheckResult(name="Repository", passed=False, message="Repository not usable", details=str(e))

    if not has_commits:
        return CheckResult(
            name="Repository",
            passed=False,
            message="Repository has no commits",
            details="Create at least one commit before deriving a version",
        )
    return CheckResult(name="Repository", passed=True, message=f"Repository found at {store.repo_root}")


def check_release_tag(store: GitHistoryStore, settings: SemverSettings) -> CheckResult:
    """Report the nearest release tag; a missing tag is not a failure."""
    try:
        record = find_tagged_commit(store, settings.tag_regex)
    except SemverGenError as e:
        return CheckResult(name="Release Tag", passed=False, message="History query failed", details=str(e))

    if record is None:
        return CheckResult(
            name="Release Tag",
            passed=True,
            message=f"No tag matching {settings.tag_pattern!r}; default {settings.default_tag} will be used",
        )
    tag = matching_tags(record, settings.tag_regex)[0]
    return CheckResult(name="Release Tag", passed=True, message=f"{tag} at {record.commit_id[:settings.hash_length]}")


def run_doctor(settings: SemverSettings, path: Path) -> DoctorResult:
    """Run all doctor checks."""
    checks = [check_git_binary(settings)]
    if checks[0].passed:
        store = GitHistoryStore(path, git_executable=settings.git_executable)
        checks.append(check_repository(store))
        if checks[-1].passed:
            checks.append(check_release_tag(store, settings))

    all_passed = all(c.passed for c in checks)
    return DoctorResult(all_passed=all_passed, checks=checks)


def format_result_plain(result: DoctorResult) -> None:
    """Print result in plain text format."""
    table = Table(title="semver-gen doctor", show_header=True)
    table.add_column("Check", style="bold")
    table.add_column("Status")
    table.add_column("Message")

    for check in result.checks:
        status = "[green]✓ PASS[/green]" if check.passed else "[red]✗ FAIL[/red]"
        table.add_row(check.name, status, check.message)
        if check.details:
            table.add_row("", "", f"[dim]{check.details}[/dim]")

    console.print(table)

    if result.all_passed:
        console.print("\n[green bold]All checks passed![/green bold]")
    else:
        console.print("\n[red bold]Some checks failed.[/red bold]")


def format_result_json(result: DoctorResult) -> None:
    """Print result in JSON format."""
    output = {
        "all_passed": result.all_passed,
        "checks": [asdict(c) for c in result.checks],
    }
    typer.echo(json.dumps(output, indent=2))


@app.command()
def doctor(
    ctx: typer.Context,
    format: str = typer.Option(
        "plain", "--format", "-f",
        help="Output format: plain, json",
    ),
) -> None:
    """
    Check environment health.

    Verifies:
    - git is installed
    - the directory is a repository with at least one commit
    - which release tag the version will be derived from
    """
    from ..cli import fail, resolve_settings

    parent = ctx.obj or {}
    path = parent.get("path") or Path(".")
    try:
        settings = resolve_settings(
            path,
            parent.get("config"),
            parent.get("default_tag"),
            parent.get("hash_length"),
            parent.get("tag_pattern"),
        )
    except SemverGenError as e:
        fail(e)

    result = run_doctor(settings, path)

    if format == "json":
        format_result_json(result)
    else:
        format_result_plain(result)

    raise typer.Exit(0 if result.all_passed else 1)
