from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import NoReturn, Optional

import typer

from semver_gen_core.config import SemverSettings, load_settings
from semver_gen_core.errors import SemverGenError
from semver_gen_core.vcs import GitHistoryStore
from semver_gen_ops import describe, render_descriptor

app = typer.Typer(
    help="semver-gen: derive a version from the nearest vX.Y.Z tag and the commits since",
    add_completion=False,
)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        force=True,
    )


def fail(exc: Exception) -> NoReturn:
    """Report a fatal error on stderr and exit 1."""
    typer.echo(f"Error, {exc}", err=True)
    raise typer.Exit(1)


def resolve_settings(
    path: Path,
    config: Optional[Path] = None,
    default_tag: Optional[str] = None,
    hash_length: Optional[int] = None,
    tag_pattern: Optional[str] = None,
) -> SemverSettings:
    return load_settings(
        path,
        config_file=config,
        overrides={
            "default_tag": default_tag,
            "hash_length": hash_length,
            "tag_pattern": tag_pattern,
        },
    )


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    path: Path = typer.Option(Path("."), "--path", "-C", help="Run as if started in this directory"),
    config: Optional[Path] = typer.Option(None, "--config", help="Explicit TOML config file"),
    default_tag: Optional[str] = typer.Option(None, "--default-tag", help="Tag used when no release tag exists"),
    hash_length: Optional[int] = typer.Option(None, "--hash-length", help="Abbreviated hash length"),
    tag_pattern: Optional[str] = typer.Option(None, "--tag-pattern", help="Regex a release tag must fully match"),
    format: str = typer.Option("text", "--format", "-f", help="Output format: text, json"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging on stderr"),
):
    """Print the version descriptor for HEAD."""
    _configure_logging(verbose)
    ctx.obj = {
        "path": path,
        "config": config,
        "default_tag": default_tag,
        "hash_length": hash_length,
        "tag_pattern": tag_pattern,
    }
    if ctx.invoked_subcommand is not None:
        return

    try:
        settings = resolve_settings(path, config, default_tag, hash_length, tag_pattern)
        store = GitHistoryStore(path, git_executable=settings.git_executable)
        store.ensure_available()
        descriptor = describe(store, settings)
    except SemverGenError as e:
        fail(e)

    version = render_descriptor(descriptor.tag, descriptor.distance, descriptor.head_commit, descriptor.abbrev_length)
    if format == "json":
        typer.echo(json.dumps({"version": version, **descriptor.to_dict()}, indent=2))
    else:
        typer.echo(version)


# Subcommands are registered in commands/*.py
from .commands import config_cmd  # noqa: E402
from .commands.doctor import doctor as doctor_fn  # noqa: E402

app.add_typer(config_cmd.app, name="config", help="Configuration inspection")
app.command(name="doctor")(doctor_fn)


def main():
    app()
