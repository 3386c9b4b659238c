from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import typer

from semver_gen_core.errors import ConfigError

app = typer.Typer(help="Configuration inspection")


@app.command("show")
def config_show(
    ctx: typer.Context,
    path: Optional[Path] = typer.Option(None, "--path", help="Resolve config from this directory"),
    config: Optional[Path] = typer.Option(None, "--config", help="Explicit TOML config file"),
):
    """Print effective settings as JSON; exit 1 if they are invalid."""
    from ..cli import fail, resolve_settings

    parent = ctx.obj or {}
    try:
        settings = resolve_settings(
            path or parent.get("path") or Path("."),
            config or parent.get("config"),
            parent.get("default_tag"),
            parent.get("hash_length"),
            parent.get("tag_pattern"),
        )
    except ConfigError as e:
        fail(e)

    typer.echo(json.dumps(settings.model_dump(), indent=2))
