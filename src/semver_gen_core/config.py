"""Layered configuration for semver-gen.

Precedence (later wins): built-in defaults, ``[tool.semver-gen]`` in the
nearest ``pyproject.toml``, the nearest ``.semver-gen.toml``, an explicit
config file, ``SEMVER_GEN_*`` environment variables, explicit overrides.
"""

from __future__ import annotations

import logging
import os
import re
import tomllib
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_TAG = "v0.1.0"
DEFAULT_HASH_LEN = 7
TAG_REGEX = r"v[0-9]+\.[0-9]+\.[0-9]+"

CONFIG_FILENAME = ".semver-gen.toml"
PYPROJECT_TABLE = "semver-gen"
ENV_PREFIX = "SEMVER_GEN_"


class SemverSettings(BaseModel):
    """Effective settings passed to the locator and renderer."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    default_tag: str = Field(default=DEFAULT_TAG, min_length=1)
    hash_length: int = Field(default=DEFAULT_HASH_LEN, ge=1)
    tag_pattern: str = Field(default=TAG_REGEX, min_length=1)
    git_executable: str = Field(default="git", min_length=1)

    @field_validator("tag_pattern")
    @classmethod
    def _pattern_compiles(cls, value: str) -> str:
        try:
            re.compile(value)
        except re.error as exc:
            raise ValueError(f"invalid tag_pattern {value!r}: {exc}") from exc
        return value

    @property
    def tag_regex(self) -> re.Pattern[str]:
        return re.compile(self.tag_pattern)


def _read_toml(path: Path) -> Dict[str, Any]:
    try:
        with path.open("rb") as fh:
            return tomllib.load(fh)
    except OSError as exc:
        raise ConfigError(f"cannot read config file {path}: {exc}") from exc
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"invalid TOML in {path}: {exc}") from exc


def _find_upwards(start: Path, name: str) -> Optional[Path]:
    start = start.resolve()
    for parent in [start, *start.parents]:
        candidate = parent / name
        if candidate.is_file():
            return candidate
    return None


def _normalize_keys(data: Mapping[str, Any]) -> Dict[str, Any]:
    # TOML files conventionally use dashes: hash-length = 10
    return {str(k).replace("-", "_"): v for k, v in data.items()}


def _pyproject_layer(start: Path) -> Dict[str, Any]:
    pyproject = _find_upwards(start, "pyproject.toml")
    if pyproject is None:
        return {}
    table = _read_toml(pyproject).get("tool", {}).get(PYPROJECT_TABLE, {})
    if not isinstance(table, dict):
        raise ConfigError(f"[tool.{PYPROJECT_TABLE}] in {pyproject} must be a table")
    if table:
        logger.debug(f"Loaded [tool.{PYPROJECT_TABLE}] from {pyproject}")
    return _normalize_keys(table)


def _file_layer(path: Path) -> Dict[str, Any]:
    data = _read_toml(path)
    logger.debug(f"Loaded config file {path}")
    return _normalize_keys(data)


def _env_layer(environ: Mapping[str, str]) -> Dict[str, Any]:
    layer: Dict[str, Any] = {}
    for field_name in SemverSettings.model_fields:
        value = environ.get(ENV_PREFIX + field_name.upper(), "").strip()
        if value:
            layer[field_name] = value
    return layer


def build_settings(*layers: Mapping[str, Any]) -> SemverSettings:
    """Merge layers left to right and validate the result."""
    merged: Dict[str, Any] = {}
    for layer in layers:
        merged.update({k: v for k, v in layer.items() if v is not None})
    try:
        return SemverSettings(**merged)
    except ValidationError as exc:
        raise ConfigError(str(exc)) from exc


def load_settings(
    start: Optional[Path] = None,
    config_file: Optional[Path] = None,
    overrides: Optional[Mapping[str, Any]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> SemverSettings:
    """Resolve effective settings for a repository rooted at or above ``start``."""
    start = Path(start) if start is not None else Path.cwd()
    environ = os.environ if environ is None else environ

    layers = [_pyproject_layer(start)]
    local = _find_upwards(start, CONFIG_FILENAME)
    if local is not None:
        layers.append(_file_layer(local))
    if config_file is not None:
        if not Path(config_file).is_file():
            raise ConfigError(f"config file not found: {config_file}")
        layers.append(_file_layer(Path(config_file)))
    layers.append(_env_layer(environ))
    layers.append(dict(overrides or {}))
    return build_settings(*layers)
