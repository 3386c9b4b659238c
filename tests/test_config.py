"""Tests for layered settings resolution."""

from pathlib import Path

import pytest

from semver_gen_core.config import DEFAULT_TAG, SemverSettings, build_settings, load_settings
from semver_gen_core.errors import ConfigError


def _write(path: Path, content: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


def test_defaults(tmp_path: Path):
    settings = load_settings(tmp_path, environ={})
    assert settings == SemverSettings()
    assert settings.default_tag == DEFAULT_TAG == "v0.1.0"
    assert settings.hash_length == 7
    assert settings.tag_regex.fullmatch("v10.20.30")


def test_pyproject_table(tmp_path: Path):
    _write(tmp_path / "pyproject.toml", '[tool.semver-gen]\nhash-length = 10\n')
    assert load_settings(tmp_path, environ={}).hash_length == 10


def test_local_file_beats_pyproject(tmp_path: Path):
    _write(tmp_path / "pyproject.toml", '[tool.semver-gen]\ndefault-tag = "v9.9.9"\n')
    _write(tmp_path / ".semver-gen.toml", 'default_tag = "v0.0.1"\n')
    nested = tmp_path / "a" / "b"
    nested.mkdir(parents=True)
    assert load_settings(nested, environ={}).default_tag == "v0.0.1"


def test_env_and_overrides_precedence(tmp_path: Path):
    explicit = _write(tmp_path / "custom.toml", "hash_length = 9\n")
    environ = {"SEMVER_GEN_HASH_LENGTH": "11", "SEMVER_GEN_DEFAULT_TAG": "v0.2.0"}

    settings = load_settings(tmp_path, config_file=explicit, environ=environ)
    assert settings.hash_length == 11
    assert settings.default_tag == "v0.2.0"

    settings = load_settings(tmp_path, config_file=explicit, overrides={"hash_length": 5, "default_tag": None}, environ=environ)
    assert settings.hash_length == 5
    assert settings.default_tag == "v0.2.0"


def test_explicit_file_missing(tmp_path: Path):
    with pytest.raises(ConfigError, match="not found"):
        load_settings(tmp_path, config_file=tmp_path / "nope.toml", environ={})


def test_invalid_toml(tmp_path: Path):
    _write(tmp_path / ".semver-gen.toml", "hash_length = \n")
    with pytest.raises(ConfigError, match="invalid TOML"):
        load_settings(tmp_path, environ={})


@pytest.mark.parametrize(
    "layer",
    [
        {"hash_length": 0},
        {"tag_pattern": "v[0-9"},
        {"default_tag": ""},
        {"unknown_key": 1},
    ],
)
def test_invalid_values(layer):
    with pytest.raises(ConfigError):
        build_settings(layer)
