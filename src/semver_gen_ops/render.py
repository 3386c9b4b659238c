"""Descriptor rendering."""

from __future__ import annotations

from semver_gen_core.config import DEFAULT_HASH_LEN


def abbreviate(commit_id: str, length: int = DEFAULT_HASH_LEN) -> str:
    if length < 1:
        raise ValueError(f"abbreviation length must be positive, got {length}")
    return commit_id[:length]


def render_descriptor(tag: str, distance: int, head_commit: str, abbrev_length: int = DEFAULT_HASH_LEN) -> str:
    """Render ``tag`` or ``tag-<distance>-g<abbreviated head>``.

    The ``g`` marks a git object name, matching ``git describe`` output.
    """
    if distance < 0:
        raise ValueError(f"distance must be non-negative, got {distance}")
    if distance == 0:
        return tag
    return f"{tag}-{distance}-g{abbreviate(head_commit, abbrev_length)}"
