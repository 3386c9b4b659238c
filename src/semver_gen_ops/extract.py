"""Tag and commit extraction from a located commit record."""

from __future__ import annotations

import re
from typing import List, Optional, Pattern, Tuple, Union

from semver_gen_core.config import SemverSettings
from semver_gen_core.errors import MissingCommitError
from semver_gen_core.models import CommitRecord

_NUMBER = re.compile(r"\d+")


def _compile(pattern: Union[str, Pattern[str]]) -> Pattern[str]:
    return re.compile(pattern) if isinstance(pattern, str) else pattern


def _precedence(tag: str) -> Tuple[Tuple[int, ...], str]:
    return tuple(int(n) for n in _NUMBER.findall(tag)), tag


def matching_tags(record: Optional[CommitRecord], pattern: Union[str, Pattern[str]]) -> List[str]:
    """Tag names on ``record`` fully matching ``pattern``, preferred first.

    Only refs in the tag namespace are considered. Several matches on one
    commit are ordered by their numeric components (``v1.10.0`` before
    ``v1.9.0``), then by name.
    """
    if record is None:
        return []
    regex = _compile(pattern)
    tags = [name for name in record.tag_names() if regex.fullmatch(name)]
    return sorted(set(tags), key=_precedence, reverse=True)


def extract_tag(record: Optional[CommitRecord], settings: SemverSettings) -> str:
    tags = matching_tags(record, settings.tag_regex)
    return tags[0] if tags else settings.default_tag


def extract_commit(record: Optional[CommitRecord]) -> str:
    if record is None or not record.commit_id or not record.commit_id.strip():
        raise MissingCommitError()
    return record.commit_id.strip()
