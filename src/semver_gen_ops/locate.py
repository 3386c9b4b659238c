"""History locator: nearest release-tagged commit, else the root commit."""

from __future__ import annotations

import logging
from typing import Optional, Pattern, Union

from semver_gen_core.config import SemverSettings
from semver_gen_core.models import CommitRecord
from semver_gen_core.vcs.base import HistoryStore

from .extract import matching_tags

logger = logging.getLogger(__name__)


def find_tagged_commit(store: HistoryStore, pattern: Union[str, Pattern[str]]) -> Optional[CommitRecord]:
    """First commit from HEAD backwards carrying a tag that matches ``pattern``."""
    for record in store.iter_commits():
        if matching_tags(record, pattern):
            logger.debug(f"Nearest release tag on {record.commit_id}: {', '.join(record.tag_names())}")
            return record
    return None


def find_root_commit(store: HistoryStore) -> Optional[CommitRecord]:
    """Oldest commit, i.e. the last one in reverse-chronological order."""
    root = None
    for record in store.iter_commits():
        root = record
    return root


def locate_release_commit(store: HistoryStore, settings: SemverSettings) -> Optional[CommitRecord]:
    record = find_tagged_commit(store, settings.tag_regex)
    if record is not None:
        return record
    logger.debug(f"No tag matching {settings.tag_pattern!r}; falling back to root commit")
    return find_root_commit(store)
