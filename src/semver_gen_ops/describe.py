"""End-to-end derivation of the version descriptor."""

from __future__ import annotations

import logging

from semver_gen_core.config import SemverSettings
from semver_gen_core.models import VersionDescriptor
from semver_gen_core.vcs.base import HistoryStore

from .distance import commits_since
from .extract import extract_commit, extract_tag
from .locate import locate_release_commit
from .render import render_descriptor

logger = logging.getLogger(__name__)


def describe(store: HistoryStore, settings: SemverSettings) -> VersionDescriptor:
    record = locate_release_commit(store, settings)
    tag = extract_tag(record, settings)
    commit = extract_commit(record)
    distance = commits_since(store, commit)
    head = store.head_commit()
    logger.debug(f"tag={tag} commit={commit} distance={distance} head={head}")
    return VersionDescriptor(
        tag=tag,
        distance=distance,
        commit=commit,
        head_commit=head,
        abbrev_length=settings.hash_length,
    )


def describe_version(store: HistoryStore, settings: SemverSettings) -> str:
    """Rendered descriptor for the current HEAD."""
    descriptor = describe(store, settings)
    return render_descriptor(descriptor.tag, descriptor.distance, descriptor.head_commit, descriptor.abbrev_length)
