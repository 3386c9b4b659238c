"""Data model shared by the locator, extractor and renderer."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Tuple

TAG_NAMESPACE = "refs/tags/"


@dataclass(frozen=True)
class CommitRecord:
    """A commit as reported by the history store."""
    commit_id: str
    refs: Tuple[str, ...] = field(default_factory=tuple)  # fully qualified ref names

    def tag_names(self) -> Tuple[str, ...]:
        """Short names of the refs living in the tag namespace."""
        return tuple(ref[len(TAG_NAMESPACE):] for ref in self.refs if ref.startswith(TAG_NAMESPACE))


@dataclass(frozen=True)
class VersionDescriptor:
    """Derived version: nearest release tag plus distance from HEAD."""
    tag: str
    distance: int
    commit: str  # located commit
    head_commit: str
    abbrev_length: int = 7

    @property
    def abbreviated_hash(self) -> str:
        return self.head_commit[: self.abbrev_length]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "tag": self.tag,
            "distance": self.distance,
            "commit": self.commit,
            "head_commit": self.head_commit,
            "abbreviated_hash": self.abbreviated_hash,
        }
