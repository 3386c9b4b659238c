from .locate import find_root_commit, find_tagged_commit, locate_release_commit
from .extract import extract_commit, extract_tag, matching_tags
from .distance import commits_since
from .render import abbreviate, render_descriptor
from .describe import describe, describe_version

__all__ = [
    "find_root_commit",
    "find_tagged_commit",
    "locate_release_commit",
    "extract_commit",
    "extract_tag",
    "matching_tags",
    "commits_since",
    "abbreviate",
    "render_descriptor",
    "describe",
    "describe_version",
]
