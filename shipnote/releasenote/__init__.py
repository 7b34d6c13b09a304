"""Release note generation module."""

from .changelog import (
    ChangeType,
    group_commits,
    render,
    merge,
    merge_changelog_file,
)
from .commits import (
    COMMIT_PATTERN,
    Commit,
    RawCommit,
    classify_commits,
    parse_commit,
)
from .generator import extract_release_notes

__all__ = [
    "ChangeType",
    "group_commits",
    "render",
    "merge",
    "merge_changelog_file",
    "COMMIT_PATTERN",
    "Commit",
    "RawCommit",
    "classify_commits",
    "parse_commit",
    "extract_release_notes",
]
