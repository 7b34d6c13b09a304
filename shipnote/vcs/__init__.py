"""Version control helpers."""

from .git import (
    get_branch,
    has_uncommitted_changes,
    ensure_clean_working_tree,
    commit_release,
    tag_release,
    push_release,
)

__all__ = [
    "get_branch",
    "has_uncommitted_changes",
    "ensure_clean_working_tree",
    "commit_release",
    "tag_release",
    "push_release",
]
