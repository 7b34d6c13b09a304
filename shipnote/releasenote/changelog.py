"""Changelog rendering and merging."""

import logging
from collections import OrderedDict
from datetime import date
from enum import Enum
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from ..errors import ChangelogError
from .commits import Commit


logger = logging.getLogger(__name__)

CHANGELOG_TITLE = "## Change Log"
CHANGELOG_DESCRIPTION = "All notable changes to this project will be documented in this file."
PREAMBLE_LENGTH = 2


class ChangeType(str, Enum):
    """Section of the changelog a commit type is listed under.

    The value is the raw commit type key. Any key outside this set is
    listed under OTHER.
    """

    BREAK = "break"
    CHORE = "chore"
    DOCS = "docs"
    FEAT = "feat"
    FIX = "fix"
    OTHER = "other"
    REFACTOR = "refactor"
    STYLE = "style"
    TEST = "test"

    @property
    def label(self) -> str:
        return CHANGE_TYPE_LABELS[self]

    @classmethod
    def from_key(cls, key: Optional[str]) -> "ChangeType":
        """Map a commit type key to its section, unknown keys to OTHER."""
        try:
            return cls(key)
        except ValueError:
            return cls.OTHER


CHANGE_TYPE_LABELS = {
    ChangeType.BREAK: "Breaking Changes",
    ChangeType.CHORE: "Chores",
    ChangeType.DOCS: "Documentation Changes",
    ChangeType.FEAT: "New Features",
    ChangeType.FIX: "Bug Fixes",
    ChangeType.OTHER: "Other Changes",
    ChangeType.REFACTOR: "Refactors",
    ChangeType.STYLE: "Code Style Changes",
    ChangeType.TEST: "Tests",
}

CategoryGroup = Tuple[Optional[str], List[Commit]]
TypeGroup = Tuple[ChangeType, List[CategoryGroup]]


def group_commits(commits: Iterable[Commit]) -> List[TypeGroup]:
    """Group commits by change type, then by category.

    Type groups are sorted by their raw key. Category groups keep the
    order in which each category was first seen and commits keep the
    order they were given in.

    Args:
        commits: Classified commits

    Returns:
        List of (change type, list of (category, commits)) tuples
    """
    types: "OrderedDict[ChangeType, OrderedDict[Optional[str], List[Commit]]]" = OrderedDict()

    for commit in commits:
        categories = types.setdefault(ChangeType.from_key(commit.type), OrderedDict())
        categories.setdefault(commit.category, []).append(commit)

    return [
        (change_type, list(types[change_type].items()))
        for change_type in sorted(types, key=lambda t: t.value)
    ]


def format_date(day: date) -> str:
    """Format a date as YYYY-M-D without zero padding."""
    return f"{day.year}-{day.month}-{day.day}"


def _commit_reference(commit: Commit, repo_url: Optional[str]) -> str:
    if repo_url:
        return f"[{commit.short_hash}]({repo_url}/commit/{commit.hash})"
    return commit.short_hash


def render(version: str, commits: Iterable[Commit], repo_url: Optional[str] = None,
           today: Optional[date] = None) -> str:
    """Render a changelog section for a release.

    Args:
        version: Release version label, e.g. ``v1.2.0``
        commits: Classified commits to list
        repo_url: Repository web URL; when set, hashes link to the commit page
        today: Date shown in the heading, defaults to the current local date

    Returns:
        Markdown section
    """
    today = today or date.today()
    content = [f"### {version} ({format_date(today)})", ""]

    for change_type, categories in group_commits(commits):
        content.append(f"#### {change_type.label}")
        content.append("")

        for category, category_commits in categories:
            # No category still renders as an empty bold label
            category_heading = f"* **{category or ''}:**"

            if len(category_commits) > 1:
                content.append(category_heading)
                prefix = "  *"
            else:
                prefix = category_heading

            for commit in category_commits:
                content.append(f"{prefix} {commit.subject} ({_commit_reference(commit, repo_url)})")

        content.append("")

    content.append("")
    return "\n".join(content)


def merge(old_document: Optional[str], new_section: str) -> str:
    """Merge a new section into an existing changelog.

    The first two lines of the old document (its title and description)
    are replaced by a fresh preamble, the new section goes right below it
    and the rest of the old document follows unchanged.

    Args:
        old_document: Current changelog content, None if there is none
        new_section: Rendered section for the new release

    Returns:
        Merged changelog content
    """
    old_lines = old_document.split("\n")[PREAMBLE_LENGTH:] if old_document else []
    new_lines = [CHANGELOG_TITLE, CHANGELOG_DESCRIPTION, ""] + new_section.split("\n")
    return "\n".join(new_lines + old_lines)


def merge_changelog_file(path: str, new_section: str) -> str:
    """Merge a new section into the changelog file on disk.

    Args:
        path: Changelog file path; a missing file means no history yet
        new_section: Rendered section for the new release

    Returns:
        The merged content that was written

    Raises:
        ChangelogError: If the file cannot be read or written
    """
    changelog_path = Path(path)
    old_document = None
    if changelog_path.is_file():
        try:
            old_document = changelog_path.read_text(encoding='utf-8')
        except (OSError, UnicodeDecodeError) as e:
            raise ChangelogError(f"Cannot read changelog {path}: {e}") from e
    else:
        logger.info(f"No changelog found at {path}, starting a new one")

    merged = merge(old_document, new_section)
    try:
        changelog_path.write_text(merged, encoding='utf-8')
    except OSError as e:
        raise ChangelogError(f"Cannot write changelog {path}: {e}") from e
    logger.info(f"Updated {path}")
    return merged
