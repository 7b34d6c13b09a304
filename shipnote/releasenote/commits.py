"""Conventional commit classification.

Turns the raw commits listed by the host into structured Commit entries.
The host lists commits newest first and the oldest entry is the commit
of the previous release tag, so the last entry is always dropped before
parsing.
"""

import logging
import re
from datetime import datetime
from typing import Iterable, List, Optional

from pydantic import BaseModel, ConfigDict

from ..errors import NoCommitsSinceLastTagError


logger = logging.getLogger(__name__)

# type(category): description
COMMIT_PATTERN = re.compile(
    r'^(?P<type>\w*)(\((?P<category>[\w$.\-* ]*)\))?: (?P<description>[^\r]*)$',
    re.ASCII,
)

SHORT_HASH_LENGTH = 8


class RawCommit(BaseModel):
    """A commit as listed by the host, before classification."""

    model_config = ConfigDict(frozen=True)

    hash: str
    message: str
    author_date: Optional[datetime] = None


class Commit(BaseModel):
    """A commit whose subject follows the conventional commit pattern."""

    model_config = ConfigDict(frozen=True)

    hash: str
    type: str
    subject: str
    body: str = ""
    category: Optional[str] = None

    @property
    def short_hash(self) -> str:
        return self.hash[:SHORT_HASH_LENGTH]


def parse_commit(commit_hash: str, message: str) -> Optional[Commit]:
    """Parse a single commit message.

    Args:
        commit_hash: Commit SHA
        message: Full commit message (subject line plus optional body)

    Returns:
        The parsed Commit, or None if the subject line does not match
        ``type(category): description`` or has an empty type or description
    """
    subject, _, body = message.partition('\n')

    match = COMMIT_PATTERN.match(subject)
    if not match or not match.group('type') or not match.group('description'):
        return None

    return Commit(
        hash=commit_hash,
        type=match.group('type').lower(),
        subject=match.group('description'),
        body=body,
        category=match.group('category') or None,
    )


def classify_commits(raw_commits: Iterable[RawCommit]) -> List[Commit]:
    """Classify the commits made since the last tag.

    Args:
        raw_commits: Commits ordered newest first, the last one being the
            commit of the previous tag

    Returns:
        Parsed commits in their original order; commits that do not
        follow the convention are left out

    Raises:
        NoCommitsSinceLastTagError: If no commit remains once the tag
            commit is excluded
    """
    candidates = list(raw_commits)[:-1]
    if not candidates:
        raise NoCommitsSinceLastTagError()

    commits = []
    for raw in candidates:
        commit = parse_commit(raw.hash, raw.message)
        if commit is None:
            logger.debug(f"Skipping non-conventional commit {raw.hash[:SHORT_HASH_LENGTH]}")
            continue
        commits.append(commit)

    logger.info(f"Classified {len(commits)} of {len(candidates)} commits since last tag")
    return commits
