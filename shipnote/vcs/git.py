"""Local git operations for the release commit.

Contains:
- _run_git_command: Run a git command and return its output
- get_branch: Name of the checked out branch
- has_uncommitted_changes / ensure_clean_working_tree
- commit_release, tag_release, push_release
"""

import logging
import subprocess
from typing import List

from ..errors import GitError, UncommittedChangesError


logger = logging.getLogger(__name__)

# Porcelain status codes that count as a pending change
CHANGE_CODES = set("MADRUC?")


def _run_git_command(args: List[str]) -> str:
    """Run a git command and return its output.

    Args:
        args: List of arguments to pass to git.

    Returns:
        The stdout of the git command.

    Raises:
        GitError: If the command fails.
    """
    try:
        result = subprocess.run(
            ["git"] + args,
            capture_output=True,
            text=True,
            check=True,
        )
        return result.stdout.strip()
    except subprocess.CalledProcessError as e:
        raise GitError(f"Git command failed: git {' '.join(args)}\n{e.stderr.strip()}")
    except FileNotFoundError:
        raise GitError("Git is not installed or not in PATH.")


def get_branch() -> str:
    """Get the name of the current branch."""
    return _run_git_command(["rev-parse", "--abbrev-ref", "HEAD"])


def has_uncommitted_changes() -> bool:
    """Check whether the working tree has modified, staged or untracked files."""
    status = _run_git_command(["status", "--porcelain"])
    for line in status.splitlines():
        if line.strip() and line.strip()[0] in CHANGE_CODES:
            return True
    return False


def ensure_clean_working_tree() -> None:
    """Raise if the working tree is not clean.

    Raises:
        UncommittedChangesError: If there are pending changes.
    """
    if has_uncommitted_changes():
        raise UncommittedChangesError(
            "Git working directory not clean. You must commit changes in working directory first."
        )


def commit_release(tag_name: str) -> None:
    """Stage everything and commit it as the release commit."""
    logger.debug("Creating commit...")
    _run_git_command(["add", "."])
    _run_git_command(["commit", "-a", "-m", f"chore(release): {tag_name}"])


def tag_release(tag_name: str) -> None:
    """Tag the release commit."""
    logger.debug(f"Applying tag {tag_name} to commit...")
    _run_git_command(["tag", tag_name])


def push_release(branch: str) -> None:
    """Push the release commit and tags to origin."""
    logger.debug("Pushing new release commit to GitLab...")
    _run_git_command(["push", "origin", branch])
    logger.debug("Pushing new release tag to GitLab...")
    _run_git_command(["push", "--tags"])
