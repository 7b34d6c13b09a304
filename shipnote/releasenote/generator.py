"""Release note extraction from the host's commit history."""

import logging
from typing import Optional

from ..errors import NoTagsFoundError
from .changelog import render
from .commits import classify_commits


def extract_release_notes(client, project: str, version: str,
                          repo_url: Optional[str] = None, ref: str = "") -> str:
    """Render release notes for the commits made since the latest tag.

    The latest tag's commit date bounds the commit listing; the tag commit
    itself comes back as the oldest entry and is excluded by the classifier.

    Args:
        client: GitLab client instance
        project: Project name or ID
        version: Version label for the section heading
        repo_url: Repository web URL used for commit links
        ref: Branch to list commits from, default branch if empty

    Returns:
        Rendered markdown section

    Raises:
        NoTagsFoundError: If the project has no tags
        NoCommitsSinceLastTagError: If nothing was committed since the tag
    """
    logger = logging.getLogger(__name__)

    tags = client.list_tags(project)
    if not tags:
        raise NoTagsFoundError(f"No tags found in project {project}")

    latest_tag = tags[0]
    logger.info(f"Latest tag is {latest_tag['name']} ({latest_tag['commit_sha'][:8]})")

    tag_commit = client.get_commit(project, latest_tag['commit_sha'])
    since = tag_commit['author_date']
    logger.debug(f"Listing commits since {since}")

    raw_commits = client.list_commits(project, since=since, ref_name=ref)
    commits = classify_commits(raw_commits)

    return render(version, commits, repo_url=repo_url)
