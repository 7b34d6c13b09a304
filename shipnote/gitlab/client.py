"""GitLab client wrapper using python-gitlab library."""

import logging
import time
from datetime import datetime
from typing import List, Optional, Dict, Any

import gitlab
import requests
from dateutil import parser as date_parser
from gitlab.v4.objects import Project

from ..config import Config
from ..errors import HostError, TagNotFoundError
from ..releasenote.commits import RawCommit


# python-gitlab lets transport errors from requests through unwrapped
API_ERRORS = (gitlab.GitlabError, requests.RequestException)


def _parse_date(value: Optional[str]) -> Optional[datetime]:
    return date_parser.isoparse(value) if value else None


class GitLabClient:
    """Wrapper for the GitLab API calls a release run needs."""

    def __init__(self, config: Config, logger: Optional[logging.Logger] = None):
        """Initialize GitLab client.

        Args:
            config: Configuration object containing GitLab settings
            logger: Logger instance
        """
        self.config = config
        self.logger = logger or logging.getLogger(__name__)

        self.gl = gitlab.Gitlab(
            url=config.gitlab_host,
            private_token=config.gitlab_token,
            timeout=300
        )

        self._project_cache: Dict[str, Project] = {}

    def _get_project(self, project_name: str) -> Project:
        """Get project instance with caching."""
        if project_name not in self._project_cache:
            try:
                self._project_cache[project_name] = self.gl.projects.get(project_name)
            except API_ERRORS as e:
                raise HostError(f"Error getting project {project_name}: {e}") from e
        return self._project_cache[project_name]

    def get_project(self, project: str) -> Dict[str, Any]:
        """Get project information.

        Args:
            project: Project name or ID

        Returns:
            Project data
        """
        proj = self._get_project(project)
        return {
            'id': proj.id,
            'name': proj.name,
            'path': proj.path,
            'path_with_namespace': proj.path_with_namespace,
            'web_url': proj.web_url,
        }

    def list_tags(self, project: str) -> List[Dict[str, Any]]:
        """List all tags for a project, most recently updated first.

        Args:
            project: Project name or ID

        Returns:
            List of ``{'name', 'commit_sha'}`` dictionaries
        """
        proj = self._get_project(project)
        try:
            tags = proj.tags.list(all=True, per_page=100, order_by='updated', sort='desc')
        except API_ERRORS as e:
            raise HostError(f"Error listing tags: {e}") from e

        return [{'name': tag.name, 'commit_sha': tag.commit['id']} for tag in tags]

    def get_commit(self, project: str, sha: str) -> Dict[str, Any]:
        """Get commit by SHA.

        Args:
            project: Project name or ID
            sha: Commit SHA, tag or branch

        Returns:
            ``{'hash', 'message', 'author_date'}`` dictionary
        """
        proj = self._get_project(project)
        try:
            commit = proj.commits.get(sha)
        except API_ERRORS as e:
            raise HostError(f"Error getting commit {sha}: {e}") from e

        return {
            'hash': commit.id,
            'message': commit.message,
            'author_date': _parse_date(commit.authored_date),
        }

    def list_commits(self, project: str, since: Optional[datetime] = None,
                     ref_name: str = "") -> List[RawCommit]:
        """List commits for a project, newest first.

        Args:
            project: Project name or ID
            since: Only commits at or after this date
            ref_name: Reference name (branch/tag), default branch if empty

        Returns:
            List of raw commits
        """
        proj = self._get_project(project)

        params = {
            'all': True,
            'per_page': 100,
        }
        if ref_name:
            params['ref_name'] = ref_name
        if since:
            params['since'] = since.isoformat()

        try:
            commits = proj.commits.list(**params)
        except API_ERRORS as e:
            raise HostError(f"Error listing commits: {e}") from e

        return [
            RawCommit(
                hash=commit.id,
                message=commit.message,
                author_date=_parse_date(commit.authored_date),
            )
            for commit in commits
        ]

    def tag_exists(self, project: str, tag_name: str) -> bool:
        """Check whether a tag exists on the host.

        Args:
            project: Project name or ID
            tag_name: Tag name

        Returns:
            True if the tag exists
        """
        proj = self._get_project(project)
        try:
            proj.tags.get(tag_name)
            return True
        except gitlab.GitlabGetError:
            return False
        except API_ERRORS as e:
            raise HostError(f"Error getting tag {tag_name}: {e}") from e

    def wait_for_tag(self, project: str, tag_name: str, attempts: int = 5,
                     backoff: float = 1.0) -> None:
        """Wait until a freshly pushed tag is visible on the host.

        Args:
            project: Project name or ID
            tag_name: Tag name
            attempts: Number of lookups before giving up
            backoff: Seconds to sleep between lookups

        Raises:
            TagNotFoundError: If the tag is still missing after all attempts
        """
        self.logger.info(f"Checking for tag {tag_name} in GitLab...")
        for attempt in range(1, attempts + 1):
            if self.tag_exists(project, tag_name):
                self.logger.info(f"{tag_name} tag found!")
                return
            if attempt < attempts:
                self.logger.debug(f"Tag {tag_name} not found yet (attempt {attempt}/{attempts})")
                time.sleep(backoff)

        raise TagNotFoundError(f"{tag_name} not found")

    def create_release(self, project: str, tag_name: str, description: str) -> Dict[str, Any]:
        """Create a release for an existing tag.

        Args:
            project: Project name or ID
            tag_name: Tag name, also used as release name
            description: Release notes

        Returns:
            ``{'tag_name', 'web_url'}`` dictionary
        """
        proj = self._get_project(project)
        try:
            release = proj.releases.create({
                'tag_name': tag_name,
                'name': tag_name,
                'description': description,
            })
        except API_ERRORS as e:
            raise HostError(f"Error creating release for tag {tag_name}: {e}") from e

        links = release.attributes.get('_links') or {}
        return {
            'tag_name': release.tag_name,
            'web_url': links.get('self') or f"{proj.web_url}/-/releases/{tag_name}",
        }
