"""Release workflow.

Runs every release stage in order and stops at the first failure:
version bump, release notes, changelog, git commit/tag/push, GitLab
release, package publish and chat announcement.
"""

import logging
from typing import Any, Dict, Optional

import click

from .config import Config
from .errors import ConfigurationError
from .notify import send_release_notes
from .publish import publish_package
from .releasenote import extract_release_notes, merge_changelog_file
from .vcs import commit_release, ensure_clean_working_tree, get_branch, push_release, tag_release
from .version import bump_version


logger = logging.getLogger(__name__)


def _step(message: str) -> None:
    click.secho(message, bold=True)


def _done(message: str) -> None:
    click.secho(message, fg='green', bold=True)


def check_requirements(config: Config) -> None:
    """Check the settings a release cannot run without.

    Raises:
        ConfigurationError: If the project path is not configured
    """
    if not config.project:
        raise ConfigurationError(
            "Project is required. Set SHIPNOTE_PROJECT, use --project, or config file"
        )


def run_release(config: Config, client, bump: str, custom_version: str = "",
                webex_token: Optional[str] = None, publish: bool = True,
                notify: bool = True) -> Dict[str, Any]:
    """Run a complete release.

    Args:
        config: Release configuration, ``project`` must be set
        client: GitLab client instance
        bump: ``major``, ``minor``, ``patch`` or ``custom``
        custom_version: New version when ``bump`` is ``custom``
        webex_token: Webex access token, required when ``notify`` is set
        publish: Run the publish command
        notify: Post the release notes to the Webex room

    Returns:
        Dictionary with ``tag_name``, ``release_notes`` and ``release_url``

    Raises:
        ShipnoteError: From whichever stage failed; later stages do not run
    """
    check_requirements(config)
    if notify and not (webex_token and config.webex_room_id):
        raise ConfigurationError("Webex token and room ID are required to announce the release")

    project = config.project
    ensure_clean_working_tree()

    branch = config.branch or get_branch()
    _step(f"Using {branch} branch for release...")

    project_info = client.get_project(project)
    repo_url = project_info['web_url']
    package_name = config.package_name or project_info['name']

    _step("Versioning package...")
    tag_name = bump_version(config.version_file, bump, custom_version)

    release_notes = extract_release_notes(client, project, tag_name, repo_url=repo_url, ref=branch)
    merge_changelog_file(config.changelog_file, release_notes)

    _step("Creating commit...")
    commit_release(tag_name)
    _step(f"Applying tag {tag_name} to commit...")
    tag_release(tag_name)
    _step("Pushing new release commit and tag to GitLab...")
    push_release(branch)

    client.wait_for_tag(project, tag_name, attempts=config.tag_wait_attempts,
                        backoff=config.tag_wait_backoff)

    _step("Creating new release in GitLab...")
    release = client.create_release(project, tag_name, release_notes)
    _done(f"{tag_name} released to GitLab - {release['web_url']}")

    if publish:
        publish_package(config.publish_command)
        _done(f"Version {tag_name} of {package_name} published")
    else:
        logger.info("Skipping package publish")

    if notify:
        send_release_notes(webex_token, config.webex_room_id, package_name, release_notes)
        _done("Release notes posted to Webex room.")
    else:
        logger.info("Skipping release announcement")

    return {
        'tag_name': tag_name,
        'release_notes': release_notes,
        'release_url': release['web_url'],
    }
