"""Release command implementation."""

import sys

import click

from ..errors import ShipnoteError
from ..release import run_release
from ..version import BUMP_TYPES


def prompt_bump():
    """Ask for the release type, and the version for a custom release."""
    bump = click.prompt(
        'What type of release is this?',
        type=click.Choice(BUMP_TYPES),
        default='patch',
    )
    custom_version = ""
    if bump == 'custom':
        custom_version = click.prompt('Enter your custom version')
    return bump, custom_version


def prompt_webex_token(token):
    """Return the Webex token, asking for it when it is not configured."""
    if token:
        return token

    click.secho(
        "SHIPNOTE_WEBEX_TOKEN env variable not found (set SHIPNOTE_WEBEX_TOKEN to skip this prompt)",
        fg='yellow'
    )
    return click.prompt('Webex access token', hide_input=True)


@click.command()
@click.option('--project', '-p', help='GitLab project path or ID')
@click.option('--bump', '-b', type=click.Choice(BUMP_TYPES), help='Release type (prompted if omitted)')
@click.option('--custom-version', help='New version for a custom release')
@click.option('--changelog-file', '-f', help='Changelog file path')
@click.option('--gitlab-host', help='GitLab host URL (overrides global setting)')
@click.option('--gitlab-token', help='GitLab API token (overrides global setting)')
@click.option('--skip-publish', is_flag=True, help='Do not run the publish command')
@click.option('--skip-notify', is_flag=True, help='Do not post the release notes to Webex')
@click.pass_context
def release(ctx, project, bump, custom_version, changelog_file, gitlab_host, gitlab_token,
            skip_publish, skip_notify):
    """Version, tag, publish and announce a new release."""

    # Import here to avoid circular dependency
    from .main import create_client, prompt_gitlab_token, resolve_config

    logger = ctx.obj['logger']

    try:
        config = resolve_config(ctx, project, gitlab_host, gitlab_token,
                                changelog_file=changelog_file)

        if bump is None:
            bump, prompted_version = prompt_bump()
            custom_version = custom_version or prompted_version
        elif bump == 'custom' and not custom_version:
            custom_version = click.prompt('Enter your custom version')

        config.gitlab_token = prompt_gitlab_token(config)
        webex_token = None if skip_notify else prompt_webex_token(config.webex_token)

        client = create_client(ctx, config)
        logger.info(f"Releasing project: {config.project}")

        run_release(
            config,
            client,
            bump,
            custom_version or "",
            webex_token=webex_token,
            publish=not skip_publish,
            notify=not skip_notify,
        )
    except ShipnoteError as e:
        logger.debug("Release failed", exc_info=True)
        click.secho(f"ERROR: {e}", fg='red', err=True)
        sys.exit(1)
