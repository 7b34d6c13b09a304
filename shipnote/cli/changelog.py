"""Changelog command implementation."""

import sys

import click

from ..errors import ChangelogError, ConfigurationError, ShipnoteError
from ..releasenote import extract_release_notes, merge_changelog_file


@click.command()
@click.option('--project', '-p', help='GitLab project path or ID')
@click.option('--tag', '-t', required=True, help='Version label for the new section')
@click.option('--ref', '-r', default='', help='Branch to read commits from (default branch if omitted)')
@click.option('--file', '-f', help='Changelog file path')
@click.option('--gitlab-host', help='GitLab host URL (overrides global setting)')
@click.option('--gitlab-token', help='GitLab API token (overrides global setting)')
@click.option('--markdown-only', '-mo', is_flag=True, help='Generate only markdown, do not update the changelog')
@click.option('--output', '-o', help='Output markdown to file instead of stdout (when using --markdown-only)')
@click.pass_context
def changelog(ctx, project, tag, ref, file, gitlab_host, gitlab_token, markdown_only, output):
    """Update the changelog with the commits made since the last tag."""

    # Import here to avoid circular dependency
    from .main import create_client, prompt_gitlab_token, resolve_config

    logger = ctx.obj['logger']

    try:
        config = resolve_config(ctx, project, gitlab_host, gitlab_token, changelog_file=file)
        if not config.project:
            raise ConfigurationError("Project is required. Use --project or config file")

        config.gitlab_token = prompt_gitlab_token(config)
        client = create_client(ctx, config)

        logger.info(f"Generating release notes for project: {config.project}, tag: {tag}")
        repo_url = client.get_project(config.project)['web_url']
        release_notes = extract_release_notes(client, config.project, tag, repo_url=repo_url, ref=ref)

        if markdown_only:
            if output:
                try:
                    with open(output, 'w', encoding='utf-8') as f:
                        f.write(release_notes)
                except OSError as e:
                    raise ChangelogError(f"Error writing to file {output}: {e}") from e
                click.echo(f"Release notes saved to: {output}")
            else:
                click.echo(release_notes)
            return

        merge_changelog_file(config.changelog_file, release_notes)
        click.echo(f"Changelog entry for {tag}:")
        click.echo("=" * 50)
        click.echo(release_notes)
        click.echo("=" * 50)
        click.echo(f"Successfully updated {config.changelog_file}")
    except ShipnoteError as e:
        logger.debug("Changelog update failed", exc_info=True)
        click.secho(f"ERROR: {e}", fg='red', err=True)
        sys.exit(1)
