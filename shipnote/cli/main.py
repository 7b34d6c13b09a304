"""Main CLI entry point for Shipnote."""

import logging
from datetime import datetime

import click

from .. import __version__
from ..config import get_config, create_sample_config, Config
from ..gitlab import GitLabClient
from .release import release
from .changelog import changelog


@click.group()
@click.option('--debug', is_flag=True, help='Enable debug logging')
@click.option('--gitlab-host', help='GitLab host URL (can also be set per command)')
@click.option('--gitlab-token', help='GitLab API token (can also be set per command)')
@click.option('--config-file', '-c', help='Path to JSON configuration file')
@click.version_option(version=__version__, prog_name="shipnote")
@click.pass_context
def cli(ctx, debug, gitlab_host, gitlab_token, config_file):
    """Shipnote - release automation with conventional-commit changelogs."""

    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    try:
        base_config = get_config(config_file)
    except ValueError as e:
        raise click.ClickException(str(e))

    ctx.ensure_object(dict)
    ctx.obj['base_config'] = base_config
    ctx.obj['global_gitlab_host'] = gitlab_host
    ctx.obj['global_gitlab_token'] = gitlab_token
    ctx.obj['logger'] = logging.getLogger('shipnote')


def resolve_config(ctx, project=None, gitlab_host=None, gitlab_token=None, **overrides) -> Config:
    """Build the effective configuration for a command.

    Command options win over global options, which win over the
    environment and config file.
    """
    base_config = ctx.obj['base_config']
    values = base_config.model_dump()
    values.update(
        gitlab_host=gitlab_host or ctx.obj['global_gitlab_host'] or base_config.gitlab_host,
        gitlab_token=gitlab_token or ctx.obj['global_gitlab_token'] or base_config.gitlab_token,
        project=project or base_config.project,
    )
    values.update({k: v for k, v in overrides.items() if v is not None})
    return Config(**values)


def prompt_gitlab_token(config: Config) -> str:
    """Return the GitLab token, asking for it when it is not configured."""
    if config.gitlab_token:
        return config.gitlab_token

    click.secho(
        "SHIPNOTE_GITLAB_TOKEN env variable not found (set SHIPNOTE_GITLAB_TOKEN to skip this prompt)",
        fg='yellow'
    )
    return click.prompt('GitLab personal access token', hide_input=True)


def create_client(ctx, config: Config) -> GitLabClient:
    """Create GitLab client for the configured project."""
    return GitLabClient(config, ctx.obj['logger'])


@cli.command()
@click.option('--path', '-p', default='shipnote.json', help='Path for the config file')
def init_config(path):
    """Create a sample configuration file."""
    try:
        create_sample_config(path)
    except OSError as e:
        raise click.ClickException(f"Error creating config file: {e}")

    click.echo(f"Sample configuration file created at: {path}")
    click.echo("Please edit the file and add your GitLab token and project details.")


@cli.command()
def version():
    """Show version information."""
    build_date = datetime.now().strftime('%Y-%m-%d')
    click.echo(f"Shipnote version {__version__} (run {build_date})")


cli.add_command(release)
cli.add_command(changelog)


def main():
    """Main entry point for console script."""
    cli()


if __name__ == '__main__':
    main()
