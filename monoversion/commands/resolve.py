"""
Resolve command for monoversion.

Prints the version of one component, derived from git history, and
optionally tags the release.
"""

import json
import logging

import click
from rich.console import Console
from rich.table import Table

from ..config import load_config, configure_logging
from ..domain.version import Component, Increment
from ..services.directives import parse_directive
from ..services.release import ReleaseDriver, Resolution

logger = logging.getLogger(__name__)

INCREMENT_CHOICES = [increment.value for increment in Increment]


def render_explanation(resolution: Resolution, console: Console) -> None:
    """Show how a version was reached, one row per commit."""
    baseline = resolution.baseline_tag or f"root {(resolution.baseline_commit or '')[:8]}"
    table = Table(
        title=f"{resolution.component.name} on {resolution.branch.name} ({resolution.branch.kind.value})",
        caption=f"baseline: {baseline}",
    )
    table.add_column("#", justify="right", style="dim")
    table.add_column("Commit")
    table.add_column("Directive", style="cyan")

    for record in resolution.commits:
        if resolution.prerelease:
            explicit = parse_directive(record.message, default=None)
            directive = explicit.value if explicit else "-"
        else:
            directive = resolution.increments[record.order].value
        table.add_row(str(record.order + 1), record.subject, directive)

    console.print(table)
    if resolution.prerelease:
        console.print(f"Applied once: [cyan]{resolution.increments[0].value}[/cyan]")
    console.print(f"Version: [bold green]{resolution.version}[/bold green]")


@click.command('resolve')
@click.argument('component')
@click.option('--path', 'component_path', default=None,
              help='Path whose history belongs to the component (default: COMPONENT)')
@click.option('--increment', '-i', type=click.Choice(INCREMENT_CHOICES), default=None,
              help='Increment for commits without a +semver directive (default: patch)')
@click.option('--tag/--no-tag', 'create_tag', default=False,
              help='Create and push a release tag for a new version')
@click.option('--dry-run', is_flag=True, help='Report the tag that would be created')
@click.option('--ref', 'target_ref', default='HEAD', help='Ref to resolve (default: HEAD)')
@click.option('--branch', default=None, help='Branch name to classify (default: checked-out branch)')
@click.option('--stable', default=None, help='Name of the stable branch (default: main)')
@click.option('--from-tag', default=None, help='Explicit baseline release tag')
@click.option('--repo', 'repo_path', default='.', type=click.Path(exists=True, file_okay=False),
              help='Repository to read (default: current directory)')
@click.option('--explain', is_flag=True, help='Show the commits and directives used (stderr)')
@click.option('--json', 'json_output', is_flag=True, help='Output the resolution as JSON')
@click.option('--verbose', '-v', is_flag=True, help='Log every git command (stderr)')
def resolve_cmd(component, component_path, increment, create_tag, dry_run, target_ref,
                branch, stable, from_tag, repo_path, explain, json_output, verbose):
    """Print the version of COMPONENT derived from git history.

    On the stable branch this is the next release version (unchanged if
    nothing touched the component since its last tag). On feature/,
    topic/, task/ and hotfix/ branches it is a pre-release identifier
    such as 1.1.0-login0001, which is never tagged.

    Examples:

    \b
        monoversion resolve api
        monoversion resolve api --path services/api --tag
        monoversion resolve web --branch feature/login --explain
    """
    config = load_config()
    logging_config = config.get('logging', {})
    configure_logging(
        'DEBUG' if verbose else logging_config.get('level', 'WARNING'),
        logging_config.get('format', '%(levelname)s: %(message)s'),
    )

    if stable:
        config['branches']['stable'] = stable
    if increment:
        config['increments']['default'] = increment

    logger.debug(f"Resolving {component} in {repo_path}")
    driver = ReleaseDriver(repo_path, config=config)
    resolution = driver.resolve(
        Component(component, component_path),
        create_tag=create_tag,
        target_ref=target_ref,
        branch=branch,
        from_tag=from_tag,
        dry_run=dry_run,
    )

    if explain:
        render_explanation(resolution, Console(stderr=True))

    if json_output:
        click.echo(json.dumps(resolution.to_dict()))
    else:
        click.echo(resolution.version)
