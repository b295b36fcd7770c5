"""
Tags command for monoversion.

Lists a component's release tags in Version order.
"""

import json

import click
from rich.console import Console
from rich.table import Table

from ..config import load_config
from ..domain.version import Component
from ..infra.git_client import GitClient
from ..services.tag_index import TagIndex

console = Console()


@click.command('tags')
@click.argument('component')
@click.option('--repo', 'repo_path', default='.', type=click.Path(exists=True, file_okay=False),
              help='Repository to read (default: current directory)')
@click.option('--latest', is_flag=True, help='Show only the newest release')
@click.option('--json', 'json_output', is_flag=True, help='Output as JSONL')
def tags_cmd(component, repo_path, latest, json_output):
    """List release tags of COMPONENT, oldest to newest.

    Only tags named COMPONENT-v<major>.<minor>.<patch> are listed; they are
    ordered numerically, so v10.0.0 sorts after v9.0.0.
    """
    config = load_config()
    index = TagIndex(repo_path, GitClient(timeout=config.get('git', {}).get('timeout')))
    target = Component(component)

    if latest:
        tag = index.latest_tag(target)
        tags = [tag] if tag else []
    else:
        tags = index.release_tags(target)

    if json_output:
        for tag in tags:
            click.echo(json.dumps({'tag': tag.name, 'version': str(tag.version)}))
        return

    if not tags:
        click.echo(f"No release tags for {component}", err=True)
        return

    table = Table(title=f"{component} releases")
    table.add_column("Tag")
    table.add_column("Version", style="green")
    for tag in tags:
        table.add_row(tag.name, str(tag.version))
    console.print(table)
