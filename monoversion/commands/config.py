import click
import json
from pathlib import Path

from monoversion.config import load_config, get_config_path, get_default_config, save_config


@click.group("config")
def config_cmd():
    """Configuration management commands."""
    pass


@config_cmd.command("show")
@click.option("--pretty", is_flag=True, help="Display as formatted JSON instead of single-line JSON")
@click.option("--path", is_flag=True, help="Show the config file path being used")
def show_config(pretty, path):
    """Show the current configuration with all merges applied.

    By default, outputs single-line JSON.
    Use --pretty for human-readable formatted output.
    Use --path to see which config file is being used.
    """
    if path:
        click.echo(json.dumps({"config_path": str(get_config_path())}))
        return

    config = load_config()

    if pretty:
        click.echo(json.dumps(config, indent=2, ensure_ascii=False))
    else:
        click.echo(json.dumps(config, ensure_ascii=False))


@config_cmd.command("init")
@click.option("--output", "-o", default=".monoversion.toml", type=click.Path(dir_okay=False),
              help="File to write (.toml, .json, .yaml)")
@click.option("--force", is_flag=True, help="Overwrite an existing file")
def init_config(output, force):
    """Write the default configuration to a project config file."""
    config_path = Path(output)
    if config_path.exists() and not force:
        click.echo(f"Configuration already exists at {config_path} (use --force to overwrite)", err=True)
        raise click.Abort()

    config = get_default_config()
    # TOML has no null
    if config_path.suffix.lower() == '.toml':
        config['branches'].pop('stable_ref')
        config['git'].pop('timeout')
    save_config(config, config_path)
    click.echo(f"Configuration written to {config_path}")
