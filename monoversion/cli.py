#!/usr/bin/env python3

import click
import sys

from monoversion.exit_codes import CommandError
from monoversion.commands.resolve import resolve_cmd
from monoversion.commands.tags import tags_cmd
from monoversion.commands.config import config_cmd


class MonoversionGroup(click.Group):
    """Click group that turns CommandError into its exit code."""

    def invoke(self, ctx):
        try:
            return super().invoke(ctx)
        except CommandError as e:
            click.echo(f"Error: {e}", err=True)
            ctx.exit(e.exit_code)


@click.group(cls=MonoversionGroup)
@click.version_option(package_name='monoversion')
def cli():
    """monoversion - Semantic versions for monorepo components from git history.

    Each component has its own release tags (COMPONENT-vX.Y.Z). Commits
    that touched the component since its last tag bump the version, one
    bump per commit, as selected by "+semver: major|minor|patch" markers
    in their messages.
    """
    pass


cli.add_command(resolve_cmd)
cli.add_command(tags_cmd)
cli.add_command(config_cmd)


def main():
    return cli()

if __name__ == "__main__":
    sys.exit(main() or 0)
