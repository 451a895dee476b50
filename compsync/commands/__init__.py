"""CLI command definitions for compsync."""

import click

from compsync import __version__
from compsync.commands.add import add
from compsync.commands.init import init
from compsync.commands.list import list_components
from compsync.commands.status import status
from compsync.commands.update import update


@click.group()
@click.version_option(__version__, prog_name="compsync")
@click.option("--debug", is_flag=True, help="Enable debug output for troubleshooting")
@click.pass_context
def cli(ctx, debug):
    """Install registry components into your project and keep them in sync."""
    ctx.ensure_object(dict)
    ctx.obj["debug"] = debug


# Register all commands
cli.add_command(init)
cli.add_command(list_components, name="list")
cli.add_command(add)
cli.add_command(status)
cli.add_command(update)

__all__ = [
    "cli",
]


if __name__ == "__main__":
    cli()
