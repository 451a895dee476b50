"""List command implementation."""

import asyncio
import sys

import click

from compsync import ConfigError, TransportError, format_error, setup_logging
from compsync.commands.utils import get_out_dir, load_project_config, make_registry
from compsync.sync import list_local_components


@click.command(name="list")
@click.pass_context
def list_components(ctx):
    """List components available in the registry."""
    debug = ctx.obj.get("debug", False)
    try:
        asyncio.run(run_list(debug))
    except ConfigError as e:
        click.echo(format_error(str(e)), err=True)
        sys.exit(1)


async def run_list(debug: bool):
    setup_logging(debug)
    config = load_project_config()
    registry = make_registry(config)

    try:
        available = await registry.list_available()
    except TransportError as e:
        click.echo(format_error(f"failed to fetch components list: {e}"), err=True)
        sys.exit(1)

    if not available:
        click.echo("No components available.")
        return

    installed = set(list_local_components(get_out_dir(config), config.registry.extension))

    click.echo("📦 Available components:")
    for name in sorted(available):
        marker = " (installed)" if name in installed else ""
        click.echo(f" - {name}{marker}")
