"""Status command implementation."""

import asyncio
import sys

import click

from compsync import ConfigError, format_error, setup_logging
from compsync.commands.utils import (
    echo_classification,
    get_out_dir,
    load_project_config,
    make_registry,
)
from compsync.sync import ComponentStatus, check_for_updates, list_local_components


@click.command()
@click.option("--quiet", "-q", is_flag=True, help="Show only components that differ")
@click.pass_context
def status(ctx, quiet: bool):
    """Compare installed components with the registry without changing them."""
    debug = ctx.obj.get("debug", False)
    try:
        asyncio.run(run_status(quiet, debug))
    except ConfigError as e:
        click.echo(format_error(str(e)), err=True)
        sys.exit(1)


async def run_status(quiet: bool, debug: bool):
    setup_logging(debug)
    config = load_project_config()
    out_dir = get_out_dir(config)

    local = list_local_components(out_dir, config.registry.extension)
    if not local:
        click.echo("⚠️  No components found in the output directory.")
        return

    if not quiet:
        click.echo(f"🔍 Checking {len(local)} component(s)...\n")

    results = await check_for_updates(out_dir, config, make_registry(config))
    echo_classification(results, quiet=quiet)

    pending = [r for r in results if r.status is not ComponentStatus.UP_TO_DATE]
    unchecked = len(local) - len(results)
    if unchecked:
        click.echo(f"{unchecked} component(s) could not be validated against the registry.")
    if pending:
        click.echo(f"{len(pending)} component(s) differ from the registry.")
        click.echo("Run 'compsync update' to update them.")
    else:
        click.echo("All components are up to date.")
