"""Update command implementation."""

import asyncio
import logging
import sys

import click

from compsync import ConfigError, format_error, format_suggestion, setup_logging
from compsync.commands.utils import (
    echo_classification,
    get_or_create_config,
    get_out_dir,
    make_registry,
)
from compsync.sync import (
    ClassificationResult,
    ComponentStatus,
    check_for_updates,
    list_local_components,
    select_for_update,
    update_components,
)
from compsync.tui import (
    UPDATE_CANCEL,
    UPDATE_OUTDATED,
    confirm_modified,
    select_components,
    select_update_choice,
)

_logging = logging.getLogger(__name__)


@click.command()
@click.option(
    "--all",
    "update_all",
    is_flag=True,
    help="Update every outdated component without prompting",
)
@click.option(
    "--include-modified",
    is_flag=True,
    help="Also overwrite components you modified locally",
)
@click.option("--dry-run", is_flag=True, help="Show what would be updated")
@click.pass_context
def update(ctx, update_all: bool, include_modified: bool, dry_run: bool):
    """Check installed components for updates and apply them."""
    debug = ctx.obj.get("debug", False)
    try:
        asyncio.run(run_update(update_all, include_modified, dry_run, debug))
    except ConfigError as e:
        click.echo(format_error(str(e)), err=True)
        sys.exit(1)


def _choose_interactively(
    results: list[ClassificationResult], include_modified: bool, debug: bool
) -> list[str] | None:
    """Ask the user which components to update.

    Returns:
        Chosen names ([] when the user cancels or picks nothing), or None if
        interactive selection is not possible.
    """
    if not sys.stdin.isatty():
        return None

    outdated = select_for_update(results)
    modified = [r.component for r in results if r.status is ComponentStatus.MODIFIED]

    try:
        choice = select_update_choice(len(outdated), len(modified))
        if choice is None or choice == UPDATE_CANCEL:
            return []

        if choice == UPDATE_OUTDATED:
            selected = list(outdated)
            if modified and (include_modified or confirm_modified(modified)):
                selected.extend(modified)
            return selected

        selected = select_components(results)
        return selected or []
    except RuntimeError:
        return None
    except OSError as e:
        if debug:
            _logging.debug(f"Terminal error in update selection: {e}")
        return None


async def run_update(update_all: bool, include_modified: bool, dry_run: bool, debug: bool):
    setup_logging(debug)
    config = get_or_create_config(debug)
    out_dir = get_out_dir(config)

    if not out_dir.is_dir():
        click.echo(
            format_suggestion(
                f'component directory "{config.out_dir}" does not exist',
                "run 'compsync add <name>' first",
            ),
            err=True,
        )
        sys.exit(1)

    local = list_local_components(out_dir, config.registry.extension)
    if not local:
        click.echo("⚠️  No components found in the output directory.")
        return

    click.echo(f"🔍 Checking {len(local)} component(s) for updates...\n")
    registry = make_registry(config)
    results = await check_for_updates(out_dir, config, registry)
    if not results:
        click.echo("No components could be checked against the registry.")
        return

    echo_classification(results)

    modified = [r.component for r in results if r.status is ComponentStatus.MODIFIED]
    if not any(r.status is not ComponentStatus.UP_TO_DATE for r in results):
        click.echo("🎉 All components are up to date!")
        return

    if update_all:
        selected = select_for_update(results, include_modified=include_modified)
        if modified and not include_modified:
            click.echo(
                f"Skipping {len(modified)} locally modified component(s); "
                "use --include-modified to overwrite them."
            )
    else:
        selected = _choose_interactively(results, include_modified, debug)
        if selected is None:
            click.echo("Run 'compsync update --all' to update outdated components.")
            return
        if not selected:
            click.echo("Update cancelled.")
            return

    if not selected:
        click.echo("Nothing to update.")
        return

    if dry_run:
        click.echo("Would update:")
        for name in selected:
            click.echo(f"   • {name}")
        return

    summary = await update_components(out_dir, selected, config, registry)

    for name in summary.updated:
        click.echo(f"✅ Updated {name}")
    for name, reason in summary.failed.items():
        click.echo(f"❌ Failed to update {name}: {reason}", err=True)

    click.echo("\n📊 Update Summary:")
    click.echo(f"   ✅ Updated: {summary.updated_count}")
    if summary.failed_count:
        click.echo(f"   ❌ Failed: {summary.failed_count}")
        sys.exit(1)
