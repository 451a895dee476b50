"""Add command implementation."""

import asyncio
import logging
import sys

import click

from compsync import ConfigError, format_error, setup_logging
from compsync.commands.utils import (
    get_or_create_config,
    get_out_dir,
    get_project_root,
    make_registry,
)
from compsync.config import SyncConfig
from compsync.installer import build_install_command, install_components, install_packages
from compsync.tui import confirm_package_install

_logging = logging.getLogger(__name__)


@click.command()
@click.argument("names", nargs=-1, required=True)
@click.option(
    "--yes",
    "-y",
    is_flag=True,
    help="Install missing third-party packages without asking",
)
@click.pass_context
def add(ctx, names: tuple[str, ...], yes: bool):
    """Add components (and the components they require) to your project."""
    debug = ctx.obj.get("debug", False)
    try:
        asyncio.run(run_add(list(names), yes, debug))
    except ConfigError as e:
        click.echo(format_error(str(e)), err=True)
        sys.exit(1)


def _should_install_packages(missing: list[str], config: SyncConfig, yes: bool) -> bool:
    if yes:
        return True
    if not sys.stdin.isatty():
        return False
    try:
        return confirm_package_install(missing, config.package_manager)
    except (RuntimeError, OSError) as e:
        _logging.debug(f"Terminal error in package confirmation: {e}")
        return False


async def run_add(names: list[str], yes: bool, debug: bool):
    setup_logging(debug)
    config = get_or_create_config(debug)
    out_dir = get_out_dir(config)
    project_root = get_project_root()

    click.echo(f"📦 Installing {', '.join(names)}...")
    report = await install_components(
        names,
        out_dir,
        config,
        make_registry(config),
        project_root=project_root,
    )

    for name in report.installed:
        click.echo(f"✅ Installed {name}")
    for name, reason in report.failed.items():
        click.echo(f"❌ Failed to install {name}: {reason}", err=True)

    missing = report.all_missing_packages()
    if missing:
        click.echo("")
        click.echo("Missing dependencies:")
        for spec in missing:
            click.echo(f"  {spec}")

        if _should_install_packages(missing, config, yes):
            click.echo(
                f"Installing {len(missing)} dependencies using {config.package_manager}..."
            )
            result = await install_packages(missing, config, project_root, debug=debug)
            if result.ok:
                click.echo("✅ Dependencies installed")
            else:
                click.echo(f"⚠️  Dependency installation failed: {result.output}", err=True)
                click.echo(f"   Run manually: {result.command}", err=True)
        else:
            click.echo("⚠️  Remember to install them manually:")
            click.echo(f"   {build_install_command(config.package_manager, missing)}")

    if not report.ok:
        click.echo(f"\n{len(report.failed)} component(s) failed to install.", err=True)
        sys.exit(1)

    click.echo("\n✅ All requested components installed.")
