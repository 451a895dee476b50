"""Initialize project config command implementation."""

import sys

import click

from compsync import format_error
from compsync.commands.utils import get_project_root
from compsync.config import (
    DEFAULT_OUT_DIR,
    DEFAULT_PACKAGE_MANAGER,
    PACKAGE_MANAGERS,
    SyncConfig,
    save_config,
)
from compsync.paths import get_config_path
from compsync.tui import prompt_project_config


@click.command(name="init")
@click.option("--out-dir", "-o", help="Directory components are installed into")
@click.option(
    "--package-manager",
    "-p",
    type=click.Choice(PACKAGE_MANAGERS),
    help="Package manager used for third-party dependencies",
)
@click.option(
    "--force",
    "-f",
    is_flag=True,
    help="Overwrite an existing config (creates backup first)",
)
@click.pass_context
def init(ctx, out_dir: str | None, package_manager: str | None, force: bool):
    """Create the project config file (compsync.config.json)."""
    config_path = get_config_path(get_project_root())

    if config_path.exists() and not force:
        click.echo(f"Config file already exists: {config_path}")
        click.echo("Use --force to re-initialize (creates backup first).")
        sys.exit(1)

    try:
        config = SyncConfig(
            out_dir=out_dir or DEFAULT_OUT_DIR,
            package_manager=package_manager or DEFAULT_PACKAGE_MANAGER,
        )
    except ValueError as e:
        click.echo(format_error(str(e)), err=True)
        sys.exit(1)

    if (out_dir is None or package_manager is None) and sys.stdin.isatty():
        try:
            prompted = prompt_project_config(config)
        except (RuntimeError, OSError):
            prompted = config
        if prompted is None:
            click.echo("Setup cancelled.")
            sys.exit(1)
        config = prompted

    if config_path.exists():
        backup_path = config_path.with_suffix(".json.bak")
        click.echo(f"Backing up existing config to {backup_path}...")
        config_path.replace(backup_path)

    try:
        save_config(config, config_path)
    except OSError as e:
        click.echo(format_error(f"could not write config: {e}"), err=True)
        sys.exit(1)

    click.echo(f"✅ Config saved to {config_path}")
