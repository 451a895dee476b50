"""Shared utility functions for commands."""

import logging
import sys
from pathlib import Path

import click

from compsync.config import ConfigError, SyncConfig, load_config, save_config
from compsync.paths import get_config_path, resolve_out_dir
from compsync.registry import RegistryClient
from compsync.sync import ClassificationResult, ComponentStatus
from compsync.tui import prompt_project_config

_logging = logging.getLogger(__name__)


def get_project_root() -> Path:
    return Path.cwd()


def load_project_config() -> SyncConfig:
    """Load the project config, or defaults when there is none yet.

    Raises:
        ConfigError: If a config file exists but is invalid
    """
    config_path = get_config_path(get_project_root())
    if not config_path.exists():
        _logging.debug(f"No config at {config_path}, using defaults")
        return SyncConfig()
    return load_config(config_path)


def _prompt_config_with_fallback(debug: bool = False) -> SyncConfig | None:
    """Prompt for a new config or return None if not possible."""
    if not sys.stdin.isatty():
        return None
    try:
        return prompt_project_config(SyncConfig())
    except RuntimeError:
        return None
    except OSError as e:
        if debug:
            _logging.debug(f"Terminal error in config prompt: {e}")
        return None


def get_or_create_config(debug: bool = False) -> SyncConfig:
    """Load the project config, creating it on first use.

    On a TTY the user is asked for the output directory and package manager;
    otherwise defaults are written.

    Raises:
        ConfigError: If an existing config is invalid or the user cancels
    """
    config_path = get_config_path(get_project_root())
    if config_path.exists():
        return load_config(config_path)

    click.echo("⚙️  No config found. Let's set up compsync.\n")
    config = _prompt_config_with_fallback(debug)
    if config is None:
        if sys.stdin.isatty():
            raise ConfigError("Setup cancelled, no config written")
        config = SyncConfig()
        click.echo(
            f"Using defaults (outDir: {config.out_dir}, "
            f"packageManager: {config.package_manager})"
        )

    save_config(config, config_path)
    click.echo(f"✅ Config saved to {config_path}\n")
    return config


def get_out_dir(config: SyncConfig) -> Path:
    return resolve_out_dir(config.out_dir, get_project_root())


def make_registry(config: SyncConfig) -> RegistryClient:
    return RegistryClient(config.registry)


def echo_classification(results: list[ClassificationResult], quiet: bool = False) -> None:
    """Print classification results grouped by status."""
    groups = [
        (ComponentStatus.UP_TO_DATE, "✅ Up to date", "green"),
        (ComponentStatus.OUTDATED, "🚨 Outdated", "yellow"),
        (ComponentStatus.MODIFIED, "⚠️  Modified locally", "yellow"),
    ]
    for status, label, color in groups:
        if quiet and status is ComponentStatus.UP_TO_DATE:
            continue
        names = [r.component for r in results if r.status is status]
        if not names:
            continue
        click.secho(f"{label} ({len(names)}):", fg=color)
        for name in names:
            click.echo(f"   • {name}")
        click.echo("")
