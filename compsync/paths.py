"""Path helpers for compsync."""

import os
from pathlib import Path

CONFIG_FILENAME = "compsync.config.json"
METADATA_FILENAME = ".compsync-metadata.json"
BACKUP_SUFFIX = ".backup"


def get_config_path(project_root: Path | None = None) -> Path:
    """Return path to the project config file.

    Priority:
    1. COMPSYNC_CONFIG environment variable (if set)
    2. compsync.config.json in the project root (default: cwd)
    """
    if "COMPSYNC_CONFIG" in os.environ:
        return Path(os.environ["COMPSYNC_CONFIG"])
    root = project_root if project_root is not None else Path.cwd()
    return root / CONFIG_FILENAME


def get_metadata_path(out_dir: Path) -> Path:
    """Return path to the metadata document kept next to installed components."""
    return out_dir / METADATA_FILENAME


def resolve_out_dir(out_dir: str, project_root: Path | None = None) -> Path:
    """Resolve the configured output directory against the project root."""
    path = Path(out_dir).expanduser()
    if path.is_absolute():
        return path
    root = project_root if project_root is not None else Path.cwd()
    return root / path
