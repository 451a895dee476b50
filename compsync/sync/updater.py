"""Apply registry content to local components with backup and rollback."""

import logging
import os
import shutil
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from pathlib import Path

from compsync.config import SyncConfig
from compsync.digest import digest, digest_file
from compsync.errors import LocalIOError, SyncError
from compsync.installer import component_path
from compsync.metadata import load_metadata, save_metadata
from compsync.paths import BACKUP_SUFFIX
from compsync.registry import Registry

from .models import ClassificationResult, ComponentStatus, UpdateSummary

_logging = logging.getLogger(__name__)


def backup_path_for(path: Path) -> Path:
    return path.with_name(path.name + BACKUP_SUFFIX)


@contextmanager
def backup(path: Path) -> Iterator[Path]:
    """Keep a copy of ``path`` while the block replaces it.

    If the block raises, the original file is moved back into place before
    the exception propagates. The backup is gone once the block exits,
    unless restoring itself failed.
    """
    backup_path = backup_path_for(path)
    try:
        shutil.copy2(path, backup_path)
    except BaseException:
        backup_path.unlink(missing_ok=True)
        raise
    try:
        yield backup_path
    except BaseException:
        try:
            os.replace(backup_path, path)
            _logging.info(f"Restored {path.name} from backup")
        except OSError as e:
            _logging.error(f"Could not restore {path}, backup kept at {backup_path}: {e}")
        raise
    else:
        backup_path.unlink(missing_ok=True)


def _write_component(path: Path, content: bytes) -> None:
    path.write_bytes(content)


async def _replace(path: Path, name: str, registry: Registry) -> str:
    content = await registry.fetch_content(name)
    _write_component(path, content)
    written = digest_file(path)
    if written != digest(content):
        raise LocalIOError(f"Written file does not match registry content: {path}", name)
    return written


async def update_components(
    out_dir: Path,
    names: Iterable[str],
    config: SyncConfig,
    registry: Registry,
) -> UpdateSummary:
    """Replace local components with their registry content.

    Each component is handled on its own: a failure restores that file from
    its backup, leaves its metadata record untouched and moves on to the
    next one. The metadata store is saved once at the end; if that save
    fails, every updated component is reported as failed.
    """
    store = load_metadata(out_dir)
    summary = UpdateSummary()

    for name in names:
        path = component_path(out_dir, name, config)
        try:
            with backup(path):
                new_digest = await _replace(path, name, registry)
        except (SyncError, OSError) as e:
            _logging.error(f"Failed to update {name}: {e}")
            summary.failed[name] = str(e)
            continue

        store.upsert(name, new_digest)
        summary.updated.append(name)
        _logging.debug(f"Updated {name} ({new_digest[:12]})")

    try:
        save_metadata(out_dir, store)
    except OSError as e:
        _logging.error(f"Failed to save metadata in {out_dir}: {e}")
        for name in summary.updated:
            summary.failed[name] = f"file updated but metadata could not be saved: {e}"
        summary.updated = []
    return summary


def select_for_update(
    results: Iterable[ClassificationResult], include_modified: bool = False
) -> list[str]:
    """Pick the components a bulk update should touch.

    Outdated components are always selected. Locally modified ones are only
    selected when ``include_modified`` is set, since updating them discards
    the local edits.
    """
    wanted = {ComponentStatus.OUTDATED}
    if include_modified:
        wanted.add(ComponentStatus.MODIFIED)
    return [r.component for r in results if r.status in wanted]


__all__ = [
    "backup",
    "backup_path_for",
    "update_components",
    "select_for_update",
]
