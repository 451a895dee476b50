"""Classify local component files against the registry."""

import asyncio
import logging
from pathlib import Path

from compsync.config import SyncConfig
from compsync.digest import digest, digest_file
from compsync.errors import NotFoundError, TransportError
from compsync.metadata import load_metadata, save_metadata, utc_now
from compsync.paths import METADATA_FILENAME
from compsync.registry import Registry

from .models import ClassificationResult, ComponentStatus

_logging = logging.getLogger(__name__)


def classify(current: str, stored: str | None, remote: str) -> ComponentStatus:
    """Classify a component from its local, recorded and registry digests.

    - local matches registry: up to date, whatever was recorded
    - recorded differs from registry: registry moved on, outdated
    - recorded matches registry: the local file was edited, modified
    - nothing recorded: no baseline, outdated
    """
    if current == remote:
        return ComponentStatus.UP_TO_DATE
    if stored is None:
        return ComponentStatus.OUTDATED
    if stored != remote:
        return ComponentStatus.OUTDATED
    return ComponentStatus.MODIFIED


def list_local_components(out_dir: Path, extension: str) -> list[str]:
    """Names of component files directly under ``out_dir``, sorted."""
    if not out_dir.is_dir():
        return []
    names = []
    for path in out_dir.iterdir():
        if path.name == METADATA_FILENAME or not path.is_file():
            continue
        if path.name.endswith(extension) and len(path.name) > len(extension):
            names.append(path.name[: -len(extension)])
    return sorted(names)


async def check_for_updates(
    out_dir: Path, config: SyncConfig, registry: Registry
) -> list[ClassificationResult]:
    """Classify every local component file against the registry.

    Components the registry no longer serves (or that cannot be fetched)
    are logged and left out of the result. The metadata store is saved once,
    after every fetch has finished.

    Returns:
        One ClassificationResult per component that could be validated
    """
    extension = config.registry.extension
    names = list_local_components(out_dir, extension)
    if not names:
        return []

    local: dict[str, str] = {}
    for name in names:
        try:
            local[name] = digest_file(out_dir / f"{name}{extension}")
        except OSError as e:
            _logging.error(f"Error checking {name}: {e}")

    semaphore = asyncio.Semaphore(config.registry.concurrency)

    async def remote_digest(name: str) -> str | None:
        async with semaphore:
            try:
                return digest(await registry.fetch_content(name))
            except NotFoundError:
                _logging.warning(
                    f"{name}: not available in the registry (may have been removed), "
                    "cannot be validated"
                )
            except TransportError as e:
                _logging.warning(f"{name}: could not fetch remote version: {e}")
            return None

    checked = list(local)
    remotes = await asyncio.gather(*[remote_digest(name) for name in checked])

    store = load_metadata(out_dir)
    now = utc_now()
    results = []
    for name, remote in zip(checked, remotes):
        if remote is None:
            continue
        current = local[name]
        stored = store.stored_hash(name)
        status = classify(current, stored, remote)
        _logging.debug(
            f"{name}: {status.value} (current={current[:12]} "
            f"stored={stored[:12] if stored else None} remote={remote[:12]})"
        )

        if status is ComponentStatus.UP_TO_DATE and stored != current:
            store.upsert(name, current, now)
        store.touch(name, now)
        results.append(ClassificationResult(name, status))

    try:
        save_metadata(out_dir, store)
    except OSError as e:
        _logging.warning(f"Could not save metadata in {out_dir}: {e}")
    return results


__all__ = [
    "classify",
    "list_local_components",
    "check_for_updates",
]
