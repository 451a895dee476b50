"""Persistent provenance records for installed components.

The store is a single JSON document kept next to the installed files,
mapping component name to ``{"hash", "installedAt", "lastCheckedAt"}``.
It is read fully, mutated in memory and written back whole.
"""

import json
import logging
import os
import tempfile
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path

from .paths import get_metadata_path

_logging = logging.getLogger(__name__)


def utc_now() -> str:
    """Current time as an ISO-8601 UTC timestamp with millisecond precision."""
    stamp = datetime.now(timezone.utc).isoformat(timespec="milliseconds")
    return stamp.replace("+00:00", "Z")


@dataclass
class MetadataRecord:
    hash: str
    installed_at: str
    last_checked_at: str | None = None

    def to_dict(self) -> dict:
        data = {"hash": self.hash, "installedAt": self.installed_at}
        if self.last_checked_at is not None:
            data["lastCheckedAt"] = self.last_checked_at
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "MetadataRecord":
        """Build a record from its serialized form.

        Accepts the older ``lastChecked`` key as well as ``lastCheckedAt``.
        Older documents may also lack ``installedAt``; the check time, or
        the current time, stands in for it so the stored hash is kept.

        Raises:
            ValueError: If required fields are missing or not strings
        """
        if not isinstance(data, dict):
            raise ValueError(f"record must be an object, got {type(data).__name__}")
        digest = data.get("hash")
        if not isinstance(digest, str) or not digest:
            raise ValueError("field 'hash' must be a non-empty string")
        last_checked = data.get("lastCheckedAt", data.get("lastChecked"))
        if last_checked is not None and not isinstance(last_checked, str):
            raise ValueError("field 'lastCheckedAt' must be a string or null")
        installed_at = data.get("installedAt")
        if installed_at is None:
            installed_at = last_checked or utc_now()
        elif not isinstance(installed_at, str):
            raise ValueError("field 'installedAt' must be a string")
        return cls(hash=digest, installed_at=installed_at, last_checked_at=last_checked)


class MetadataStore:
    """In-memory view of the metadata document."""

    def __init__(self, records: dict[str, MetadataRecord] | None = None):
        self.records: dict[str, MetadataRecord] = dict(records or {})

    def __contains__(self, name: str) -> bool:
        return name in self.records

    def __len__(self) -> int:
        return len(self.records)

    def get(self, name: str) -> MetadataRecord | None:
        return self.records.get(name)

    def stored_hash(self, name: str) -> str | None:
        record = self.records.get(name)
        return record.hash if record else None

    def upsert(self, name: str, digest: str, now: str | None = None) -> MetadataRecord:
        """Record a successful install or update of ``name``.

        An existing ``installed_at`` is kept; the digest and check time are
        refreshed.
        """
        now = now or utc_now()
        existing = self.records.get(name)
        record = MetadataRecord(
            hash=digest,
            installed_at=existing.installed_at if existing else now,
            last_checked_at=now,
        )
        self.records[name] = record
        return record

    def touch(self, name: str, now: str | None = None) -> None:
        """Refresh the check time of an existing record."""
        record = self.records.get(name)
        if record is not None:
            record.last_checked_at = now or utc_now()

    def to_dict(self) -> dict:
        return {name: record.to_dict() for name, record in sorted(self.records.items())}


def load_metadata(out_dir: Path) -> MetadataStore:
    """Load the metadata document for ``out_dir``.

    A missing document yields an empty store. A corrupted one is logged and
    also yields an empty store so the next save rebuilds it.
    """
    path = get_metadata_path(out_dir)
    if not path.exists():
        return MetadataStore()

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        _logging.warning(f"Metadata corrupted ({e}), recreating: {path}")
        return MetadataStore()

    if not isinstance(data, dict):
        _logging.warning(f"Metadata corrupted (not an object), recreating: {path}")
        return MetadataStore()

    records = {}
    for name, raw in data.items():
        try:
            records[name] = MetadataRecord.from_dict(raw)
        except ValueError as e:
            _logging.warning(f"Dropping malformed metadata entry '{name}': {e}")
    return MetadataStore(records)


def save_metadata(out_dir: Path, store: MetadataStore) -> None:
    """Overwrite the metadata document with the full store.

    The document is written to a sibling temp file and renamed over the old
    one, so a failed write leaves the previous document in place.
    """
    path = get_metadata_path(out_dir)
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = json.dumps(store.to_dict(), indent=2) + "\n"

    fd, tmp_name = tempfile.mkstemp(prefix=path.name, suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(payload)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


__all__ = [
    "MetadataRecord",
    "MetadataStore",
    "load_metadata",
    "save_metadata",
    "utc_now",
]
