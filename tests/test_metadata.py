"""Tests for the metadata store."""

import json
import logging
from unittest.mock import patch

from compsync.metadata import (
    MetadataRecord,
    MetadataStore,
    load_metadata,
    save_metadata,
    utc_now,
)
from compsync.paths import METADATA_FILENAME


def test_load_missing_returns_empty(out_dir):
    store = load_metadata(out_dir)
    assert len(store) == 0


def test_save_and_load(out_dir):
    store = MetadataStore()
    store.upsert("button", "a" * 64, now="2024-01-01T00:00:00.000Z")
    save_metadata(out_dir, store)

    data = json.loads((out_dir / METADATA_FILENAME).read_text())
    assert data == {
        "button": {
            "hash": "a" * 64,
            "installedAt": "2024-01-01T00:00:00.000Z",
            "lastCheckedAt": "2024-01-01T00:00:00.000Z",
        }
    }

    loaded = load_metadata(out_dir)
    assert loaded.get("button") == MetadataRecord(
        hash="a" * 64,
        installed_at="2024-01-01T00:00:00.000Z",
        last_checked_at="2024-01-01T00:00:00.000Z",
    )


def test_save_leaves_no_temp_files(out_dir):
    save_metadata(out_dir, MetadataStore())
    assert [p.name for p in out_dir.iterdir()] == [METADATA_FILENAME]


def test_corrupted_document_loads_empty(out_dir, caplog):
    (out_dir / METADATA_FILENAME).write_text("{not json")
    with caplog.at_level(logging.WARNING):
        store = load_metadata(out_dir)
    assert len(store) == 0
    assert "corrupted" in caplog.text


def test_non_object_document_loads_empty(out_dir):
    (out_dir / METADATA_FILENAME).write_text("[1, 2, 3]")
    assert len(load_metadata(out_dir)) == 0


def test_malformed_entry_is_dropped(out_dir):
    (out_dir / METADATA_FILENAME).write_text(
        json.dumps(
            {
                "button": {"hash": "abc", "installedAt": "2024-01-01T00:00:00.000Z"},
                "card": {"installedAt": "2024-01-01T00:00:00.000Z"},
            }
        )
    )
    store = load_metadata(out_dir)
    assert "button" in store
    assert "card" not in store


def test_legacy_last_checked_key_is_read(out_dir):
    (out_dir / METADATA_FILENAME).write_text(
        json.dumps(
            {
                "button": {
                    "hash": "abc",
                    "installedAt": "2024-01-01T00:00:00.000Z",
                    "lastChecked": "2024-02-01T00:00:00.000Z",
                }
            }
        )
    )
    record = load_metadata(out_dir).get("button")
    assert record.last_checked_at == "2024-02-01T00:00:00.000Z"


def test_upsert_preserves_installed_at():
    store = MetadataStore()
    store.upsert("button", "old", now="2024-01-01T00:00:00.000Z")
    record = store.upsert("button", "new", now="2024-03-01T00:00:00.000Z")

    assert record.hash == "new"
    assert record.installed_at == "2024-01-01T00:00:00.000Z"
    assert record.last_checked_at == "2024-03-01T00:00:00.000Z"


def test_touch_only_existing_records():
    store = MetadataStore()
    store.touch("ghost", now="2024-01-01T00:00:00.000Z")
    assert "ghost" not in store

    store.upsert("button", "abc", now="2024-01-01T00:00:00.000Z")
    store.touch("button", now="2024-05-01T00:00:00.000Z")
    assert store.get("button").last_checked_at == "2024-05-01T00:00:00.000Z"
    assert store.get("button").hash == "abc"


def test_utc_now_format():
    stamp = utc_now()
    assert stamp.endswith("Z")
    assert "T" in stamp
    assert len(stamp) == len("2024-01-01T00:00:00.000Z")


def test_record_without_installed_at_keeps_hash(out_dir):
    (out_dir / METADATA_FILENAME).write_text(
        json.dumps(
            {"button": {"hash": "abc", "lastChecked": "2024-02-01T00:00:00.000Z"}}
        )
    )
    store = load_metadata(out_dir)

    assert store.stored_hash("button") == "abc"
    assert store.get("button").installed_at == "2024-02-01T00:00:00.000Z"


def test_record_with_hash_only_uses_load_time(out_dir):
    (out_dir / METADATA_FILENAME).write_text(json.dumps({"button": {"hash": "abc"}}))
    with patch("compsync.metadata.utc_now", return_value="2024-09-09T09:09:09.000Z"):
        record = load_metadata(out_dir).get("button")

    assert record.hash == "abc"
    assert record.installed_at == "2024-09-09T09:09:09.000Z"
    assert record.last_checked_at is None


def test_record_with_non_string_installed_at_is_dropped(out_dir):
    (out_dir / METADATA_FILENAME).write_text(
        json.dumps({"button": {"hash": "abc", "installedAt": 12}})
    )
    assert "button" not in load_metadata(out_dir)
