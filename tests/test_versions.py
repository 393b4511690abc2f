"""Tests for voicesite.versions — ids, capped history, restore, persistence."""

import json

import pytest

from voicesite.buffers import BufferContents
from voicesite.errors import PersistenceError, SnapshotNotFound
from voicesite.versions import (
    HISTORY_LIMIT,
    VERSIONS_KEY,
    InMemoryKeyValueStore,
    KeyValueStore,
    MonotonicIdGenerator,
    Snapshot,
    SQLiteKeyValueStore,
    VersionStore,
    snapshot_label,
)


def _contents(n: int) -> BufferContents:
    return BufferContents(markup=f"<p>{n}</p>", style=f"p{{order:{n}}}", script=f"f({n})")


class FailingStore:
    def __init__(self, initial: str | None = None):
        self.initial = initial
        self.attempts = 0

    def get(self, key):
        return self.initial

    def set(self, key, value):
        self.attempts += 1
        raise PersistenceError("disk full")


class BrokenBackend:
    """Backend whose failures are not PersistenceError."""

    def get(self, key):
        raise RuntimeError("backend offline")

    def set(self, key, value):
        raise RuntimeError("disk quota exceeded")


# ---------------------------------------------------------------------------
# Id generation
# ---------------------------------------------------------------------------


class TestMonotonicIdGenerator:
    def test_unique_under_frozen_clock(self):
        gen = MonotonicIdGenerator(lambda: 1000.0)
        ids = [gen.next_id() for _ in range(100)]
        assert len(set(ids)) == 100
        assert ids == sorted(ids)

    def test_uses_millisecond_timestamp(self):
        gen = MonotonicIdGenerator(lambda: 1.5)
        assert gen.next_id() == 1500

    def test_clock_running_backwards(self):
        times = iter([10.0, 5.0, 5.0])
        gen = MonotonicIdGenerator(lambda: next(times))
        assert [gen.next_id() for _ in range(3)] == [10000, 10001, 10002]

    def test_observe_seeds_floor(self):
        gen = MonotonicIdGenerator(lambda: 1.0)
        gen.observe(99_999)
        assert gen.next_id() == 100_000


# ---------------------------------------------------------------------------
# Snapshot model
# ---------------------------------------------------------------------------


class TestSnapshot:
    def test_frozen(self):
        snap = Snapshot(id=1, label="a", markup="m", style="s", script="j")
        with pytest.raises(Exception):
            snap.markup = "changed"

    def test_accepts_legacy_keys(self):
        snap = Snapshot.model_validate(
            {"id": 7, "name": "Site @ now", "html": "<p/>", "css": "p{}", "js": "x()"}
        )
        assert snap.label == "Site @ now"
        assert snap.contents() == BufferContents(markup="<p/>", style="p{}", script="x()")

    def test_to_json_uses_field_names(self):
        data = json.loads(Snapshot(id=1, label="a", markup="m").to_json())
        assert data == {"id": 1, "label": "a", "markup": "m", "style": "", "script": ""}

    def test_snapshot_label(self):
        from datetime import datetime

        assert snapshot_label("Site", datetime(2025, 1, 2, 3, 4, 5)) == "Site @ 2025-01-02 03:04:05"


# ---------------------------------------------------------------------------
# VersionStore
# ---------------------------------------------------------------------------


class TestVersionStore:
    def test_starts_empty(self, versions):
        assert versions.history == ()
        assert versions.load_error is None

    def test_snapshot_prepends(self, versions):
        first = versions.snapshot(_contents(1), "one")
        second = versions.snapshot(_contents(2), "two")
        assert [s.id for s in versions.history] == [second.id, first.id]
        assert second.id > first.id

    def test_cap_keeps_fifty_most_recent(self, versions):
        made = [versions.snapshot(_contents(n), f"v{n}") for n in range(60)]
        assert len(versions) == HISTORY_LIMIT
        assert list(versions.history) == list(reversed(made[10:]))

    def test_custom_limit(self, kv_store):
        store = VersionStore(kv_store, limit=3)
        for n in range(5):
            store.snapshot(_contents(n), f"v{n}")
        assert [s.label for s in store.history] == ["v4", "v3", "v2"]

    def test_invalid_limit(self, kv_store):
        with pytest.raises(ValueError):
            VersionStore(kv_store, limit=0)

    def test_restore_returns_exact_buffers(self, versions):
        contents = BufferContents(markup="<p>\r\n</p>", style="", script="\t")
        snap = versions.snapshot(contents, "exact")
        versions.snapshot(_contents(2), "later")
        assert versions.restore(snap.id) == contents

    def test_restore_missing_id(self, versions):
        versions.snapshot(_contents(1), "one")
        with pytest.raises(SnapshotNotFound) as exc_info:
            versions.restore(12345)
        assert exc_info.value.snapshot_id == 12345
        assert exc_info.value.kind == "snapshot_not_found"

    def test_restore_evicted_id(self, kv_store):
        store = VersionStore(kv_store, limit=1)
        old = store.snapshot(_contents(1), "old")
        store.snapshot(_contents(2), "new")
        with pytest.raises(SnapshotNotFound):
            store.restore(old.id)


# ---------------------------------------------------------------------------
# Persistence
# ---------------------------------------------------------------------------


class TestPersistence:
    def test_every_snapshot_writes_full_history(self, versions, kv_store):
        versions.snapshot(_contents(1), "one")
        versions.snapshot(_contents(2), "two")
        assert kv_store.writes == 2
        saved = json.loads(kv_store.data[VERSIONS_KEY])
        assert [s["label"] for s in saved] == ["two", "one"]

    def test_reload_round_trip(self, kv_store):
        store = VersionStore(kv_store)
        snaps = [store.snapshot(_contents(n), f"v{n}") for n in range(3)]
        reloaded = VersionStore(kv_store)
        assert reloaded.history == store.history
        assert reloaded.restore(snaps[0].id) == _contents(0)

    def test_ids_stay_increasing_across_sessions(self, kv_store):
        future = 4_000_000_000_000
        kv_store.data[VERSIONS_KEY] = json.dumps([{"id": future, "label": "x"}])
        store = VersionStore(kv_store)
        assert store.snapshot(_contents(1), "next").id == future + 1

    def test_loads_legacy_history(self, kv_store):
        kv_store.data[VERSIONS_KEY] = json.dumps(
            [{"id": 1, "name": "My Voice Site @ 1/1/2025", "html": "<p/>", "css": "", "js": ""}]
        )
        store = VersionStore(kv_store)
        assert store.restore(1).markup == "<p/>"

    @pytest.mark.parametrize("raw", ["not json", "{}", "null", '[{"id": "x"}]'])
    def test_corrupt_history_starts_empty(self, kv_store, raw):
        kv_store.data[VERSIONS_KEY] = raw
        store = VersionStore(kv_store)
        assert store.history == ()
        assert store.load_error is not None
        assert store.load_error.kind == "persistence_corrupt"
        # still usable
        store.snapshot(_contents(1), "fresh")
        assert len(store) == 1

    def test_loaded_history_truncated_to_limit(self, kv_store):
        kv_store.data[VERSIONS_KEY] = json.dumps(
            [{"id": n, "label": str(n)} for n in range(10, 0, -1)]
        )
        store = VersionStore(kv_store, limit=4)
        assert [s.id for s in store.history] == [10, 9, 8, 7]

    def test_write_failure_keeps_memory_state(self):
        backend = FailingStore()
        store = VersionStore(backend)
        snap = store.snapshot(_contents(1), "kept")
        assert backend.attempts == 1
        assert store.history == (snap,)
        assert store.restore(snap.id) == _contents(1)

    def test_unexpected_backend_errors_are_contained(self):
        store = VersionStore(BrokenBackend())
        assert store.history == ()
        assert store.load_error is None

        snap = store.snapshot(_contents(2), "kept anyway")
        assert store.history == (snap,)


class TestKeyValueStores:
    def test_in_memory_protocol(self):
        assert isinstance(InMemoryKeyValueStore(), KeyValueStore)

    def test_sqlite_protocol(self, tmp_path):
        assert isinstance(SQLiteKeyValueStore(str(tmp_path / "kv.db")), KeyValueStore)

    def test_sqlite_get_missing(self, tmp_path):
        store = SQLiteKeyValueStore(str(tmp_path / "kv.db"))
        assert store.get("absent") is None

    def test_sqlite_overwrite(self, tmp_path):
        store = SQLiteKeyValueStore(str(tmp_path / "kv.db"))
        store.set("k", "one")
        store.set("k", "two")
        assert store.get("k") == "two"

    def test_sqlite_persists_across_connections(self, tmp_path):
        path = str(tmp_path / "nested" / "kv.db")
        first = SQLiteKeyValueStore(path)
        VersionStore(first).snapshot(_contents(1), "disk")
        first.close()
        store = VersionStore(SQLiteKeyValueStore(path))
        assert [s.label for s in store.history] == ["disk"]

    def test_sqlite_closed_connection_raises_persistence_error(self, tmp_path):
        store = SQLiteKeyValueStore(str(tmp_path / "kv.db"))
        store.close()
        with pytest.raises(PersistenceError):
            store.set("k", "v")
