"""Version history: immutable snapshots with capped, persisted storage."""

from voicesite.versions.ids import MonotonicIdGenerator
from voicesite.versions.models import HISTORY_LIMIT, Snapshot, snapshot_label
from voicesite.versions.persistence import (
    InMemoryKeyValueStore,
    KeyValueStore,
    SQLiteKeyValueStore,
)
from voicesite.versions.store import VERSIONS_KEY, VersionStore

__all__ = [
    "HISTORY_LIMIT",
    "VERSIONS_KEY",
    "InMemoryKeyValueStore",
    "KeyValueStore",
    "MonotonicIdGenerator",
    "SQLiteKeyValueStore",
    "Snapshot",
    "VersionStore",
    "snapshot_label",
]
