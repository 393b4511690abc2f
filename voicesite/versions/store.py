"""VersionStore: capped, persisted, most-recent-first snapshot history."""

from __future__ import annotations

import logging

from pydantic import ValidationError

from voicesite.buffers import BufferContents
from voicesite.errors import PersistenceCorrupt, SnapshotNotFound
from voicesite.versions.ids import MonotonicIdGenerator
from voicesite.versions.models import HISTORY_ADAPTER, HISTORY_LIMIT, Snapshot
from voicesite.versions.persistence import KeyValueStore

logger = logging.getLogger(__name__)

VERSIONS_KEY = "voicesite.versions"


class VersionStore:
    """Append-only snapshot history with a hard cap.

    The in-memory history is the source of truth for the running session.
    Each new snapshot is prepended, the list is truncated to ``limit``, and
    the full history is then written to the persistence collaborator. A
    failed write is logged and leaves the in-memory history as it is.
    """

    def __init__(
        self,
        persistence: KeyValueStore,
        *,
        limit: int = HISTORY_LIMIT,
        id_generator: MonotonicIdGenerator | None = None,
        key: str = VERSIONS_KEY,
    ) -> None:
        if limit < 1:
            raise ValueError(f"limit must be positive, got {limit}")
        self._persistence = persistence
        self._limit = limit
        self._key = key
        self._ids = id_generator or MonotonicIdGenerator()
        self.load_error: PersistenceCorrupt | None = None
        self._history: list[Snapshot] = self._load()
        for snap in self._history:
            self._ids.observe(snap.id)

    @property
    def history(self) -> tuple[Snapshot, ...]:
        """Snapshots, most recent first."""
        return tuple(self._history)

    @property
    def limit(self) -> int:
        return self._limit

    def __len__(self) -> int:
        return len(self._history)

    def get(self, snapshot_id: int) -> Snapshot:
        for snap in self._history:
            if snap.id == snapshot_id:
                return snap
        raise SnapshotNotFound(snapshot_id)

    def snapshot(self, buffers: BufferContents, label: str) -> Snapshot:
        """Record the given buffers as a new snapshot and persist the history."""
        snap = Snapshot(
            id=self._ids.next_id(),
            label=label,
            markup=buffers.markup,
            style=buffers.style,
            script=buffers.script,
        )
        self._history.insert(0, snap)
        del self._history[self._limit:]
        logger.info("snapshot %d recorded: %s (%d in history)", snap.id, label, len(self._history))
        self._persist()
        return snap

    def restore(self, snapshot_id: int) -> BufferContents:
        """Return an exact copy of the buffers stored in a snapshot.

        Raises SnapshotNotFound if no snapshot has that id.
        """
        contents = self.get(snapshot_id).contents()
        logger.info("snapshot %d restored", snapshot_id)
        return contents

    def serialize(self) -> str:
        return HISTORY_ADAPTER.dump_json(self._history).decode("utf-8")

    # -- persistence ----------------------------------------------------------

    def _load(self) -> list[Snapshot]:
        # Any backend failure is a failed read; the history starts empty.
        try:
            raw = self._persistence.get(self._key)
        except Exception as e:
            logger.warning("Could not read version history, starting empty: %s", e)
            return []
        if raw is None:
            return []
        try:
            history = HISTORY_ADAPTER.validate_json(raw)
        except ValidationError as e:
            self.load_error = PersistenceCorrupt(self._key, e)
            logger.warning("%s; starting with an empty history", self.load_error)
            return []
        return history[: self._limit]

    def _persist(self) -> None:
        # Any backend failure is a failed write; memory state is kept.
        try:
            self._persistence.set(self._key, self.serialize())
        except Exception as e:
            logger.warning("Could not persist version history: %s", e)
