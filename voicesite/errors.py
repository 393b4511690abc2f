"""Error taxonomy shared across voicesite subsystems."""

from __future__ import annotations


class VoiceSiteError(Exception):
    """Base class for recoverable voicesite failures.

    ``kind`` is a stable, machine-readable tag for the failure.
    """

    kind = "error"


class EmptyInstruction(VoiceSiteError):
    """The spoken instruction was empty or whitespace only."""

    kind = "empty_instruction"

    def __init__(self) -> None:
        super().__init__("No instruction captured; speak an instruction first")


class UnparsableResponse(VoiceSiteError):
    """The generation service reply held no usable JSON object."""

    kind = "unparsable_response"

    def __init__(self, reason: str, excerpt: str = "") -> None:
        self.reason = reason
        self.excerpt = excerpt
        super().__init__(f"Could not parse generation response: {reason}")


class ExternalServiceFailure(VoiceSiteError):
    """The generation service call itself failed."""

    kind = "external_service_failure"

    def __init__(self, cause: Exception) -> None:
        super().__init__(f"Generation service failed: {cause}")
        self.__cause__ = cause


class SnapshotNotFound(VoiceSiteError, KeyError):
    """No snapshot in the history carries the requested id."""

    kind = "snapshot_not_found"

    def __init__(self, snapshot_id: int) -> None:
        self.snapshot_id = snapshot_id
        super().__init__(f"No snapshot with id {snapshot_id}")

    def __str__(self) -> str:
        return f"No snapshot with id {self.snapshot_id}"


class PersistenceCorrupt(VoiceSiteError):
    """A persisted history value could not be deserialized."""

    kind = "persistence_corrupt"

    def __init__(self, key: str, cause: Exception) -> None:
        self.key = key
        super().__init__(f"Persisted value under {key!r} is corrupt: {cause}")
        self.__cause__ = cause


class PersistenceError(VoiceSiteError):
    """A persistence backend failed to read or write."""

    kind = "persistence_error"
