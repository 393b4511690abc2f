"""Pydantic models for the generation subsystem."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from voicesite.buffers import BufferContents, BufferKind
from voicesite.versions import Snapshot

# Response object keys and the buffer each one replaces.
RESPONSE_FIELDS: dict[str, BufferKind] = {
    "html": BufferKind.markup,
    "css": BufferKind.style,
    "js": BufferKind.script,
}


class GenerationRequest(BaseModel):
    """The instruction plus the buffers as they were when the call began."""

    model_config = ConfigDict(frozen=True)

    instruction: str = Field(min_length=1)
    current_markup: str = ""
    current_style: str = ""
    current_script: str = ""

    @classmethod
    def capture(cls, instruction: str, buffers: BufferContents) -> GenerationRequest:
        return cls(
            instruction=instruction,
            current_markup=buffers.markup,
            current_style=buffers.style,
            current_script=buffers.script,
        )


class ParsedEdit(BaseModel):
    """Fields found in a generation response. ``None`` means absent."""

    model_config = ConfigDict(frozen=True)

    html: str | None = None
    css: str | None = None
    js: str | None = None

    def updates(self) -> dict[BufferKind, str]:
        """Whole-field replacements for the buffers this edit touches."""
        return {
            kind: getattr(self, key)
            for key, kind in RESPONSE_FIELDS.items()
            if getattr(self, key) is not None
        }


class FailureKind(str, Enum):
    """Why a generation call left the session untouched."""

    empty_instruction = "empty_instruction"
    unparsable_response = "unparsable_response"
    external_service_failure = "external_service_failure"


class GenerationOutcome(BaseModel):
    """Result of one generate() call: a full success or a clean failure."""

    instruction: str
    succeeded: bool
    failure: FailureKind | None = None
    message: str = ""
    fields: list[BufferKind] = Field(default_factory=list)
    changed: list[BufferKind] = Field(default_factory=list)
    snapshot: Snapshot | None = None
