"""Buffer kinds and the immutable buffer triple."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict


class BufferKind(str, Enum):
    """The three independent source buffers of a site."""

    markup = "markup"
    style = "style"
    script = "script"


class BufferContents(BaseModel):
    """A frozen copy of all three buffers."""

    model_config = ConfigDict(frozen=True)

    markup: str = ""
    style: str = ""
    script: str = ""

    def get(self, kind: BufferKind) -> str:
        return getattr(self, kind.value)


class BufferChange(BaseModel):
    """Emitted after one or more buffers changed content."""

    model_config = ConfigDict(frozen=True)

    kinds: frozenset[BufferKind]
