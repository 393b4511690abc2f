"""Pydantic models for version snapshots."""

from __future__ import annotations

from datetime import datetime

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, TypeAdapter

from voicesite.buffers import BufferContents

HISTORY_LIMIT = 50


class Snapshot(BaseModel):
    """An immutable saved copy of the three buffers.

    Also accepts the legacy ``name``/``html``/``css``/``js`` keys when loading
    persisted history.
    """

    model_config = ConfigDict(frozen=True)

    id: int
    label: str = Field(validation_alias=AliasChoices("label", "name"))
    markup: str = Field(default="", validation_alias=AliasChoices("markup", "html"))
    style: str = Field(default="", validation_alias=AliasChoices("style", "css"))
    script: str = Field(default="", validation_alias=AliasChoices("script", "js"))

    def contents(self) -> BufferContents:
        return BufferContents(markup=self.markup, style=self.style, script=self.script)

    def to_json(self) -> str:
        return self.model_dump_json()


HISTORY_ADAPTER: TypeAdapter[list[Snapshot]] = TypeAdapter(list[Snapshot])


def snapshot_label(project_label: str, when: datetime) -> str:
    """Label in the ``"<project> @ <timestamp>"`` form used for every snapshot."""
    return f"{project_label} @ {when.strftime('%Y-%m-%d %H:%M:%S')}"
