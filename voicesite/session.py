"""Session: one user's buffers, preview, history and generation pipeline."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime

from voicesite.buffers import BufferContents, BufferSet
from voicesite.config import VoiceSiteConfig
from voicesite.export import Clipboard, ExportBundle, LocalSaver, save_bundle
from voicesite.generation import GenerationOrchestrator, GenerationOutcome
from voicesite.llm.base import LLMProvider
from voicesite.preview import ExternalViewer, PreviewController, Sandbox
from voicesite.speech import ManualTranscript, TranscriptSource
from voicesite.versions import KeyValueStore, Snapshot, VersionStore, snapshot_label

logger = logging.getLogger(__name__)


class Session:
    """Wires the core components together for one editing session.

    Holds the only guard against overlapping generations: while one is in
    flight, ``busy`` is True and further requests are refused.
    """

    def __init__(
        self,
        buffers: BufferSet,
        preview: PreviewController,
        versions: VersionStore,
        orchestrator: GenerationOrchestrator | None,
        transcript: TranscriptSource,
        project_name: str = "My Voice Site",
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.buffers = buffers
        self.preview = preview
        self.versions = versions
        self.orchestrator = orchestrator
        self.transcript = transcript
        self.project_name = project_name
        self.last_action = ""
        self._clock = clock
        self._busy = False

    @classmethod
    def create(
        cls,
        config: VoiceSiteConfig,
        llm: LLMProvider | None = None,
        *,
        sandbox: Sandbox,
        persistence: KeyValueStore,
        buffers: BufferSet | None = None,
        viewer: ExternalViewer | None = None,
        transcript: TranscriptSource | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> Session:
        buffers = buffers or BufferSet()
        transcript = transcript or ManualTranscript()
        preview = PreviewController(
            buffers, sandbox, config=config.preview.initial_state(), viewer=viewer
        )
        versions = VersionStore(persistence, limit=config.versions.limit)
        orchestrator = None
        if llm is not None:
            orchestrator = GenerationOrchestrator(
                llm, versions, preview, transcript=transcript, clock=clock
            )
        return cls(
            buffers,
            preview,
            versions,
            orchestrator,
            transcript,
            project_name=config.workspace.project_name,
            clock=clock,
        )

    @property
    def busy(self) -> bool:
        return self._busy

    async def generate_from_voice(self) -> GenerationOutcome:
        """Run the current transcript through the generation pipeline."""
        if self.orchestrator is None:
            raise RuntimeError("No generation service configured for this session")
        if self._busy:
            raise RuntimeError("A generation is already in progress")
        self._busy = True
        try:
            outcome = await self.orchestrator.generate(
                self.transcript.transcript, self.buffers, self.project_name
            )
        finally:
            self._busy = False
        if outcome.succeeded:
            self.last_action = outcome.instruction
        return outcome

    def save_version(self, label: str | None = None) -> Snapshot:
        """Snapshot the current buffers outside of any generation."""
        return self.versions.snapshot(
            self.buffers.snapshot(),
            label or snapshot_label(self.project_name, self._clock()),
        )

    def restore_version(self, snapshot_id: int) -> BufferContents:
        """Overwrite the buffers with a snapshot and force a refresh.

        Raises SnapshotNotFound, leaving the buffers untouched.
        """
        contents = self.versions.restore(snapshot_id)
        self.buffers.load(contents)
        self.preview.refresh(force=True)
        return contents

    def copy_snapshot(self, snapshot_id: int, clipboard: Clipboard) -> str:
        """Copy a snapshot as JSON to the clipboard. Returns the JSON."""
        payload = self.versions.get(snapshot_id).to_json()
        clipboard.copy(payload)
        return payload

    def export(self, saver: LocalSaver) -> list[str]:
        """Save index.html, style.css and script.js through the host saver."""
        names = save_bundle(ExportBundle.from_buffers(self.buffers.snapshot()), saver)
        logger.info("exported %s", ", ".join(names))
        return names

    def open_external(self) -> str:
        return self.preview.open_external()
