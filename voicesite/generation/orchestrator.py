"""GenerationOrchestrator: spoken instruction to applied, snapshotted edit."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime

from voicesite.buffers import BufferSet
from voicesite.errors import EmptyInstruction, ExternalServiceFailure, VoiceSiteError
from voicesite.generation.models import (
    FailureKind,
    GenerationOutcome,
    GenerationRequest,
)
from voicesite.generation.parser import parse_response
from voicesite.generation.prompts import render_prompt
from voicesite.llm.base import LLMProvider
from voicesite.preview import PreviewController
from voicesite.speech import TranscriptSource
from voicesite.versions import VersionStore, snapshot_label

logger = logging.getLogger(__name__)


class GenerationOrchestrator:
    """Runs one voice-driven edit end to end.

    Pipeline:
        instruction → GenerationRequest → LLM → parse_response
        → partial buffer update → snapshot → clear transcript → forced refresh

    The LLM call is the only suspension point. The request carries the
    buffers captured at call start, but the parsed fields are applied to the
    buffers as they are when the response arrives. Any failure before the
    update leaves buffers, history and transcript untouched.

    Overlapping calls are not supported; callers must not start a second
    generation while one is in flight.
    """

    def __init__(
        self,
        llm: LLMProvider,
        versions: VersionStore,
        preview: PreviewController,
        transcript: TranscriptSource | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.llm = llm
        self.versions = versions
        self.preview = preview
        self.transcript = transcript
        self._clock = clock

    async def generate(
        self,
        transcript: str,
        buffers: BufferSet,
        project_label: str,
    ) -> GenerationOutcome:
        """Apply the instruction in ``transcript`` to ``buffers``.

        Never raises for empty instructions, service failures or unparsable
        replies; those come back as a failed GenerationOutcome.
        """
        instruction = transcript.strip()
        try:
            if not instruction:
                raise EmptyInstruction()
            request = GenerationRequest.capture(instruction, buffers.snapshot())
            text = await self._call_service(request)
            edit = parse_response(text)
        except VoiceSiteError as e:
            logger.warning("Generation failed (%s): %s", e.kind, e)
            return GenerationOutcome(
                instruction=instruction,
                succeeded=False,
                failure=FailureKind(e.kind),
                message=str(e),
            )

        updates = edit.updates()
        changed = buffers.replace(updates)
        snap = self.versions.snapshot(
            buffers.snapshot(), snapshot_label(project_label, self._clock())
        )
        if self.transcript is not None:
            self.transcript.reset()
        self.preview.refresh(force=True)

        logger.info(
            "Generation applied %s (changed: %s) as snapshot %d",
            [k.value for k in updates] or "nothing",
            [k.value for k in changed] or "nothing",
            snap.id,
        )
        return GenerationOutcome(
            instruction=instruction,
            succeeded=True,
            fields=list(updates),
            changed=[k for k in updates if k in changed],
            snapshot=snap,
        )

    async def _call_service(self, request: GenerationRequest) -> str:
        system, user = render_prompt(request)
        try:
            response = await self.llm.generate(system=system, user=user)
        except Exception as e:
            raise ExternalServiceFailure(e) from e
        logger.debug(
            "Generation service replied (%s, %d in / %d out tokens)",
            response.model,
            response.usage.input_tokens,
            response.usage.output_tokens,
        )
        return response.content
