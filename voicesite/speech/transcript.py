"""Speech capture collaborator interface and a manually fed implementation."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class TranscriptSource(Protocol):
    """Live transcript and listening state supplied by a capture device."""

    @property
    def transcript(self) -> str: ...

    @property
    def listening(self) -> bool: ...

    def reset(self) -> None:
        """Clear the accumulated transcript."""
        ...


class ManualTranscript:
    """Transcript source fed with text by the host (typed input, tests, CLI)."""

    def __init__(self, transcript: str = "") -> None:
        self._transcript = transcript
        self._listening = False

    @property
    def transcript(self) -> str:
        return self._transcript

    @property
    def listening(self) -> bool:
        return self._listening

    def start(self) -> None:
        self._listening = True

    def stop(self) -> None:
        self._listening = False

    def feed(self, text: str) -> None:
        """Append recognised speech, separated from earlier text by a space."""
        text = text.strip()
        if not text:
            return
        self._transcript = f"{self._transcript} {text}".strip()

    def reset(self) -> None:
        self._transcript = ""
