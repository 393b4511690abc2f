"""Speech capture collaborators."""

from voicesite.speech.transcript import ManualTranscript, TranscriptSource

__all__ = ["ManualTranscript", "TranscriptSource"]
