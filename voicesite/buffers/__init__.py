"""Source buffers: markup, style and script text owned by a session."""

from voicesite.buffers.buffer_set import BufferListener, BufferSet
from voicesite.buffers.defaults import DEFAULT_MARKUP, DEFAULT_SCRIPT, DEFAULT_STYLE
from voicesite.buffers.models import BufferChange, BufferContents, BufferKind

__all__ = [
    "BufferChange",
    "BufferContents",
    "BufferKind",
    "BufferListener",
    "BufferSet",
    "DEFAULT_MARKUP",
    "DEFAULT_SCRIPT",
    "DEFAULT_STYLE",
]
