"""Export surface: bundle the site for a host save capability."""

from voicesite.export.bundle import (
    INDEX_FILENAME,
    SCRIPT_FILENAME,
    STYLE_FILENAME,
    ExportBundle,
)
from voicesite.export.savers import (
    Clipboard,
    DirectorySaver,
    LocalSaver,
    MemoryClipboard,
    save_bundle,
)

__all__ = [
    "INDEX_FILENAME",
    "SCRIPT_FILENAME",
    "STYLE_FILENAME",
    "Clipboard",
    "DirectorySaver",
    "ExportBundle",
    "LocalSaver",
    "MemoryClipboard",
    "save_bundle",
]
