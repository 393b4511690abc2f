"""Host capabilities for saving exported files and copying text."""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Protocol, runtime_checkable

from voicesite.export.bundle import ExportBundle

logger = logging.getLogger(__name__)


@runtime_checkable
class LocalSaver(Protocol):
    """Saves one named text artifact somewhere the user can reach it."""

    def save(self, filename: str, content: str) -> None: ...


@runtime_checkable
class Clipboard(Protocol):
    def copy(self, text: str) -> None: ...


def _sanitize_filename(filename: str) -> str:
    """Reduce a filename to a single safe path component."""
    name = filename.replace("/", "_").replace("\\", "_").replace("..", "")
    name = re.sub(r"[^\w\-\.]", "", name)
    if not name or name.strip(".") == "":
        name = "_unnamed"
    return name


class DirectorySaver:
    """Writes artifacts as files inside one directory."""

    def __init__(self, base_dir: str | Path) -> None:
        self.base_dir = Path(base_dir)
        self.written: list[Path] = []

    def save(self, filename: str, content: str) -> None:
        dest = self.base_dir / _sanitize_filename(filename)
        dest.parent.mkdir(parents=True, exist_ok=True)
        dest.write_text(content, encoding="utf-8")
        self.written.append(dest)
        logger.info("wrote %s (%d bytes)", dest, len(content))


class MemoryClipboard:
    """Clipboard stand-in that remembers the last copied text."""

    def __init__(self) -> None:
        self.text: str | None = None

    def copy(self, text: str) -> None:
        self.text = text


def save_bundle(bundle: ExportBundle, saver: LocalSaver) -> list[str]:
    """Hand every artifact in the bundle to the saver. Returns the filenames."""
    names = []
    for filename, content in bundle.files().items():
        saver.save(filename, content)
        names.append(filename)
    return names
