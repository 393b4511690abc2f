"""On-disk workspace holding the three buffers as plain files."""

from __future__ import annotations

import logging
from pathlib import Path

from voicesite.buffers import BufferContents, BufferKind, BufferSet

logger = logging.getLogger(__name__)

BUFFER_FILENAMES: dict[BufferKind, str] = {
    BufferKind.markup: "markup.html",
    BufferKind.style: "style.css",
    BufferKind.script: "script.js",
}


class Workspace:
    """A directory with ``markup.html``, ``style.css`` and ``script.js``."""

    def __init__(self, root: str | Path) -> None:
        self.root = Path(root)

    def path_for(self, kind: BufferKind) -> Path:
        return self.root / BUFFER_FILENAMES[kind]

    def exists(self) -> bool:
        return all(self.path_for(kind).is_file() for kind in BufferKind)

    def init(self, buffers: BufferSet | None = None, *, overwrite: bool = False) -> list[Path]:
        """Write starter buffers. Existing files are kept unless ``overwrite``."""
        contents = (buffers or BufferSet()).snapshot()
        self.root.mkdir(parents=True, exist_ok=True)
        written = []
        for kind in BufferKind:
            path = self.path_for(kind)
            if path.exists() and not overwrite:
                continue
            path.write_bytes(contents.get(kind).encode("utf-8"))
            written.append(path)
        return written

    def load(self) -> BufferSet:
        """Read the buffers; missing files fall back to the starter content."""
        defaults = BufferSet().snapshot()
        values = {}
        for kind in BufferKind:
            path = self.path_for(kind)
            values[kind.value] = (
                path.read_bytes().decode("utf-8") if path.is_file() else defaults.get(kind)
            )
        return BufferSet(**values)

    def save(self, buffers: BufferSet | BufferContents) -> None:
        contents = buffers.snapshot() if isinstance(buffers, BufferSet) else buffers
        self.root.mkdir(parents=True, exist_ok=True)
        for kind in BufferKind:
            self.path_for(kind).write_bytes(contents.get(kind).encode("utf-8"))
        logger.debug("saved buffers to %s", self.root)
