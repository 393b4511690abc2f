"""Rendering collaborators: the sandboxed preview frame and the external viewer."""

from __future__ import annotations

import html
import logging
import webbrowser
from pathlib import Path
from typing import Protocol, runtime_checkable

from voicesite.preview.models import PreviewConfig

logger = logging.getLogger(__name__)

# Scripts and forms run; top-level navigation and host storage stay out of reach.
SANDBOX_PERMISSIONS: tuple[str, ...] = ("allow-scripts", "allow-forms")


def sandbox_attribute() -> str:
    """Value for an iframe ``sandbox`` attribute."""
    return " ".join(SANDBOX_PERMISSIONS)


@runtime_checkable
class Sandbox(Protocol):
    """An isolated rendering context for composed documents."""

    def load(self, document: str) -> None:
        """Replace the full content of the context with ``document``."""
        ...

    def apply_layout(self, config: PreviewConfig) -> None:
        """Resize or rescale the frame without touching its content."""
        ...


@runtime_checkable
class ExternalViewer(Protocol):
    """Opens a document in a new, unsandboxed view."""

    def open(self, document: str) -> None: ...


class MemorySandbox:
    """Sandbox that keeps the last loaded document in memory."""

    def __init__(self) -> None:
        self.document: str | None = None
        self.layout: PreviewConfig | None = None
        self.loads = 0

    def load(self, document: str) -> None:
        self.document = document
        self.loads += 1

    def apply_layout(self, config: PreviewConfig) -> None:
        self.layout = config


_HOST_PAGE = """\
<!doctype html>
<html>
  <head>
    <meta charset="utf-8" />
    <title>voicesite preview</title>
    <style>
      body {{ margin: 0; padding: 16px; background: #e5e7eb; font-family: sans-serif; }}
      .viewport {{ width: {width}; margin: 0 auto; transform: scale({scale}); transform-origin: top center; }}
      iframe {{ width: 100%; height: 720px; border: 1px solid #d1d5db; background: #fff; }}
    </style>
  </head>
  <body>
    <div class="viewport">
      <iframe title="preview" sandbox="{sandbox}" srcdoc="{srcdoc}"></iframe>
    </div>
  </body>
</html>
"""


class HtmlFileSandbox:
    """Sandbox rendered as a host page holding a sandboxed ``srcdoc`` iframe.

    Each load rewrites the whole page; layout changes rewrite only the frame
    styling around the document already loaded.
    """

    def __init__(self, path: str | Path, config: PreviewConfig | None = None) -> None:
        self.path = Path(path)
        self._config = config or PreviewConfig()
        self._document = ""

    def load(self, document: str) -> None:
        self._document = document
        self._write()

    def apply_layout(self, config: PreviewConfig) -> None:
        self._config = config
        self._write()

    def render_host_page(self) -> str:
        return _HOST_PAGE.format(
            width=self._config.css_width,
            scale=f"{self._config.scale:g}",
            sandbox=sandbox_attribute(),
            srcdoc=html.escape(self._document, quote=True),
        )

    def _write(self) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(self.render_host_page(), encoding="utf-8")
        except OSError as e:
            logger.warning("Could not write preview to %s: %s", self.path, e)
            return
        logger.debug("wrote preview %s (%d bytes)", self.path, len(self._document))


class BrowserViewer:
    """Writes the document to disk and opens it in the default browser."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def open(self, document: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(document, encoding="utf-8")
        logger.info("opening %s in browser", self.path)
        webbrowser.open(self.path.resolve().as_uri())
