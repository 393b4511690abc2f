"""PreviewController: viewport simulation and refresh policy for the sandbox."""

from __future__ import annotations

import logging

from voicesite.buffers import BufferChange, BufferSet
from voicesite.composer import compose
from voicesite.preview.models import (
    MAX_WIDTH_PX,
    MAX_ZOOM_PERCENT,
    MIN_WIDTH_PX,
    MIN_ZOOM_PERCENT,
    PreviewConfig,
    clamp,
)
from voicesite.preview.sandbox import ExternalViewer, Sandbox

logger = logging.getLogger(__name__)


class PreviewController:
    """Drives composed documents into a sandbox.

    Refresh policy:
        - buffer changes and outline toggles refresh only while
          ``auto_refresh`` is on
        - width, zoom and preset changes are layout-only and never recompose
        - ``refresh()`` always recomposes and replaces the full sandbox content

    Every operation is total; out-of-range widths and zooms are clamped.
    """

    def __init__(
        self,
        buffers: BufferSet,
        sandbox: Sandbox,
        config: PreviewConfig | None = None,
        viewer: ExternalViewer | None = None,
    ) -> None:
        self._buffers = buffers
        self._sandbox = sandbox
        self._viewer = viewer
        self._config = config or PreviewConfig()
        self._stale = True
        self._last_document: str | None = None
        self._unsubscribe = buffers.subscribe(self._on_buffers_changed)

    @property
    def config(self) -> PreviewConfig:
        return self._config

    @property
    def stale(self) -> bool:
        """True when the buffers changed since the last refresh."""
        return self._stale

    @property
    def last_document(self) -> str | None:
        return self._last_document

    # -- layout ---------------------------------------------------------------

    def set_device_preset(self, width_px: int) -> None:
        self._update_layout(
            full_width=False,
            device_width_px=clamp(width_px, MIN_WIDTH_PX, MAX_WIDTH_PX),
        )

    def set_full_width(self) -> None:
        self._update_layout(full_width=True)

    def set_width(self, px: int) -> None:
        self._update_layout(
            full_width=False,
            device_width_px=clamp(px, MIN_WIDTH_PX, MAX_WIDTH_PX),
        )

    def set_zoom(self, pct: int) -> None:
        self._update_layout(zoom_percent=clamp(pct, MIN_ZOOM_PERCENT, MAX_ZOOM_PERCENT))

    def _update_layout(self, **changes: object) -> None:
        self._config = self._config.model_copy(update=changes)
        self._sandbox.apply_layout(self._config)

    # -- toggles --------------------------------------------------------------

    def toggle_outlines(self) -> None:
        self._config = self._config.model_copy(
            update={"show_outlines": not self._config.show_outlines}
        )
        if self._config.auto_refresh:
            self.refresh()
        else:
            self._stale = True

    def toggle_auto_refresh(self) -> None:
        self._config = self._config.model_copy(
            update={"auto_refresh": not self._config.auto_refresh}
        )

    # -- rendering ------------------------------------------------------------

    def render(self, inject_outline_css: bool | None = None) -> str:
        """Compose the current buffers without touching the sandbox."""
        if inject_outline_css is None:
            inject_outline_css = self._config.show_outlines
        return compose(
            self._buffers.markup,
            self._buffers.style,
            self._buffers.script,
            inject_outline_css,
        )

    def refresh(self, force: bool = False) -> str:
        """Recompose and replace the sandbox content. Returns the document.

        ``force`` marks refreshes requested outside the auto-refresh policy.
        """
        document = self.render()
        self._sandbox.load(document)
        self._last_document = document
        self._stale = False
        logger.debug(
            "preview refreshed (force=%s, outlines=%s, %d bytes)",
            force,
            self._config.show_outlines,
            len(document),
        )
        return document

    def open_external(self) -> str:
        """Hand the document, never with outline overlay, to the external viewer."""
        document = self.render(inject_outline_css=False)
        if self._viewer is not None:
            self._viewer.open(document)
        return document

    def close(self) -> None:
        """Stop listening to buffer changes."""
        self._unsubscribe()

    def _on_buffers_changed(self, change: BufferChange) -> None:
        if self._config.auto_refresh:
            self.refresh()
        else:
            self._stale = True
