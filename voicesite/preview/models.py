"""Pydantic models for the preview subsystem."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

MIN_WIDTH_PX = 320
MAX_WIDTH_PX = 1920
MIN_ZOOM_PERCENT = 50
MAX_ZOOM_PERCENT = 150

DEVICE_PRESETS: dict[str, int] = {
    "mobile": 375,
    "tablet": 768,
    "desktop": 1366,
}


def clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, int(value)))


class PreviewConfig(BaseModel):
    """Viewport simulation state.

    ``full_width`` overrides ``device_width_px`` while it is set.
    """

    model_config = ConfigDict(frozen=True)

    device_width_px: int = Field(default=1366, ge=MIN_WIDTH_PX, le=MAX_WIDTH_PX)
    full_width: bool = True
    zoom_percent: int = Field(default=100, ge=MIN_ZOOM_PERCENT, le=MAX_ZOOM_PERCENT)
    auto_refresh: bool = True
    show_outlines: bool = False

    @property
    def css_width(self) -> str:
        """Frame width as a CSS length."""
        return "100%" if self.full_width else f"{self.device_width_px}px"

    @property
    def scale(self) -> float:
        return self.zoom_percent / 100
