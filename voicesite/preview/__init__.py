"""Live preview: viewport simulation, refresh policy and sandbox collaborators."""

from voicesite.preview.controller import PreviewController
from voicesite.preview.models import (
    DEVICE_PRESETS,
    MAX_WIDTH_PX,
    MAX_ZOOM_PERCENT,
    MIN_WIDTH_PX,
    MIN_ZOOM_PERCENT,
    PreviewConfig,
)
from voicesite.preview.sandbox import (
    SANDBOX_PERMISSIONS,
    BrowserViewer,
    ExternalViewer,
    HtmlFileSandbox,
    MemorySandbox,
    Sandbox,
    sandbox_attribute,
)

__all__ = [
    "DEVICE_PRESETS",
    "MAX_WIDTH_PX",
    "MAX_ZOOM_PERCENT",
    "MIN_WIDTH_PX",
    "MIN_ZOOM_PERCENT",
    "SANDBOX_PERMISSIONS",
    "BrowserViewer",
    "ExternalViewer",
    "HtmlFileSandbox",
    "MemorySandbox",
    "PreviewConfig",
    "PreviewController",
    "Sandbox",
    "sandbox_attribute",
]
