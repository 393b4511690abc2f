"""Document composition from markup, style and script buffers."""

from voicesite.composer.composer import (
    BODY_CLOSE,
    HEAD_CLOSE,
    OUTLINE_OVERLAY_CSS,
    compose,
    script_block,
    style_block,
)

__all__ = [
    "BODY_CLOSE",
    "HEAD_CLOSE",
    "OUTLINE_OVERLAY_CSS",
    "compose",
    "script_block",
    "style_block",
]
