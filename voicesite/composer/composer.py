"""Merge the three source buffers into one renderable HTML document.

Composition is structural marker injection, not a DOM-aware merge: the style
block goes immediately before the first ``</head>`` of the markup (or ahead of
the whole markup when there is none) and the script block goes immediately
before the first ``</body>`` (or at the very end). Marker positions are taken
from the markup alone, so style or script text that happens to contain a
marker can never move the other block.
"""

from __future__ import annotations

HEAD_CLOSE = "</head>"
BODY_CLOSE = "</body>"

OUTLINE_OVERLAY_CSS = (
    "/* voicesite preview-only: element outlines */\n"
    "* { outline: 1px dashed rgba(220, 38, 38, 0.55) !important; outline-offset: -1px; }\n"
)


def style_block(style: str, inject_outline_css: bool = False) -> str:
    """Wrap stylesheet text in a ``<style>`` element."""
    overlay = OUTLINE_OVERLAY_CSS if inject_outline_css else ""
    return f"<style>\n{style}\n{overlay}</style>"


def script_block(script: str) -> str:
    """Wrap script text in a ``<script>`` element."""
    return f"<script>\n{script}\n</script>"


def compose(markup: str, style: str, script: str, inject_outline_css: bool = False) -> str:
    """Return the full document for the given buffers.

    Pure and deterministic. No input is validated or rewritten; each buffer
    appears verbatim in the output.
    """
    head_at = markup.find(HEAD_CLOSE)
    body_at = markup.find(BODY_CLOSE)

    styles = style_block(style, inject_outline_css) + "\n"
    scripts = script_block(script)

    # (position in markup, text to insert there); order breaks position ties
    insertions = [
        (head_at if head_at != -1 else 0, styles),
        (body_at, scripts + "\n") if body_at != -1 else (len(markup), scripts),
    ]
    insertions.sort(key=lambda item: item[0])

    parts: list[str] = []
    cursor = 0
    for position, text in insertions:
        parts.append(markup[cursor:position])
        parts.append(text)
        cursor = position
    parts.append(markup[cursor:])
    return "".join(parts)
