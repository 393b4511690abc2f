"""Export artifacts: the composed index plus the raw style and script files."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from voicesite.buffers import BufferContents
from voicesite.composer import compose

INDEX_FILENAME = "index.html"
STYLE_FILENAME = "style.css"
SCRIPT_FILENAME = "script.js"


class ExportBundle(BaseModel):
    """Three string artifacts ready to hand to a host save capability."""

    model_config = ConfigDict(frozen=True)

    index_html: str
    style_css: str
    script_js: str

    @classmethod
    def from_buffers(cls, buffers: BufferContents) -> ExportBundle:
        """Build the bundle; the index never carries the outline overlay."""
        return cls(
            index_html=compose(buffers.markup, buffers.style, buffers.script, False),
            style_css=buffers.style,
            script_js=buffers.script,
        )

    def files(self) -> dict[str, str]:
        """Filename to content, in save order."""
        return {
            INDEX_FILENAME: self.index_html,
            STYLE_FILENAME: self.style_css,
            SCRIPT_FILENAME: self.script_js,
        }
