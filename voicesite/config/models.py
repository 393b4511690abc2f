from typing import Literal

from pydantic import BaseModel, Field

from voicesite.preview.models import (
    DEVICE_PRESETS,
    MAX_WIDTH_PX,
    MAX_ZOOM_PERCENT,
    MIN_WIDTH_PX,
    MIN_ZOOM_PERCENT,
    PreviewConfig,
)
from voicesite.versions.models import HISTORY_LIMIT


class LLMSettings(BaseModel):
    provider: Literal["openai", "anthropic", "ollama"] = "openai"
    model: str = "gpt-4o-mini"
    api_key_env: str = "OPENAI_API_KEY"
    max_tokens: int = Field(default=1500, gt=0)
    temperature: float = Field(default=0.2, ge=0)
    base_url: str | None = None


class PreviewSettings(BaseModel):
    device_presets: dict[str, int] = Field(default_factory=lambda: dict(DEVICE_PRESETS))
    width: int = Field(default=1366, ge=MIN_WIDTH_PX, le=MAX_WIDTH_PX)
    full_width: bool = True
    zoom: int = Field(default=100, ge=MIN_ZOOM_PERCENT, le=MAX_ZOOM_PERCENT)
    auto_refresh: bool = True
    show_outlines: bool = False
    output: str = ".voicesite/preview.html"

    def initial_state(self) -> PreviewConfig:
        return PreviewConfig(
            device_width_px=self.width,
            full_width=self.full_width,
            zoom_percent=self.zoom,
            auto_refresh=self.auto_refresh,
            show_outlines=self.show_outlines,
        )


class VersionSettings(BaseModel):
    limit: int = Field(default=HISTORY_LIMIT, ge=1, le=HISTORY_LIMIT)
    db_path: str = ".voicesite/state.db"


class WorkspaceSettings(BaseModel):
    dir: str = ".voicesite"
    project_name: str = "My Voice Site"


class VoiceSiteConfig(BaseModel):
    llm: LLMSettings = Field(default_factory=LLMSettings)
    preview: PreviewSettings = Field(default_factory=PreviewSettings)
    versions: VersionSettings = Field(default_factory=VersionSettings)
    workspace: WorkspaceSettings = Field(default_factory=WorkspaceSettings)
    log_level: Literal["debug", "info", "warn", "error"] = "info"
    log_format: Literal["text", "json"] = "text"
