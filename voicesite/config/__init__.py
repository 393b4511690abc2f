from .loader import load_config
from .models import (
    LLMSettings,
    PreviewSettings,
    VersionSettings,
    VoiceSiteConfig,
    WorkspaceSettings,
)

__all__ = [
    "LLMSettings",
    "PreviewSettings",
    "VersionSettings",
    "VoiceSiteConfig",
    "WorkspaceSettings",
    "load_config",
]
