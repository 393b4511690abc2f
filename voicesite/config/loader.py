"""YAML config loading with env var expansion."""

import os
import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .models import VoiceSiteConfig

CONFIG_FILENAME = "voicesite.yaml"
USER_CONFIG_PATH = Path(".voicesite") / "config.yaml"

_ENV_REF = re.compile(r"\$\{(\w+)\}")


def config_search_paths(cli_path: str | None = None) -> list[Path]:
    """Candidate config files, highest precedence first."""
    paths = [Path(cli_path)] if cli_path else []
    paths.append(Path(CONFIG_FILENAME))
    paths.append(Path.home() / USER_CONFIG_PATH)
    return paths


def load_config(cli_path: str | None = None) -> VoiceSiteConfig:
    """Build the config from the first non-empty file found, else defaults.

    Raises ValueError naming the file when it is not valid YAML, is not a
    mapping, or holds values the settings models reject.
    """
    for path in config_search_paths(cli_path):
        raw = _read_config_file(path)
        if raw is None:
            continue
        try:
            return VoiceSiteConfig.model_validate(_expand_env_vars(raw))
        except ValidationError as e:
            raise ValueError(f"Invalid config in {path}: {e}") from e
    return VoiceSiteConfig()


def _read_config_file(path: Path) -> dict[str, Any] | None:
    if not path.is_file():
        return None
    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {path}: {e}") from e
    if raw is None:
        return None
    if not isinstance(raw, dict):
        raise ValueError(f"Invalid config in {path}: top level must be a mapping")
    return raw


def _expand_env_vars(value: Any) -> Any:
    """Substitute ${VAR} in every string, unset variables becoming ""."""
    if isinstance(value, str):
        return _ENV_REF.sub(lambda m: os.environ.get(m.group(1), ""), value)
    if isinstance(value, dict):
        return {key: _expand_env_vars(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_expand_env_vars(item) for item in value]
    return value


# Default YAML template for `voicesite config init`
DEFAULT_CONFIG_TEMPLATE = """\
# voicesite.yaml

# Generation service
llm:
  provider: "openai"           # openai | anthropic | ollama
  model: "gpt-4o-mini"
  api_key_env: "OPENAI_API_KEY"
  max_tokens: 1500
  temperature: 0.2
  # base_url: "http://localhost:11434"

# Live preview
preview:
  device_presets:
    mobile: 375
    tablet: 768
    desktop: 1366
  width: 1366                  # 320..1920
  full_width: true             # overrides width while true
  zoom: 100                    # 50..150
  auto_refresh: true
  show_outlines: false
  output: ".voicesite/preview.html"

# Version history
versions:
  limit: 50                    # at most 50
  db_path: ".voicesite/state.db"

# Workspace
workspace:
  dir: ".voicesite"
  project_name: "My Voice Site"

# Logging
log_level: "info"              # debug | info | warn | error
log_format: "text"             # text | json
"""
