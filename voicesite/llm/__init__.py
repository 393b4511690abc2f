"""LLM provider abstraction layer for the generation service."""

import os

from voicesite.config.models import LLMSettings
from voicesite.llm.base import LLMProvider
from voicesite.llm.claude import ClaudeProvider
from voicesite.llm.models import LLMConfig, LLMError, LLMResponse, TokenUsage
from voicesite.llm.ollama import OllamaProvider
from voicesite.llm.openai_adapter import OpenAIProvider

_PROVIDER_MAP: dict[str, type[LLMProvider]] = {
    "openai": OpenAIProvider,
    "anthropic": ClaudeProvider,
    "ollama": OllamaProvider,
}


def create_llm_provider(config: LLMSettings) -> LLMProvider:
    """Create an LLM provider from app-level settings.

    Resolves the API key from the env var named in config.api_key_env, then
    bridges LLMSettings to the provider-level LLMConfig.
    """
    cls = _PROVIDER_MAP.get(config.provider)
    if cls is None:
        raise ValueError(
            f"Unsupported LLM provider: {config.provider!r}. "
            f"Supported: {', '.join(_PROVIDER_MAP)}"
        )

    api_key = None
    # Ollama doesn't require an API key
    if config.provider != "ollama":
        api_key = os.environ.get(config.api_key_env)
        if not api_key:
            raise ValueError(
                f"Missing API key: set environment variable {config.api_key_env!r}"
            )
    llm_config = LLMConfig(
        provider=config.provider,
        model=config.model,
        max_tokens=config.max_tokens,
        temperature=config.temperature,
        api_key=api_key,
        base_url=config.base_url,
    )
    return cls(llm_config)


__all__ = [
    "ClaudeProvider",
    "LLMConfig",
    "LLMError",
    "LLMProvider",
    "LLMResponse",
    "OllamaProvider",
    "OpenAIProvider",
    "TokenUsage",
    "create_llm_provider",
]
