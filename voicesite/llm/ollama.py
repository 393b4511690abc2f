"""Ollama adapter for voicesite."""

from __future__ import annotations

import logging
from urllib.parse import urlparse

import httpx

from voicesite.llm.base import LLMProvider
from voicesite.llm.models import LLMConfig, LLMError, LLMResponse, TokenUsage

logger = logging.getLogger(__name__)

_DEFAULT_BASE_URL = "http://localhost:11434"


def _validate_base_url(url: str) -> str:
    """Reject non-http(s) or CRLF-bearing URLs; warn on non-local hosts."""
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https"):
        raise ValueError(f"Ollama base_url must be http(s), got {parsed.scheme}")
    if "\r" in url or "\n" in url:
        raise ValueError("CRLF injection detected in base_url")
    if parsed.hostname not in {"localhost", "127.0.0.1", "::1", "0.0.0.0"}:
        logger.warning("Ollama base_url %s is not localhost", parsed.hostname)
    return url


class OllamaProvider(LLMProvider):
    """Ollama adapter using its REST chat API via httpx."""

    def __init__(self, config: LLMConfig, timeout: float = 120.0) -> None:
        super().__init__(config)
        self._base_url = _validate_base_url((config.base_url or _DEFAULT_BASE_URL).rstrip("/"))
        self._timeout = timeout

    async def generate(
        self,
        system: str,
        user: str,
        max_tokens: int | None = None,
    ) -> LLMResponse:
        payload = {
            "model": self.config.model,
            "messages": [
                {"role": "system", "content": system},
                {"role": "user", "content": user},
            ],
            "stream": False,
            "options": {
                "temperature": self.config.temperature,
                "num_predict": max_tokens or self.config.max_tokens,
            },
        }
        try:
            async with httpx.AsyncClient() as client:
                resp = await client.post(
                    f"{self._base_url}/api/chat",
                    json=payload,
                    timeout=self._timeout,
                )
                resp.raise_for_status()
                data = resp.json()
        except httpx.HTTPError as e:
            retryable = isinstance(e, httpx.HTTPStatusError) and e.response.status_code == 429
            raise LLMError("ollama", "generate", e, retryable=retryable) from e

        content = data.get("message", {}).get("content", "")
        if not content:
            raise LLMError("ollama", "generate", ValueError("No content in Ollama response"))
        return LLMResponse(
            content=content,
            usage=TokenUsage(
                input_tokens=data.get("prompt_eval_count", 0),
                output_tokens=data.get("eval_count", 0),
            ),
            model=self.config.model,
        )
