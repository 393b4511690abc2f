"""Tests for the LLM subsystem: provider factory, models and error wrapping."""

import os
from unittest.mock import AsyncMock, MagicMock, Mock, patch

import httpx
import pytest
from anthropic import APIError as AnthropicAPIError
from openai import APIError as OpenAIAPIError
from openai import RateLimitError as OpenAIRateLimitError

from voicesite.config.models import LLMSettings
from voicesite.llm import (
    ClaudeProvider,
    LLMConfig,
    LLMError,
    LLMResponse,
    OllamaProvider,
    OpenAIProvider,
    TokenUsage,
    create_llm_provider,
)


# ---------------------------------------------------------------------------
# Model smoke tests
# ---------------------------------------------------------------------------


class TestLLMModels:
    def test_llm_response(self):
        resp = LLMResponse(
            content="{}",
            usage=TokenUsage(input_tokens=10, output_tokens=20),
            model="test-model",
        )
        assert resp.content == "{}"
        assert resp.usage.output_tokens == 20

    def test_llm_config_defaults(self):
        cfg = LLMConfig(provider="openai", model="gpt-4o-mini")
        assert cfg.max_tokens == 1500
        assert cfg.temperature == 0.2
        assert cfg.api_key is None

    def test_llm_error_keeps_cause(self):
        cause = RuntimeError("boom")
        err = LLMError("openai", "generate", cause, retryable=True)
        assert err.__cause__ is cause
        assert err.retryable
        assert str(err) == "openai generate failed: boom"


# ---------------------------------------------------------------------------
# create_llm_provider
# ---------------------------------------------------------------------------


class TestCreateLLMProvider:
    @patch.dict(os.environ, {"OPENAI_API_KEY": "sk-test"})
    def test_creates_openai_provider(self):
        provider = create_llm_provider(LLMSettings())
        assert isinstance(provider, OpenAIProvider)
        assert provider.config.model == "gpt-4o-mini"
        assert provider.config.api_key == "sk-test"

    @patch.dict(os.environ, {"ANTHROPIC_API_KEY": "key123"})
    def test_creates_claude_provider(self):
        settings = LLMSettings(
            provider="anthropic",
            model="claude-sonnet-4-20250514",
            api_key_env="ANTHROPIC_API_KEY",
        )
        assert isinstance(create_llm_provider(settings), ClaudeProvider)

    @patch.dict(os.environ, {}, clear=True)
    def test_ollama_needs_no_key(self):
        provider = create_llm_provider(LLMSettings(provider="ollama", model="llama3"))
        assert isinstance(provider, OllamaProvider)
        assert provider.config.api_key is None

    @patch.dict(os.environ, {}, clear=True)
    def test_missing_api_key_raises(self):
        with pytest.raises(ValueError, match="Missing API key"):
            create_llm_provider(LLMSettings(api_key_env="NONEXISTENT_KEY_VAR"))

    def test_unsupported_provider_raises(self):
        settings = LLMSettings()
        object.__setattr__(settings, "provider", "unsupported_llm")
        with pytest.raises(ValueError, match="Unsupported LLM provider"):
            create_llm_provider(settings)

    @patch.dict(os.environ, {"OPENAI_API_KEY": "sk-test"})
    def test_settings_carried_over(self):
        provider = create_llm_provider(LLMSettings(max_tokens=800, temperature=0.7))
        assert provider.config.max_tokens == 800
        assert provider.config.temperature == 0.7


# ---------------------------------------------------------------------------
# Adapters
# ---------------------------------------------------------------------------


def _openai_completion(content="{}"):
    completion = MagicMock()
    completion.choices = [MagicMock()]
    completion.choices[0].message.content = content
    completion.usage.prompt_tokens = 11
    completion.usage.completion_tokens = 22
    completion.model = "gpt-4o-mini"
    return completion


class TestOpenAIProvider:
    @pytest.mark.asyncio
    async def test_generate(self):
        provider = OpenAIProvider(LLMConfig(provider="openai", model="gpt-4o-mini", api_key="k"))
        create = AsyncMock(return_value=_openai_completion('{"css": ""}'))
        with patch.object(provider._client.chat.completions, "create", create):
            resp = await provider.generate("system", "user")

        assert resp.content == '{"css": ""}'
        assert resp.usage == TokenUsage(input_tokens=11, output_tokens=22)
        kwargs = create.await_args.kwargs
        assert kwargs["max_tokens"] == 1500
        assert kwargs["temperature"] == 0.2
        assert kwargs["messages"][0] == {"role": "system", "content": "system"}

    @pytest.mark.asyncio
    async def test_wraps_api_error(self):
        provider = OpenAIProvider(LLMConfig(provider="openai", model="m", api_key="k"))
        error = OpenAIAPIError(message="bad", request=Mock(), body=None)
        with patch.object(provider._client.chat.completions, "create", side_effect=error):
            with pytest.raises(LLMError) as exc_info:
                await provider.generate("system", "user")
        assert exc_info.value.provider == "openai"
        assert not exc_info.value.retryable

    @pytest.mark.asyncio
    async def test_rate_limit_retryable(self):
        provider = OpenAIProvider(LLMConfig(provider="openai", model="m", api_key="k"))
        error = OpenAIRateLimitError(message="slow down", response=Mock(), body=None)
        with patch.object(provider._client.chat.completions, "create", side_effect=error):
            with pytest.raises(LLMError) as exc_info:
                await provider.generate("system", "user")
        assert exc_info.value.retryable

    @pytest.mark.asyncio
    async def test_no_choices(self):
        provider = OpenAIProvider(LLMConfig(provider="openai", model="m", api_key="k"))
        completion = _openai_completion()
        completion.choices = []
        with patch.object(
            provider._client.chat.completions, "create", AsyncMock(return_value=completion)
        ):
            with pytest.raises(LLMError):
                await provider.generate("system", "user")


class TestClaudeProvider:
    @pytest.mark.asyncio
    async def test_wraps_api_error(self):
        provider = ClaudeProvider(LLMConfig(provider="anthropic", model="m", api_key="k"))
        error = AnthropicAPIError(message="bad", request=Mock(), body=None)
        with patch.object(provider._client.messages, "create", side_effect=error):
            with pytest.raises(LLMError) as exc_info:
                await provider.generate("system", "user")
        assert exc_info.value.provider == "claude"
        assert isinstance(exc_info.value.__cause__, AnthropicAPIError)

    @pytest.mark.asyncio
    async def test_generate(self):
        provider = ClaudeProvider(LLMConfig(provider="anthropic", model="m", api_key="k"))
        message = MagicMock()
        message.content = [MagicMock(text='{"js": "x()"}')]
        message.usage.input_tokens = 5
        message.usage.output_tokens = 6
        message.model = "m"
        with patch.object(provider._client.messages, "create", AsyncMock(return_value=message)):
            resp = await provider.generate("system", "user")
        assert resp.content == '{"js": "x()"}'


class TestOllamaProvider:
    def test_rejects_non_http_url(self):
        with pytest.raises(ValueError, match="http"):
            OllamaProvider(LLMConfig(provider="ollama", model="m", base_url="file:///etc"))

    @pytest.mark.asyncio
    async def test_generate(self):
        def _handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/api/chat"
            return httpx.Response(
                200,
                json={"message": {"content": '{"html": "<p/>"}'}, "prompt_eval_count": 3, "eval_count": 4},
            )

        provider = OllamaProvider(LLMConfig(provider="ollama", model="llama3"))
        transport = httpx.MockTransport(_handler)
        real_client = httpx.AsyncClient
        with patch("voicesite.llm.ollama.httpx.AsyncClient", lambda: real_client(transport=transport)):
            resp = await provider.generate("system", "user")
        assert resp.content == '{"html": "<p/>"}'
        assert resp.usage == TokenUsage(input_tokens=3, output_tokens=4)

    @pytest.mark.asyncio
    async def test_http_error_wrapped(self):
        provider = OllamaProvider(LLMConfig(provider="ollama", model="llama3"))
        transport = httpx.MockTransport(lambda request: httpx.Response(503))
        real_client = httpx.AsyncClient
        with patch("voicesite.llm.ollama.httpx.AsyncClient", lambda: real_client(transport=transport)):
            with pytest.raises(LLMError) as exc_info:
                await provider.generate("system", "user")
        assert exc_info.value.provider == "ollama"
