"""Shared test fixtures for voicesite."""

from datetime import datetime
from unittest.mock import AsyncMock, MagicMock

import pytest

from voicesite.buffers import BufferSet
from voicesite.config.models import VoiceSiteConfig
from voicesite.generation import GenerationOrchestrator
from voicesite.llm.base import LLMProvider
from voicesite.llm.models import LLMConfig, LLMResponse, TokenUsage
from voicesite.preview import MemorySandbox, PreviewController
from voicesite.speech import ManualTranscript
from voicesite.versions import InMemoryKeyValueStore, MonotonicIdGenerator, VersionStore

FIXED_NOW = datetime(2025, 3, 14, 9, 26, 53)


def llm_reply(content: str) -> LLMResponse:
    return LLMResponse(
        content=content,
        usage=TokenUsage(input_tokens=120, output_tokens=80),
        model="test-model",
    )


class FakeClock:
    """Seconds-resolution clock that only moves when told to."""

    def __init__(self, start: float = 1_700_000_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def buffers():
    return BufferSet(
        markup="<html><head></head><body><p>hi</p></body></html>",
        style="p { color: red; }",
        script="console.log('hi')",
    )


@pytest.fixture
def sandbox():
    return MemorySandbox()


@pytest.fixture
def preview(buffers, sandbox):
    return PreviewController(buffers, sandbox)


@pytest.fixture
def kv_store():
    return InMemoryKeyValueStore()


@pytest.fixture
def versions(kv_store):
    return VersionStore(kv_store, id_generator=MonotonicIdGenerator(FakeClock()))


@pytest.fixture
def transcript():
    return ManualTranscript("make the text blue")


@pytest.fixture
def mock_llm_provider():
    provider = MagicMock(spec=LLMProvider)
    provider.config = LLMConfig(provider="openai", model="test-model")
    provider.generate = AsyncMock(return_value=llm_reply('{"css": "p { color: blue; }"}'))
    return provider


@pytest.fixture
def orchestrator(mock_llm_provider, versions, preview, transcript):
    return GenerationOrchestrator(
        mock_llm_provider,
        versions,
        preview,
        transcript=transcript,
        clock=lambda: FIXED_NOW,
    )


@pytest.fixture
def sample_config():
    return VoiceSiteConfig()
