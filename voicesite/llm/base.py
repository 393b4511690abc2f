"""Abstract LLM interface for voicesite."""

from __future__ import annotations

from abc import ABC, abstractmethod

from voicesite.llm.models import LLMConfig, LLMResponse


class LLMProvider(ABC):
    """Provider-agnostic interface to the code generation service.

    Adapters return the model's raw text; extracting the html/css/js object
    from it is the generation subsystem's job.
    """

    def __init__(self, config: LLMConfig) -> None:
        self.config = config

    @abstractmethod
    async def generate(
        self,
        system: str,
        user: str,
        max_tokens: int | None = None,
    ) -> LLMResponse:
        """Generate a complete response (one-shot)."""
        ...
