"""Voice instruction to site edit: prompts, response parsing, orchestration."""

from voicesite.generation.models import (
    RESPONSE_FIELDS,
    FailureKind,
    GenerationOutcome,
    GenerationRequest,
    ParsedEdit,
)
from voicesite.generation.orchestrator import GenerationOrchestrator
from voicesite.generation.parser import find_balanced_object, parse_response
from voicesite.generation.prompts import SYSTEM_PROMPT, render_prompt

__all__ = [
    "RESPONSE_FIELDS",
    "SYSTEM_PROMPT",
    "FailureKind",
    "GenerationOrchestrator",
    "GenerationOutcome",
    "GenerationRequest",
    "ParsedEdit",
    "find_balanced_object",
    "parse_response",
    "render_prompt",
]
