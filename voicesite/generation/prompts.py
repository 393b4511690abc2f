"""Prompt templates for site generation requests."""

from __future__ import annotations

from voicesite.generation.models import GenerationRequest

SYSTEM_PROMPT = """\
You are a web developer that returns only a JSON object with html, css and js keys.\
"""

USER_PROMPT_TEMPLATE = """\
You are a helpful web developer. The user wants to modify or create a website based on \
the instruction below. Respond with three clearly delimited sections: HTML, CSS and JS. \
Use the existing code as a base when appropriate. Omit a key to leave that file unchanged.
Existing HTML:
{markup}
Existing CSS:
{style}
Existing JS:
{script}
User instruction:
{instruction}

Return only a json object like: {{"html":"<...>","css":"...","js":"..."}} without extra text.\
"""


def render_prompt(request: GenerationRequest) -> tuple[str, str]:
    """Return (system_prompt, user_prompt) for a request."""
    user_prompt = USER_PROMPT_TEMPLATE.format(
        markup=request.current_markup,
        style=request.current_style,
        script=request.current_script,
        instruction=request.instruction,
    )
    return SYSTEM_PROMPT, user_prompt
