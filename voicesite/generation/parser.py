"""Extract the html/css/js object from free-form generation output."""

from __future__ import annotations

import json
from typing import Any

from voicesite.errors import UnparsableResponse
from voicesite.generation.models import RESPONSE_FIELDS, ParsedEdit

_EXCERPT_CHARS = 120


def parse_response(text: str) -> ParsedEdit:
    """Parse a generation response into a ParsedEdit.

    The whole text is tried as JSON first. Failing that, the first
    balanced ``{...}`` substring is tried. Keys other than html, css and js
    are ignored; a ``null`` value counts as absent. An empty string is a
    present value, so ``{"js": ""}`` clears the script buffer.

    Raises UnparsableResponse when neither attempt yields a JSON object or
    a known key holds something other than a string.
    """
    obj = _load_object(text)
    if obj is None:
        candidate = find_balanced_object(text)
        if candidate is None:
            raise UnparsableResponse("no JSON object found", _excerpt(text))
        obj = _load_object(candidate)
        if obj is None:
            raise UnparsableResponse("embedded object is not valid JSON", _excerpt(candidate))
    return _to_edit(obj)


def find_balanced_object(text: str) -> str | None:
    """Return the substring from the first ``{`` to its matching ``}``.

    Braces inside JSON string literals are not counted. Returns None when
    there is no ``{`` or it is never closed.
    """
    start = text.find("{")
    if start == -1:
        return None

    depth = 0
    in_string = False
    escaped = False
    for i in range(start, len(text)):
        ch = text[i]
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
        elif ch == '"':
            in_string = True
        elif ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return text[start : i + 1]
    return None


def _load_object(text: str) -> dict[str, Any] | None:
    try:
        value = json.loads(text)
    except (ValueError, RecursionError):
        return None
    return value if isinstance(value, dict) else None


def _to_edit(obj: dict[str, Any]) -> ParsedEdit:
    fields: dict[str, str] = {}
    for key in RESPONSE_FIELDS:
        value = obj.get(key)
        if value is None:
            continue
        if not isinstance(value, str):
            raise UnparsableResponse(f"field {key!r} is {type(value).__name__}, not a string")
        fields[key] = value
    return ParsedEdit(**fields)


def _excerpt(text: str) -> str:
    text = text.strip()
    if len(text) <= _EXCERPT_CHARS:
        return text
    return text[:_EXCERPT_CHARS] + "..."
