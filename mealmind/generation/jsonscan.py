"""Locate and parse the JSON object embedded in a free-text LLM reply."""

from __future__ import annotations

import json

from ..errors import GenerationParseError


def find_json_object(text: str) -> str | None:
    """Return the first balanced top-level ``{...}`` span in ``text``.

    Braces inside JSON strings (including escaped quotes) are not counted.
    Returns None when there is no opening brace or it is never closed.
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
            continue
        if ch == '"':
            in_string = True
        elif ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return text[start : i + 1]
    return None


def extract_json_object(text: str, error_message: str = "Не удалось разобрать ответ") -> dict:
    """Parse the embedded JSON object, ignoring surrounding prose.

    Raises:
        GenerationParseError: No object found, invalid JSON, or the
            top-level value is not an object.
    """
    span = find_json_object(text)
    if span is None:
        raise GenerationParseError(error_message)
    try:
        data = json.loads(span)
    except json.JSONDecodeError as e:
        raise GenerationParseError(error_message) from e
    if not isinstance(data, dict):
        raise GenerationParseError(error_message)
    return data
