"""
Recover the JSON object a model embedded in free-form text.

Models wrap their answer in prose or markdown fences ("Sure! Here is the
data: ```json {...} ``` Let me know..."). Instead of slicing from the first
``{`` to the last ``}``, which breaks as soon as the surrounding prose holds a
brace, we scan for the first *balanced* object that actually parses.
"""

import json

from expiry_tracker.errors import MalformedAIResponse


def _balanced_end(text: str, start: int) -> int | None:
    """Index just past the brace closing the object opened at ``start``.

    String literals are skipped so braces inside values do not count.
    Returns None if the object never closes.
    """
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
                return i + 1
    return None


def iter_json_objects(text: str):
    """Yield every top-level JSON object found in ``text``, in order."""
    pos = text.find("{")
    while pos != -1:
        end = _balanced_end(text, pos)
        if end is not None:
            try:
                value = json.loads(text[pos:end])
            except ValueError:
                value = None
            if isinstance(value, dict):
                yield value
                pos = text.find("{", end)
                continue
        pos = text.find("{", pos + 1)


def extract_json_object(text: str) -> dict:
    """Return the first balanced JSON object in ``text``.

    Raises MalformedAIResponse, carrying the raw text, when there is none.
    """
    if not text or "{" not in text or "}" not in text:
        raise MalformedAIResponse(raw_response=text, details="No JSON object found in AI response")
    for value in iter_json_objects(text):
        return value
    raise MalformedAIResponse(raw_response=text, details="AI response JSON could not be parsed")
