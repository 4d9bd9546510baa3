"""
Best-effort extraction of a JSON object from completion text.

Completion services sometimes wrap the object in a ```json fence or add a
sentence before/after it despite being told not to. Everything outside the
first ``{`` ... last ``}`` span is dropped before parsing.
"""

import json
import re

_OPENING_FENCE = re.compile(r"^```[a-zA-Z]*\s*")
_CLOSING_FENCE = re.compile(r"```$")


def extract_json_text(raw: str) -> str:
    text = (raw or "").strip()

    if text.startswith("```"):
        text = _OPENING_FENCE.sub("", text)
        text = _CLOSING_FENCE.sub("", text).strip()

    first = text.find("{")
    last = text.rfind("}")
    if first != -1 and last != -1 and last > first:
        text = text[first:last + 1]

    return text


def parse_json_object(raw: str) -> dict:
    """Parse ``raw`` into a dict. Raises ValueError if that is not possible."""
    cleaned = extract_json_text(raw)
    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise ValueError(f"Completion is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object, got {type(data).__name__}")
    return data
