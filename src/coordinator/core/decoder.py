"""Two-stage decoding of JSON objects embedded in free model output.

Stage one locates a candidate span (first ``{`` through last ``}``), stage two
decodes it strictly. Callers validate structure on the returned mapping and
raise ``ValidationError`` themselves.
"""

import json
from typing import Any, Optional

from .errors import ParseError


def extract_json_object(text: str) -> Optional[str]:
    raw = (text or "").strip()
    if raw.startswith("```"):
        raw = raw.strip("`")
        raw = raw.removeprefix("json").strip()
    start = raw.find("{")
    end = raw.rfind("}")
    if start == -1 or end < start:
        return None
    return raw[start : end + 1]


def decode_json_object(text: str) -> dict[str, Any]:
    candidate = extract_json_object(text)
    if candidate is None:
        raise ParseError("No JSON object found in the response")
    try:
        parsed = json.loads(candidate)
    except json.JSONDecodeError as exc:
        raise ParseError(f"Malformed JSON object: {exc.msg}") from exc
    if not isinstance(parsed, dict):
        raise ParseError("Decoded JSON is not an object")
    return parsed
