"""Fast, type-safe JSON parsing and encoding with multiple backends."""

from typing import Any
import json

import msgspec
import orjson
from json_repair import repair_json


class JSONParseError(Exception):
    """JSON parsing failed."""

    def __init__(self, message: str, original: Exception | None = None) -> None:
        super().__init__(message)
        self.original = original


def extract_json_boundaries(text: str) -> tuple[str, int, int] | None:
    """
    Locate a JSON object in text, tolerating markdown code fences.

    Returns:
        (working_text, start, end) or None if no object braces were found
    """
    working_text = text

    if "```" in working_text:
        if "```json" in working_text:
            start_marker = working_text.find("```json") + 7
        else:
            start_marker = working_text.find("```") + 3

        end_marker = working_text.find("```", start_marker)
        if end_marker != -1:
            working_text = working_text[start_marker:end_marker].strip()

    start = working_text.find("{")
    end = working_text.rfind("}")

    if start == -1 or end == -1:
        return None

    return (working_text, start, end + 1)


def parse_json(text: str | bytes) -> Any:
    """
    Strict JSON decode via msgspec.

    Raises:
        JSONParseError: If the document is not valid JSON
    """
    data = text.encode("utf-8") if isinstance(text, str) else text
    try:
        return msgspec.json.decode(data)
    except msgspec.DecodeError as e:
        raise JSONParseError(f"Invalid JSON: {e}", e) from e


def extract_json(text: str, repair: bool = True) -> dict[str, Any]:
    """
    Extract and parse a JSON object from text with fallbacks.

    Args:
        text: Text containing JSON
        repair: Attempt to repair invalid JSON with json_repair

    Returns:
        Parsed JSON dictionary

    Raises:
        JSONParseError: If parsing fails
    """
    boundaries = extract_json_boundaries(text.strip())
    if boundaries is None:
        raise JSONParseError("No JSON object found in text")

    extracted_text, start, end = boundaries
    json_str = extracted_text[start:end]

    try:
        result = msgspec.json.decode(json_str.encode("utf-8"))
    except msgspec.DecodeError as e:
        if not repair:
            raise JSONParseError(f"Invalid JSON: {e}", e) from e
        try:
            result = json.loads(repair_json(json_str))
        except (ValueError, TypeError) as repair_error:
            raise JSONParseError(f"JSON repair failed: {repair_error}", repair_error) from repair_error

    if not isinstance(result, dict):
        raise JSONParseError(f"Expected dict, got {type(result).__name__}")
    return result


def safe_json_dumps(obj: Any, indent: int = 0, sort_keys: bool = False) -> str:
    """
    Encode object to a JSON string.

    orjson handles both compact and two-space output. Other indent widths
    and values orjson rejects (e.g. integers outside 64-bit range) go
    through the stdlib encoder.
    """
    option = 0
    if indent == 2:
        option |= orjson.OPT_INDENT_2
    if sort_keys:
        option |= orjson.OPT_SORT_KEYS

    if indent in (0, 2):
        try:
            return orjson.dumps(obj, option=option).decode("utf-8")
        except TypeError:
            pass

    return json.dumps(
        obj, indent=indent if indent > 0 else None, sort_keys=sort_keys, ensure_ascii=False
    )


__all__ = [
    "JSONParseError",
    "extract_json_boundaries",
    "extract_json",
    "parse_json",
    "safe_json_dumps",
]
