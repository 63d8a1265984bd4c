"""
Deterministic JSON encoding for registry records.
"""

from __future__ import annotations

import json
from typing import Any


def canonicalize_json(obj: Any) -> str:
    """Deterministic JSON serialization.

    Recursively sorts all object keys and drops ``None`` values, so two
    structurally equal records always produce the same string.

    Args:
        obj: The value to serialize.

    Returns:
        A canonical JSON string with no extra whitespace.
    """
    return json.dumps(_sort_keys(obj), ensure_ascii=False, separators=(",", ":"))


def _sort_keys(value: Any) -> Any:
    """Recursively sort dictionary keys for canonical output."""
    if isinstance(value, (list, tuple)):
        return [_sort_keys(item) for item in value]
    if isinstance(value, dict):
        return {
            key: _sort_keys(value[key])
            for key in sorted(value.keys())
            if value[key] is not None
        }
    return value


def parse_object(json_str: str, kind: str, required_fields: list[str]) -> dict:
    """Parse a JSON object and check that every required field is present.

    Args:
        json_str: The JSON text to parse.
        kind: Record kind used in error messages (e.g. "identity").
        required_fields: Keys the object must contain.

    Returns:
        The parsed dict.

    Raises:
        ValueError: When the input is empty, malformed, not an object,
            or missing a required field.
    """
    if not isinstance(json_str, str) or json_str.strip() == "":
        raise ValueError(f"deserialize {kind}: requires a non-empty JSON string")

    try:
        parsed = json.loads(json_str)
    except json.JSONDecodeError as err:
        raise ValueError(f"Invalid {kind} JSON: {err}") from err

    if not isinstance(parsed, dict):
        raise ValueError(f"Invalid {kind} JSON: expected an object")

    for field_name in required_fields:
        if field_name not in parsed:
            raise ValueError(
                f'Invalid {kind} JSON: missing required field "{field_name}"'
            )
    return parsed
