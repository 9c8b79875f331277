"""Helpers for JSON text columns.

The store keeps list-valued fields as serialized JSON text, so every
repository converts on the way in and out through these helpers.
"""

import json
from typing import Any


def to_json_text(value: Any) -> str | None:
    """Serialize a value for a JSON text column (``None`` stays NULL)."""
    if value is None:
        return None
    return json.dumps(value)


def from_json_text(raw: str | None, default: Any = None) -> Any:
    """Parse a JSON text column, returning ``default`` for NULL or bad JSON."""
    if raw is None or raw == "":
        return default
    try:
        return json.loads(raw)
    except (TypeError, ValueError):
        return default


def string_list(raw: str | None) -> list[str]:
    """Parse a JSON text column holding an ordered list of strings."""
    parsed = from_json_text(raw, default=[])
    if not isinstance(parsed, list):
        return []
    return [str(item) for item in parsed]
