"""Value redaction for captured JSON response bodies.

A decoded JSON document is one of null, bool, number, string, array or
object. ``redact`` folds over that shape and replaces every leaf with a
placeholder of the same kind, so the documentation shows which fields
exist without carrying the data that was served.
"""
from __future__ import annotations

import json
from typing import Any, Union

JSONValue = Union[None, bool, int, float, str, list, dict]

# returned by redact_body when there is nothing to record
MISSING: Any = object()


def redact(value: JSONValue) -> JSONValue:
    # bool is an int subclass, check it first
    if value is None:
        return None
    if isinstance(value, bool):
        return False
    if isinstance(value, (int, float)):
        return 0
    if isinstance(value, str):
        return ""
    if isinstance(value, list):
        # element types are deliberately not kept
        return []
    if isinstance(value, dict):
        return {k: redact(v) for k, v in value.items()}
    raise TypeError(f"not a JSON value: {type(value).__name__}")


def redact_body(raw: bytes | str | None) -> Any:
    """Decode a captured body and redact it, or return MISSING."""
    if not raw:
        return MISSING
    try:
        decoded = json.loads(raw)
    except ValueError:
        # covers JSONDecodeError and undecodable bytes
        return MISSING
    return redact(decoded)
