"""Encoding and decoding of the JSON and UUID GraphQL scalars."""

from __future__ import annotations

import json
import logging
import string
import uuid
from typing import Any

_log = logging.getLogger(__name__)

_HTML_ESCAPES = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


def _escape_html(text: str) -> str:
    for char, escaped in _HTML_ESCAPES.items():
        text = text.replace(char, escaped)
    return text


def marshal_json(value: Any) -> str:
    """Encode a value as compact JSON with sorted keys; "" if it cannot be encoded."""
    try:
        text = json.dumps(
            value,
            sort_keys=True,
            separators=(",", ":"),
            ensure_ascii=False,
            allow_nan=False,
        )
    except (TypeError, ValueError):
        _log.warning("fail when marshal json")
        return ""
    return _escape_html(text)


def unmarshal_json(value: Any) -> dict[str, Any]:
    """Turn an input value into a JSON object, raising ValueError otherwise."""
    try:
        encoded = json.dumps(value, allow_nan=False)
    except (TypeError, ValueError) as exc:
        raise ValueError("field must be valid graphql query") from exc
    decoded = json.loads(encoded)
    if decoded is None:
        return {}
    if not isinstance(decoded, dict):
        raise ValueError("field must be valid graphql query [json]")
    return decoded


def marshal_uuid(value: uuid.UUID) -> str:
    """Encode a UUID as a quoted JSON string."""
    return f'"{value}"'


def _parse_uuid(text: str) -> uuid.UUID:
    invalid = ValueError("invalid UUID format")
    match len(text):
        case 45:
            if text[:9].lower() != "urn:uuid:":
                raise invalid
            text = text[9:]
        case 38:
            if text[0] != "{" or text[-1] != "}":
                raise invalid
            text = text[1:-1]
        case 36 | 32:
            pass
        case _:
            raise invalid
    if len(text) == 36:
        if any(text[pos] != "-" for pos in (8, 13, 18, 23)):
            raise invalid
        text = text[:8] + text[9:13] + text[14:18] + text[19:23] + text[24:]
    if not all(char in string.hexdigits for char in text):
        raise invalid
    return uuid.UUID(hex=text)


def unmarshal_uuid(value: Any) -> uuid.UUID:
    """Parse a UUID scalar; raise TypeError for non-strings, ValueError for bad text."""
    if not isinstance(value, str):
        raise TypeError("UUID must be a string")
    return _parse_uuid(value)