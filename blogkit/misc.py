"""Small helpers for HTTP request data."""

from __future__ import annotations

from collections.abc import Mapping, Sequence


def get_header_string(key: str, headers: Mapping[str, Sequence[str] | str]) -> str:
    """Return the first value of the header named exactly ``key``, or ""."""
    value = ""
    for name, values in headers.items():
        if name != key:
            continue
        if isinstance(values, str):
            value = values
        else:
            value = values[0] if values else ""
    return value