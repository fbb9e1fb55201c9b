"""Rule-based validation of dataclass instances.

Rules come from each field's ``metadata["validate"]``, written as a comma
separated list such as ``"required,min=3"``.
"""

from __future__ import annotations

import dataclasses
import functools
from collections.abc import Callable, Sized
from typing import Any


class ValidationError(ValueError):
    """Raised when one or more fields fail their rules."""

    def __init__(self, messages: list[str], failures: list[tuple[str, str]]) -> None:
        super().__init__("\n".join(messages))
        self.messages = messages
        self.failures = failures


def _is_zero(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, (str, bytes, list, tuple, dict, set, frozenset)):
        return len(value) == 0
    if isinstance(value, (bool, int, float)):
        return value == 0
    return False


def _measure(value: Any) -> float:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value
    if isinstance(value, Sized):
        return len(value)
    raise TypeError(f"cannot measure a value of type {type(value).__name__}")


def _compare(op: Callable[[float, float], bool]) -> Callable[[Any, str], bool]:
    def check(value: Any, param: str) -> bool:
        return op(_measure(value), float(param))

    return check


_RULES: dict[str, Callable[[Any, str], bool]] = {
    "required": lambda value, _param: not _is_zero(value),
    "min": _compare(lambda a, b: a >= b),
    "max": _compare(lambda a, b: a <= b),
    "len": _compare(lambda a, b: a == b),
    "gt": _compare(lambda a, b: a > b),
    "gte": _compare(lambda a, b: a >= b),
    "lt": _compare(lambda a, b: a < b),
    "lte": _compare(lambda a, b: a <= b),
    "oneof": lambda value, param: str(value) in param.split(),
}


class Validator:
    """Checks the rules declared on dataclass fields."""

    def validate(self, obj: Any) -> None:
        """Raise ValidationError listing every field whose rules fail."""
        if not dataclasses.is_dataclass(obj) or isinstance(obj, type):
            raise TypeError(f"validator: ({type(obj).__name__} is not a dataclass instance)")
        messages: list[str] = []
        failures: list[tuple[str, str]] = []
        self._check(obj, type(obj).__name__, messages, failures)
        if messages:
            raise ValidationError(messages, failures)

    def _check(
        self,
        obj: Any,
        namespace: str,
        messages: list[str],
        failures: list[tuple[str, str]],
    ) -> None:
        for item in dataclasses.fields(obj):
            value = getattr(obj, item.name)
            tag = item.metadata.get("validate", "")
            if tag and tag != "-":
                failed = self._first_failure(item.name, value, tag.split(","))
                if failed is not None:
                    key = f"{namespace}.{item.name}"
                    messages.append(
                        f"Key: '{key}' Error:Field validation for '{item.name}' "
                        f"failed on the '{failed}' tag"
                    )
                    failures.append((key, failed))
                    continue
            if dataclasses.is_dataclass(value) and not isinstance(value, type):
                self._check(value, f"{namespace}.{item.name}", messages, failures)

    @staticmethod
    def _first_failure(field_name: str, value: Any, rules: list[str]) -> str | None:
        if "omitempty" in rules and _is_zero(value):
            return None
        for rule in rules:
            name, _, param = rule.strip().partition("=")
            if name == "omitempty":
                continue
            check = _RULES.get(name)
            if check is None:
                raise ValueError(f"Undefined validation function '{name}' on field '{field_name}'")
            if not check(value, param):
                return name
        return None


@functools.cache
def get_validator() -> Validator:
    """Return the shared validator."""
    return Validator()


def validate(obj: Any) -> None:
    """Validate an object with the shared validator."""
    get_validator().validate(obj)