"""Layered configuration: environment variables, a config file and defaults."""

from __future__ import annotations

import configparser
import io
import json
import os
import re
import tomllib
from collections.abc import Mapping
from typing import Any

import yaml
from dotenv import dotenv_values

SUPPORTED_CONFIG_TYPES = (
    "json",
    "toml",
    "yaml",
    "yml",
    "properties",
    "props",
    "prop",
    "dotenv",
    "env",
    "ini",
)

_TRUE_STRINGS = {"1", "t", "T", "TRUE", "true", "True"}


class UnsupportedConfigTypeError(ValueError):
    """Raised when a config file type cannot be read."""

    def __init__(self, config_type: str) -> None:
        super().__init__(f'Unsupported Config Type "{config_type}"')
        self.config_type = config_type


def _flatten(data: Mapping[Any, Any], prefix: str = "") -> dict[str, Any]:
    flat: dict[str, Any] = {}
    for key, value in data.items():
        name = f"{prefix}{str(key).lower()}"
        if isinstance(value, Mapping):
            flat.update(_flatten(value, name + "."))
        else:
            flat[name] = value
    return flat


def _parse_properties(text: str) -> dict[str, str]:
    values: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line[0] in "#!":
            continue
        match = re.match(r"([^=:]*?)\s*[=:]\s*(.*)$", line)
        if match:
            values[match.group(1)] = match.group(2)
        else:
            values[line] = ""
    return values


def _parse_ini(text: str) -> dict[str, dict[str, str]]:
    parser = configparser.ConfigParser(
        default_section="\x00", interpolation=None, strict=False
    )
    parser.optionxform = str  # type: ignore[assignment,method-assign]
    parser.read_string("[default]\n" + text)
    return {section: dict(parser.items(section)) for section in parser.sections()}


def _parse(config_type: str, text: str) -> dict[str, Any]:
    try:
        match config_type:
            case "json":
                data = json.loads(text)
            case "toml":
                data = tomllib.loads(text)
            case "yaml" | "yml":
                data = yaml.safe_load(text) or {}
            case "env" | "dotenv":
                data = {
                    key: value or ""
                    for key, value in dotenv_values(stream=io.StringIO(text)).items()
                }
            case "properties" | "props" | "prop":
                data = _parse_properties(text)
            case "ini":
                data = _parse_ini(text)
            case _:
                raise UnsupportedConfigTypeError(config_type)
    except (json.JSONDecodeError, tomllib.TOMLDecodeError, yaml.YAMLError, configparser.Error) as exc:
        raise ValueError(f"While parsing config: {exc}") from exc
    if not isinstance(data, Mapping):
        raise ValueError("While parsing config: top-level value is not a mapping")
    return _flatten(data)


def _to_string(value: Any) -> str:
    if value is None or isinstance(value, (Mapping, list, tuple, set)):
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _to_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        return value in _TRUE_STRINGS
    return False


def _to_int(value: Any) -> int:
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)
    if not isinstance(value, str):
        return 0
    text = value
    trimmed = re.fullmatch(r"(.+)\.0*", text)
    if trimmed:
        text = trimmed.group(1)
    try:
        return int(text, 0)
    except ValueError:
        if re.fullmatch(r"[+-]?0[0-7_]+", text):
            return int(text, 8)
        return 0


class Config:
    """Reads keys from the environment first, then a config file, then defaults."""

    def __init__(self) -> None:
        self._defaults: dict[str, Any] = {}
        self._file_values: dict[str, Any] = {}

    def _lookup(self, key: str) -> Any:
        env_value = os.environ.get(key.upper())
        if env_value:
            return env_value
        name = key.lower()
        if name in self._file_values:
            return self._file_values[name]
        return self._defaults.get(name)

    def get_string(self, key: str) -> str:
        """Return the value of a key as a string, or an empty string."""
        return _to_string(self._lookup(key))

    def get_bool(self, key: str) -> bool:
        """Return the value of a key as a boolean, false when absent."""
        return _to_bool(self._lookup(key))

    def get_int(self, key: str) -> int:
        """Return the value of a key as an integer, zero when absent or invalid."""
        return _to_int(self._lookup(key))

    def set_default(self, key: str, value: Any) -> None:
        """Give a key a value used when nothing else sets it."""
        name = key.lower()
        if isinstance(value, Mapping):
            self._defaults.update(_flatten(value, name + "."))
        else:
            self._defaults[name] = value

    def load_config_file(self, path: str, config_type: str, config_file: str) -> None:
        """Read a config file if it exists; a missing file is not an error."""
        target = f"{path}/{config_file}"
        if not os.path.exists(target):
            return
        if config_type not in SUPPORTED_CONFIG_TYPES:
            raise UnsupportedConfigTypeError(config_type)
        with open(target, encoding="utf-8") as handle:
            text = handle.read()
        self._file_values = _parse(config_type, text)