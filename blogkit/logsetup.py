"""Set up the package's logging level and output format."""

from __future__ import annotations

import json
import logging
import sys
import time

TRACE_LEVEL = "trace"
DEBUG_LEVEL = "debug"
INFO_LEVEL = "info"
WARN_LEVEL = "warn"
FATAL_LEVEL = "fatal"

DEVELOPMENT = "development"
PRODUCTION = "production"

TRACE = 5
PANIC = logging.CRITICAL + 10
DISABLED = logging.CRITICAL + 20

DEFAULT_LEVEL_STR = TRACE_LEVEL
DEFAULT_LEVEL = TRACE

LOGGER_NAME = "blogkit"

logging.addLevelName(TRACE, "TRACE")
logging.addLevelName(PANIC, "PANIC")

_LEVELS = {
    TRACE_LEVEL: TRACE,
    DEBUG_LEVEL: logging.DEBUG,
    INFO_LEVEL: logging.INFO,
    WARN_LEVEL: logging.WARNING,
    "error": logging.ERROR,
    FATAL_LEVEL: logging.CRITICAL,
    "panic": PANIC,
    "disabled": DISABLED,
}
_NAMES = {value: key for key, value in _LEVELS.items()}
_SHORT = {
    TRACE: "TRC",
    logging.DEBUG: "DBG",
    logging.INFO: "INF",
    logging.WARNING: "WRN",
    logging.ERROR: "ERR",
    logging.CRITICAL: "FTL",
    PANIC: "PNC",
}


def parse_level(level: str) -> int:
    """Turn a level name into a logging level number."""
    try:
        return _LEVELS[level.lower()]
    except KeyError:
        raise ValueError(f"Unknown Level String: '{level}', defaulting to NoLevel") from None


class _StderrHandler(logging.Handler):
    """Writes to whatever sys.stderr is at the time of each record."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            sys.stderr.write(self.format(record) + "\n")
            sys.stderr.flush()
        except Exception:
            self.handleError(record)


class _JsonFormatter(logging.Formatter):
    def __init__(self, with_caller: bool) -> None:
        super().__init__()
        self._with_caller = with_caller

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, object] = {
            "level": _NAMES.get(record.levelno, record.levelname.lower()),
            "time": int(record.created),
        }
        if self._with_caller:
            entry["caller"] = f"{record.pathname}:{record.lineno}"
        if record.exc_info:
            entry["error"] = str(record.exc_info[1])
        entry["message"] = record.getMessage()
        return json.dumps(entry)


class _ConsoleFormatter(logging.Formatter):
    def __init__(self, with_caller: bool) -> None:
        super().__init__()
        self._with_caller = with_caller

    def format(self, record: logging.LogRecord) -> str:
        parts = [
            time.strftime("%H:%M:%S", time.localtime(record.created)),
            _SHORT.get(record.levelno, record.levelname[:3].upper()),
        ]
        if self._with_caller:
            parts.append(f"{record.pathname}:{record.lineno} >")
        parts.append(record.getMessage())
        if record.exc_info:
            parts.append(f"error={record.exc_info[1]}")
        return " ".join(parts)


def init_logger(level: str, environment: str) -> int:
    """Configure the package logger and return the level it was set to."""
    error: ValueError | None = None
    try:
        parsed = parse_level(level or DEFAULT_LEVEL_STR)
    except ValueError as exc:
        error = exc
        parsed = DEFAULT_LEVEL

    with_caller = parsed == logging.DEBUG
    handler = _StderrHandler()
    if environment == DEVELOPMENT:
        handler.setFormatter(_ConsoleFormatter(with_caller))
    else:
        handler.setFormatter(_JsonFormatter(with_caller))

    logger = logging.getLogger(LOGGER_NAME)
    for old in list(logger.handlers):
        logger.removeHandler(old)
    logger.addHandler(handler)
    logger.setLevel(parsed)
    logger.propagate = False

    if error is not None:
        logger.error(str(error))
    return parsed