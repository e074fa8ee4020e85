"""
Structured logging for buffer lifecycle and resize events.

Every lenstr module logs through ``scoped_logger(scope)`` with one of the
scopes ``buffer``, ``array``, ``mutate`` or ``segment``. The records carry a
small fixed set of attributes:

    DEBUG    mutate   "<operation> resized buffer"          length, new_length
    DEBUG    array    "Released StringArray"                length
    WARNING  buffer   "Release of a non-live StringBuffer"  state, handle
    WARNING  mutate   "Resize of exported buffer refused"   operation
    ERROR    segment  "Allocation failed while segmenting"  length

JSON output follows the OpenTelemetry Logging Data Model; the human format is
one colored line per record.

Environment::

    LENSTR_LOG_LEVEL=trace|debug|info|warn|error|fatal|off (default: info)
    LENSTR_LOG_FORMAT=json|human (default: human if tty, json if piped)
"""

from __future__ import annotations

import json
import logging
import os
import sys
from collections.abc import MutableMapping
from datetime import datetime, timezone
from typing import Any

from ._version import __version__

__all__ = ["logger", "setup_logging", "scoped_logger"]

_LEVELS = {
    "trace": logging.DEBUG,
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "fatal": logging.CRITICAL,
    "critical": logging.CRITICAL,
    "off": logging.CRITICAL + 10,
}

# OpenTelemetry severityText
_SEVERITY = {
    logging.DEBUG: "DEBUG",
    logging.INFO: "INFO",
    logging.WARNING: "WARN",
    logging.ERROR: "ERROR",
    logging.CRITICAL: "FATAL",
}

# Attributes lenstr attaches to its records, in display order
_EVENT_ATTRIBUTES = ("operation", "state", "handle", "length", "new_length")

# Records at these levels point at the emitting line
_LOCATED_LEVELS = frozenset({logging.DEBUG, logging.ERROR, logging.CRITICAL})


def _scope(record: logging.LogRecord) -> str:
    return getattr(record, "scope", None) or record.name.rsplit(".", 1)[-1]


def _event_attributes(record: logging.LogRecord) -> dict[str, Any]:
    return {
        name: getattr(record, name)
        for name in _EVENT_ATTRIBUTES
        if getattr(record, name, None) is not None
    }


def _location(record: logging.LogRecord) -> str | None:
    """``path:line`` relative to the package, for located levels only."""
    if record.levelno not in _LOCATED_LEVELS:
        return None
    path = record.pathname.replace("\\", "/")
    marker = path.rfind("lenstr/")
    if marker >= 0:
        path = path[marker + len("lenstr/") :]
    return f"{path}:{record.lineno}"


class JsonFormatter(logging.Formatter):
    """One OpenTelemetry log record per line."""

    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created, tz=timezone.utc)
        attributes: dict[str, Any] = {"scope": _scope(record)}
        attributes.update(_event_attributes(record))

        location = _location(record)
        if location is not None:
            filepath, lineno = location.rsplit(":", 1)
            attributes["code.filepath"] = filepath
            attributes["code.lineno"] = int(lineno)

        return json.dumps(
            {
                "timestamp": f"{created:%Y-%m-%dT%H:%M:%S}.{created.microsecond * 1000:09d}Z",
                "severityText": _SEVERITY.get(record.levelno, "INFO"),
                "body": record.getMessage(),
                "attributes": attributes,
                "resource": {"service.name": "lenstr", "service.version": __version__},
            },
            separators=(",", ":"),
            default=str,
        )


class HumanFormatter(logging.Formatter):
    """``12:00:00 DEBUG [mutate] replace resized buffer (length=3 new_length=6)``"""

    _RESET = "\x1b[0m"
    _CYAN = "\x1b[36m"
    _LEVEL_COLORS = {
        logging.DEBUG: "\x1b[2m",
        logging.WARNING: "\x1b[33m",
        logging.ERROR: "\x1b[31m",
        logging.CRITICAL: "\x1b[31m",
    }

    def __init__(self, use_colors: bool = True) -> None:
        super().__init__()
        self._use_colors = use_colors

    def _paint(self, text: str, color: str | None) -> str:
        if not self._use_colors or not color:
            return text
        return f"{color}{text}{self._RESET}"

    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created, tz=timezone.utc)
        severity = _SEVERITY.get(record.levelno, "INFO")

        line = (
            f"{created:%H:%M:%S} "
            + self._paint(f"{severity:<5} ", self._LEVEL_COLORS.get(record.levelno))
            + self._paint(f"[{_scope(record)}] ", self._CYAN)
            + record.getMessage()
        )

        attributes = _event_attributes(record)
        if attributes:
            line += " (" + " ".join(f"{k}={v}" for k, v in attributes.items()) + ")"

        location = _location(record)
        if location is not None:
            line += self._paint(f" [{location}]", self._LEVEL_COLORS[logging.DEBUG])
        return line


def _get_log_level() -> int:
    name = os.environ.get("LENSTR_LOG_LEVEL", "info")
    return _LEVELS.get(name.lower(), logging.INFO)


def _get_log_format() -> str:
    fmt = os.environ.get("LENSTR_LOG_FORMAT")
    if fmt:
        return fmt.lower()
    return "human" if sys.stderr.isatty() else "json"


def _create_handler(fmt: str) -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    if fmt == "json":
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(HumanFormatter(use_colors=sys.stderr.isatty()))
    return handler


logger = logging.getLogger("lenstr")


def setup_logging(
    level: str | int = "INFO",
    format: str | None = None,
) -> None:
    """
    Configure lenstr logging.

    Parameters
    ----------
    level : str or int, default "INFO"
        Level name ("trace", "debug", "info", "warn", "error", "fatal",
        "off"; case-insensitive) or a ``logging`` constant.

    format : str, optional
        "json" or "human". Defaults to LENSTR_LOG_FORMAT, then to human on
        a terminal and JSON otherwise.

    Examples
    --------
    Trace every buffer reallocation::

        >>> import lenstr
        >>> lenstr.setup_logging("DEBUG", format="human")
    """
    if isinstance(level, str):
        level = _LEVELS.get(level.lower(), logging.INFO)

    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
    logger.addHandler(_create_handler((format or _get_log_format()).lower()))
    logger.setLevel(level)


class _ScopedLoggerAdapter(logging.LoggerAdapter):
    """Adapter whose fixed ``scope`` is merged with per-call ``extra``."""

    def process(
        self, msg: str, kwargs: MutableMapping[str, Any]
    ) -> tuple[str, MutableMapping[str, Any]]:
        kwargs["extra"] = {**(self.extra or {}), **kwargs.get("extra", {})}
        return msg, kwargs


def scoped_logger(scope: str) -> logging.LoggerAdapter:
    """
    Return an adapter on ``lenstr.<scope>`` that tags every record with
    ``scope``.

    Example::

        log = scoped_logger("mutate")
        log.debug("pad resized buffer", extra={"length": 2, "new_length": 6})
    """
    return _ScopedLoggerAdapter(logger.getChild(scope), {"scope": scope})


# Default handler unless the application configured one already
if not logger.handlers:
    logger.addHandler(_create_handler(_get_log_format()))
    logger.setLevel(_get_log_level())
