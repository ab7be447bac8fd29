"""Logging setup for the ``railmux`` logger tree.

Modules log through ``logging.getLogger("railmux.<area>")``. This module
installs a single stderr handler on the ``railmux`` root with either a
human-readable or a JSON Lines formatter. stdout is never used because it
carries the MCP stdio transport.

Quick Start:
    >>> from railmux.runtime.observability import configure_logging
    >>> configure_logging(level="DEBUG", format="json")
"""

from __future__ import annotations

import logging
import sys
from datetime import UTC, datetime
from typing import TextIO

import orjson

ROOT_LOGGER = "railmux"

# LogRecord attributes that are not user-supplied `extra` fields
_RESERVED = frozenset(vars(logging.makeLogRecord({})).keys()) | {"message", "asctime"}


def _extras(record: logging.LogRecord) -> dict[str, object]:
    return {k: v for k, v in vars(record).items() if k not in _RESERVED and not k.startswith("_")}


class ConsoleFormatter(logging.Formatter):
    """Format: timestamp [level] logger: message key=value ..."""

    def __init__(self, *, show_timestamp: bool = True) -> None:
        super().__init__()
        self.show_timestamp = show_timestamp

    def format(self, record: logging.LogRecord) -> str:
        parts = []
        if self.show_timestamp:
            parts.append(datetime.fromtimestamp(record.created, tz=UTC).strftime("%H:%M:%S.%f")[:-3])
        parts += [f"[{record.levelname.lower()}]", f"{record.name}:", record.getMessage()]
        parts += [f"{k}={v}" for k, v in sorted(_extras(record).items())]
        line = " ".join(parts)
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line


class JsonFormatter(logging.Formatter):
    """JSON Lines output for log aggregation."""

    def __init__(self, *, show_timestamp: bool = True) -> None:
        super().__init__()
        self.show_timestamp = show_timestamp

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, object] = {
            "level": record.levelname.lower(),
            "logger": record.name,
            "event": record.getMessage(),
            **_extras(record),
        }
        if self.show_timestamp:
            payload["timestamp"] = datetime.fromtimestamp(record.created, tz=UTC).isoformat()
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return orjson.dumps(payload, default=str, option=orjson.OPT_NON_STR_KEYS).decode()


def configure_logging(
    level: str = "INFO",
    format: str = "text",  # noqa: A002 - matches the settings field name
    *,
    output: TextIO | None = None,
    show_timestamp: bool = True,
) -> logging.Logger:
    """Configure the ``railmux`` logger. Format: "text" (human) or "json" (machine).

    Calling it again replaces the previously installed handler.
    """
    match format:
        case "text": formatter: logging.Formatter = ConsoleFormatter(show_timestamp=show_timestamp)
        case "json": formatter = JsonFormatter(show_timestamp=show_timestamp)
        case _: raise ValueError(f"Unknown format: {format}. Use 'text' or 'json'")

    root = logging.getLogger(ROOT_LOGGER)
    for handler in list(root.handlers):
        if getattr(handler, "_railmux", False):
            root.removeHandler(handler)

    handler = logging.StreamHandler(output or sys.stderr)
    handler.setFormatter(formatter)
    handler._railmux = True  # type: ignore[attr-defined]
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    root.propagate = False
    return root
