"""Application-wide structured logging."""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime
from typing import Any

_logger = logging.getLogger("gophermart")
_logger.propagate = False

_LEVEL_NAMES = {
    logging.DEBUG: "debug",
    logging.INFO: "info",
    logging.WARNING: "warn",
    logging.ERROR: "error",
}


def _level_name(record: logging.LogRecord) -> str:
    return _LEVEL_NAMES.get(record.levelno, record.levelname.lower())


class _JSONFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "level": _level_name(record),
            "ts": record.created,
            "msg": record.getMessage(),
        }
        entry.update(getattr(record, "fields", {}))
        if record.exc_info:
            entry["stacktrace"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str, ensure_ascii=False)


class _ConsoleFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        ts = datetime.fromtimestamp(record.created).isoformat(timespec="milliseconds")
        line = f"{ts}\t{_level_name(record).upper()}\t{record.getMessage()}"
        fields = getattr(record, "fields", None)
        if fields:
            line += "\t" + json.dumps(fields, default=str, ensure_ascii=False)
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


def init(is_dev: bool) -> None:
    """Configure the logger: human-readable in development, JSON otherwise."""
    for handler in list(_logger.handlers):
        _logger.removeHandler(handler)
        handler.close()

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(_ConsoleFormatter() if is_dev else _JSONFormatter())
    _logger.addHandler(handler)
    _logger.setLevel(logging.DEBUG if is_dev else logging.INFO)


def destroy() -> None:
    """Flush any buffered log output."""
    for handler in _logger.handlers:
        handler.flush()


def _log(level: int, msg: str, args: tuple, fields: dict[str, Any]) -> None:
    _logger.log(level, msg, *args, extra={"fields": fields})


def info(msg: str, *args: Any, **kwargs: Any) -> None:
    """Log at INFO; positional args format the message, keywords become fields."""
    _log(logging.INFO, msg, args, kwargs)


def warn(msg: str, *args: Any, **kwargs: Any) -> None:
    """Log at WARN; positional args format the message, keywords become fields."""
    _log(logging.WARNING, msg, args, kwargs)


def error(msg: str, *args: Any, **kwargs: Any) -> None:
    """Log at ERROR; positional args format the message, keywords become fields."""
    _log(logging.ERROR, msg, args, kwargs)