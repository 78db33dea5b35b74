"""JSON logging for booktracker.

Every module logs through a child of the single ``booktracker`` logger.
Records are rendered as one JSON object per line; values bound with
:func:`log_context` (a request id, a user id) are copied onto each record
emitted while the context is active.
"""

from __future__ import annotations

import contextlib
import contextvars
import json
import logging
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Dict, Iterator, Optional, Union

LOGGER_NAME = "booktracker"
DEFAULT_LOG_LEVEL = logging.INFO
LOG_FILE_MAX_BYTES = 5 * 1024 * 1024
LOG_FILE_BACKUPS = 5

_logger: Optional[logging.Logger] = None
_file_handler: Optional[RotatingFileHandler] = None
_context: contextvars.ContextVar[Dict[str, object]] = contextvars.ContextVar(
    "booktracker_log_context", default={}
)

# Attributes every LogRecord carries; anything else arrived through ``extra``.
_STANDARD_ATTRIBUTES = frozenset(
    logging.LogRecord("", logging.NOTSET, "", 0, "", (), None).__dict__
) | {"message", "asctime", "taskName"}


class JSONLogFormatter(logging.Formatter):
    """Serialise a record into a single JSON line."""

    # Promoted to the top level of the payload when present.
    DEFAULT_FIELDS: tuple[str, ...] = (
        "request_id",
        "user_id",
        "event",
        "duration_ms",
        "status",
    )

    def format(self, record: logging.LogRecord) -> str:  # noqa: D401
        payload: Dict[str, object] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        extra: Dict[str, object] = {}
        for key, value in record.__dict__.items():
            if key in _STANDARD_ATTRIBUTES or value is None:
                continue
            if key in self.DEFAULT_FIELDS:
                payload[key] = value
            else:
                extra[key] = value
        if extra:
            payload["extra"] = extra
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)


class LogContextFilter(logging.Filter):
    """Copy the active :func:`log_context` values onto each record."""

    def filter(self, record: logging.LogRecord) -> bool:  # noqa: D401
        for key, value in _context.get().items():
            if not hasattr(record, key):
                setattr(record, key, value)
        return True


def _replace_file_handler(logger: logging.Logger, log_file: Path) -> None:
    global _file_handler
    target = log_file.expanduser().resolve()
    if _file_handler is not None:
        if Path(_file_handler.baseFilename) == target:
            return
        logger.removeHandler(_file_handler)
        _file_handler.close()

    target.parent.mkdir(parents=True, exist_ok=True)
    _file_handler = RotatingFileHandler(
        target, maxBytes=LOG_FILE_MAX_BYTES, backupCount=LOG_FILE_BACKUPS
    )
    _file_handler.setFormatter(JSONLogFormatter())
    _file_handler.addFilter(LogContextFilter())
    logger.addHandler(_file_handler)


def setup_logging(
    log_level: Union[int, str] = DEFAULT_LOG_LEVEL, log_file: Optional[Path] = None
) -> logging.Logger:
    """Install the JSON stream handler once and apply ``log_level``.

    ``log_file`` adds (or moves) a size-rotated file handler. Safe to call
    repeatedly; the CLI and the app factory both do.
    """
    global _logger

    if _logger is None:
        logger = logging.getLogger(LOGGER_NAME)
        logger.propagate = False
        stream_handler = logging.StreamHandler()
        stream_handler.setFormatter(JSONLogFormatter())
        # Logger-level filters do not see records from child loggers.
        stream_handler.addFilter(LogContextFilter())
        logger.addHandler(stream_handler)
        _logger = logger

    if log_file is not None:
        _replace_file_handler(_logger, Path(log_file))

    set_log_level(log_level)
    return _logger


def get_logger() -> logging.Logger:
    """Return the ``booktracker`` logger, configuring defaults on first use."""
    return _logger if _logger is not None else setup_logging()


def resolve_level(name: Union[int, str]) -> int:
    """Translate ``"debug"`` and friends into the numeric level."""

    if isinstance(name, int):
        return name
    value = logging.getLevelName(name.strip().upper())
    if isinstance(value, int):
        return value
    raise ValueError(f"Unknown log level: {name!r}")


def set_log_level(level: Union[int, str]) -> int:
    logger = get_logger()
    numeric = resolve_level(level)
    logger.setLevel(numeric)
    for handler in logger.handlers:
        handler.setLevel(numeric)
    return numeric


@contextlib.contextmanager
def log_context(**values: object) -> Iterator[None]:
    """Bind ``values`` to every record logged inside the block."""

    merged = dict(_context.get())
    merged.update({key: value for key, value in values.items() if value is not None})
    token = _context.set(merged)
    try:
        yield
    finally:
        _context.reset(token)


def get_log_context() -> Dict[str, object]:
    return dict(_context.get())


__all__ = [
    "JSONLogFormatter",
    "LogContextFilter",
    "get_log_context",
    "get_logger",
    "log_context",
    "resolve_level",
    "set_log_level",
    "setup_logging",
]
