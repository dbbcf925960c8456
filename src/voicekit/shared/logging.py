"""
JSON logging for voicekit.

Each record becomes one JSON line. Anything passed via ``extra={...}`` is
merged into the line, and the session id of the inbound call being handled
is attached as ``correlation_id`` while ``bind_correlation_id`` is active.
The level always comes from ``Settings.log_level``.
"""

import json
import logging
import sys
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, Iterator

from voicekit.config import get_settings

correlation_id_var: ContextVar[str | None] = ContextVar("correlation_id", default=None)

# Attributes every LogRecord carries; anything else arrived through ``extra``.
_RECORD_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None))
) | {"message", "asctime"}

_QUIET_LOGGERS = ("httpx", "httpcore", "python_multipart", "python_multipart.multipart")


class StructuredFormatter(logging.Formatter):
    """Render a record as a single JSON object."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        correlation_id = correlation_id_var.get()
        if correlation_id:
            entry["correlation_id"] = correlation_id

        for key, value in vars(record).items():
            if key in _RECORD_ATTRS:
                continue
            # Never let an extra field shadow one of the fixed keys above.
            entry[f"extra_{key}" if key in entry else key] = value

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


def _configured_level() -> int:
    level = logging.getLevelName(get_settings().log_level.upper())
    return level if isinstance(level, int) else logging.INFO


def _json_handler() -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(StructuredFormatter())
    return handler


def get_logger(name: str) -> logging.Logger:
    """Return the named logger at the configured level.

    A JSON handler is attached only when nothing (the logger or root) has
    one yet, so applications that call ``setup_logging`` or configure
    logging themselves are not duplicated.
    """
    logger = logging.getLogger(name)
    if not logger.handlers and not logging.getLogger().handlers:
        logger.addHandler(_json_handler())
    logger.setLevel(_configured_level())
    return logger


def setup_logging() -> None:
    """Route all logging through one JSON handler on the root logger."""
    root = logging.getLogger()
    root.handlers = [_json_handler()]
    root.setLevel(_configured_level())

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


@contextmanager
def bind_correlation_id(value: Any) -> Iterator[None]:
    """Tag every record logged inside the block with ``value``."""
    token = correlation_id_var.set(None if value is None else str(value))
    try:
        yield
    finally:
        correlation_id_var.reset(token)
