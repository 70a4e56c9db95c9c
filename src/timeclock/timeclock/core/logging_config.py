"""Logging setup for the timeclock package.

All loggers live under the ``timeclock`` namespace so the app can be
configured once at startup without touching the root logger.
"""

from __future__ import annotations

import logging
import sys
import threading
from typing import Any, Optional

_LOGGER_PREFIX = "timeclock"
_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

_configured = False
_lock = threading.Lock()


class KeyValueFormatter(logging.Formatter):
    """Append ``extra`` fields to the message as key=value pairs."""

    _STDLIB_KEYS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", (), None)).keys()) | {"message", "asctime", "taskName"}

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        extras = [f"{k}={v}" for k, v in sorted(vars(record).items()) if k not in self._STDLIB_KEYS]
        if extras:
            line = f"{line} {' '.join(extras)}"
        return line


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the timeclock namespace."""
    return logging.getLogger(f"{_LOGGER_PREFIX}.{name}")


def configure_logging(*, level: int | str = logging.INFO, stream: Any = None, handler: Optional[logging.Handler] = None) -> None:
    """Configure the timeclock logger hierarchy (idempotent)."""
    global _configured
    with _lock:
        if _configured:
            return
        _configured = True

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logger = logging.getLogger(_LOGGER_PREFIX)
    logger.setLevel(level)
    logger.propagate = False

    h = handler or logging.StreamHandler(stream or sys.stderr)
    h.setFormatter(KeyValueFormatter(_FORMAT))
    logger.addHandler(h)


def reset_logging() -> None:
    """Drop handlers installed by configure_logging (used by tests)."""
    global _configured
    with _lock:
        _configured = False
    logger = logging.getLogger(_LOGGER_PREFIX)
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
