"""Centralized logging helpers.

Provides one-time logging configuration driven by environment variables and
small helpers for structured DEBUG traces (``extra_context``) and timing.
"""
from __future__ import annotations

import json
import logging
import os
import sys
import threading
import time
from typing import Any, Dict, Optional

from constants import Constants

# Attributes present on every LogRecord; anything else came in through ``extra``.
_RESERVED_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None)).keys()
) | {"message", "asctime"}


class JsonFormatter(logging.Formatter):
    """Render records as single-line JSON including ``extra`` context fields."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "ts": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key, value in vars(record).items():
            if key not in _RESERVED_ATTRS and not key.startswith("_"):
                payload[key] = value
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


class LoggingInitContext:
    """Owns the once-per-process handler installation.

    The lock makes concurrent ``configure`` calls install exactly one handler.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._handler: Optional[logging.Handler] = None

    @property
    def configured(self) -> bool:
        return self._handler is not None

    def configure(self, level: Optional[str] = None, fmt: Optional[str] = None, force: bool = False) -> logging.Handler:
        """Install the root handler once; later calls only adjust the level.

        Args:
            level: Log level name; defaults to the ``SKEVER_LOG_LEVEL`` env var.
            fmt: ``human`` or ``json``; defaults to the ``SKEVER_LOG_FORMAT`` env var.
            force: Replace a previously installed handler.

        Returns:
            The installed handler.
        """
        level_name = (level or os.environ.get(Constants.ENV_LOG_LEVEL) or Constants.DEFAULT_LOG_LEVEL).upper()
        level_value = getattr(logging, level_name, None)
        if not isinstance(level_value, int):
            level_value = getattr(logging, Constants.DEFAULT_LOG_LEVEL)
        fmt_name = (fmt or os.environ.get(Constants.ENV_LOG_FORMAT) or "human").lower()
        if fmt_name not in Constants.LOG_FORMATS:
            fmt_name = "human"

        root = logging.getLogger()
        with self._lock:
            if self._handler is not None and force:
                root.removeHandler(self._handler)
                self._handler = None
            if self._handler is None:
                handler = logging.StreamHandler(sys.stderr)
                if fmt_name == "json":
                    handler.setFormatter(JsonFormatter())
                else:
                    handler.setFormatter(logging.Formatter(Constants.LOG_FORMAT))
                root.addHandler(handler)
                self._handler = handler
            root.setLevel(level_value)
            return self._handler

    def reset(self) -> None:
        """Remove the installed handler (used by tests)."""
        with self._lock:
            if self._handler is not None:
                logging.getLogger().removeHandler(self._handler)
                self._handler = None


_INIT = LoggingInitContext()


def configure_logging(level: Optional[str] = None, fmt: Optional[str] = None, force: bool = False) -> logging.Handler:
    """Configure root logging for library consumers and tests."""
    return _INIT.configure(level=level, fmt=fmt, force=force)


def extra_context(**fields: Any) -> Dict[str, Any]:
    """Build an ``extra`` mapping for structured log calls, dropping None values."""
    return {k: v for k, v in fields.items() if v is not None}


def is_debug_enabled(logger: logging.Logger) -> bool:
    """Return True when DEBUG records would be emitted by ``logger``."""
    return logger.isEnabledFor(logging.DEBUG)


class Timer:
    """Context manager measuring elapsed wall time in milliseconds."""

    def __init__(self) -> None:
        self._start = 0.0
        self._end: Optional[float] = None

    def __enter__(self) -> "Timer":
        self._start = time.perf_counter()
        self._end = None
        return self

    def __exit__(self, *exc: Any) -> None:
        self._end = time.perf_counter()

    def duration_ms(self) -> float:
        end = self._end if self._end is not None else time.perf_counter()
        return round((end - self._start) * 1000.0, 3)
