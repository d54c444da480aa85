"""
api/logging_config.py — Logging setup for the harmony HTTP service.

Responsibilities:
    - Configure structured logging to stderr
    - Resolve the log level from the HARMONY_LOG_LEVEL environment variable

The engine itself (core/harmony) only creates module loggers; handlers and
levels are configured here, once, by the application entry point.
"""

from __future__ import annotations

import logging
import os
import sys

_LOG_FORMAT = "%(asctime)s.%(msecs)03d " "[%(name)s] %(levelname)s " "%(message)s"
_LOG_DATE_FORMAT = "%H:%M:%S"

_LEVELS: dict[str, int] = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


def get_log_level(default: int = logging.INFO) -> int:
    """
    Read the log level from HARMONY_LOG_LEVEL ("debug", "info", "warning", "error").

    Unknown values fall back to ``default`` with a warning.
    """
    raw = os.getenv("HARMONY_LOG_LEVEL", "").lower().strip()
    if not raw:
        return default
    if raw not in _LEVELS:
        logging.getLogger(__name__).warning(
            "Unknown HARMONY_LOG_LEVEL=%r — falling back to %s", raw, logging.getLevelName(default)
        )
        return default
    return _LEVELS[raw]


def configure_logging(level: int | None = None) -> None:
    """
    Configure the root logger to write structured output to stderr.

    Args:
        level: Python logging level; HARMONY_LOG_LEVEL (or INFO) when None
    """
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(fmt=_LOG_FORMAT, datefmt=_LOG_DATE_FORMAT))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level if level is not None else get_log_level())

    # Silence noisy third-party loggers that write INFO spam
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
