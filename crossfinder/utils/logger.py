"""Logging utilities for the crossing finder."""

from __future__ import annotations

import logging
from typing import Optional, Union

LOG_FORMAT = "%(asctime)s | %(levelname)-7s | %(name)s | %(message)s"


def resolve_level(level: Union[int, str, None], default: int = logging.WARNING) -> int:
    """Accept ``logging`` constants or their names ("debug", "INFO", ...)."""

    if isinstance(level, int):
        return level
    if not level:
        return default
    value = logging.getLevelName(level.strip().upper())
    return value if isinstance(value, int) else default


def configure_logging(level: Union[int, str] = logging.INFO) -> None:
    """Install a single compact stderr handler on the root logger.

    Solve requests can be dispatched on every keystroke, so per-request logs
    stay at DEBUG and a session normally runs at WARNING.
    """

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt="%H:%M:%S"))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(resolve_level(level, default=logging.INFO))


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a namespaced logger, configuring defaults if needed."""

    if not logging.getLogger().handlers:
        configure_logging()
    return logging.getLogger(name or "crossfinder")
