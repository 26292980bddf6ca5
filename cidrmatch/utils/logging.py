# cidrmatch/utils/logging.py

from __future__ import annotations
import logging
import os
import sys
from typing import Optional

ROOT_LOGGER_NAME = "cidrmatch"
LOG_LEVEL_ENV = "CIDR_MATCH_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"

_handler: Optional[logging.StreamHandler] = None


def level_from_env(default: int = logging.WARNING) -> int:
    raw = os.environ.get(LOG_LEVEL_ENV)
    if not raw:
        return default
    level = logging.getLevelName(raw.strip().upper())
    # getLevelName returns "Level X" for unknown names
    return level if isinstance(level, int) else default


def configure_logging(level: Optional[int] = None) -> logging.Logger:
    """
    Send package logs to the current stderr.

    Safe to call more than once: the single handler is rebound to whatever
    sys.stderr is now and only the level changes. When `level` is None it
    comes from CIDR_MATCH_LOG_LEVEL (default WARNING).
    """
    global _handler

    root = logging.getLogger(ROOT_LOGGER_NAME)
    if _handler is None:
        _handler = logging.StreamHandler(sys.stderr)
        _handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(_handler)
    else:
        # setStream() would flush the old stream, which may already be closed
        _handler.stream = sys.stderr

    root.setLevel(level if level is not None else level_from_env())
    return root


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the package namespace."""
    if name != ROOT_LOGGER_NAME and not name.startswith(ROOT_LOGGER_NAME + "."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)
