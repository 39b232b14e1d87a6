"""Logging setup shared by every CorpSocial module."""

from __future__ import annotations

import logging
import os

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_root_configured = False


def _level_from_env() -> int:
    level = logging.getLevelName(os.getenv("CORPSOCIAL_LOG_LEVEL", "INFO").strip().upper())
    return level if isinstance(level, int) else logging.INFO


def _configure_root(level: int) -> None:
    global _root_configured
    if _root_configured:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
    root = logging.getLogger()
    root.addHandler(handler)
    root.setLevel(level)
    _root_configured = True


def get_logger(name: str) -> logging.Logger:
    """Module logger at CORPSOCIAL_LOG_LEVEL; the root handler is attached on first use."""
    level = _level_from_env()
    _configure_root(level)
    logger = logging.getLogger(name)
    logger.setLevel(level)
    return logger
