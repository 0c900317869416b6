"""Logging utilities for jsoncfmt.

All package modules log through `get_logger`, which hangs a single stderr
handler off a `jsoncfmt.<name>` logger.
"""
from __future__ import annotations
import logging
import os
from typing import Dict, Optional

DEFAULT_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DEFAULT_DATE_FORMAT = "%H:%M:%S"
LEVEL_ENV = "JSONCFMT_LOG_LEVEL"

_loggers: Dict[str, logging.Logger] = {}

def get_logger(name: str, level: Optional[str] = None) -> logging.Logger:
    """Get a configured logger, e.g. get_logger("lexer") -> jsoncfmt.lexer."""
    full_name = f"jsoncfmt.{name}"
    if full_name in _loggers:
        return _loggers[full_name]

    logger = logging.getLogger(full_name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(DEFAULT_FORMAT, datefmt=DEFAULT_DATE_FORMAT))
        logger.addHandler(handler)
        env_level = level or os.environ.get(LEVEL_ENV, "WARNING")
        logger.setLevel(getattr(logging, env_level.upper(), logging.WARNING))
        logger.propagate = False

    _loggers[full_name] = logger
    return logger

def set_level(level: str) -> None:
    """Change the level of every logger handed out so far."""
    for logger in _loggers.values():
        logger.setLevel(getattr(logging, level.upper(), logging.WARNING))
