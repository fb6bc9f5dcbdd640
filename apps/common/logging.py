"""Application logger.

One stream handler per logger name; the Streamlit server runs every browser
session in the same process, so handlers must not be attached twice.
"""
from __future__ import annotations

import logging
import threading
from typing import Dict

from apps.common.settings import log_level_name

_LOCK = threading.Lock()
_LOGGERS: Dict[str, logging.Logger] = {}

LOG_FORMAT = "[bookreview] %(asctime)s %(levelname)s %(name)s %(message)s"


def get_logger(name: str = "bookreview") -> logging.Logger:
    cached = _LOGGERS.get(name)
    if cached is not None:
        return cached
    with _LOCK:
        cached = _LOGGERS.get(name)
        if cached is not None:
            return cached
        logger = logging.getLogger(name)
        logger.setLevel(getattr(logging, log_level_name(), logging.INFO))
        if not any(isinstance(h, logging.StreamHandler) for h in logger.handlers):
            handler = logging.StreamHandler()
            handler.setFormatter(logging.Formatter(LOG_FORMAT))
            logger.addHandler(handler)
        logger.propagate = False
        _LOGGERS[name] = logger
        return logger


__all__ = ["get_logger", "LOG_FORMAT"]
