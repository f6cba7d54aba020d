"""
Process-wide logging setup.

All package loggers are children of "fantoken_chart", so one stream handler on
that logger serves the application and infrastructure layers alike.
"""

import logging
import os
from typing import Optional

ROOT_LOGGER = "fantoken_chart"
_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def configure_logging(level: Optional[str] = None) -> logging.Logger:
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel((level or os.getenv("LOG_LEVEL", "INFO")).upper())
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_FORMAT))
        logger.addHandler(handler)
    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    if not name or name == ROOT_LOGGER:
        return logging.getLogger(ROOT_LOGGER)
    if name.startswith(ROOT_LOGGER + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")
