"""Logging helpers for the application.

`get_logger` hands out loggers that share one stream handler and one rotating
file handler, so engine, API and AI client output all land in the same place.
"""

import logging
import os
from logging.handlers import RotatingFileHandler

from core.config import LOG_DIR, LOG_LEVEL

os.makedirs(LOG_DIR, exist_ok=True)

LOG_FILE = os.path.join(LOG_DIR, "fittrack.log")

_formatter = logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s")

_stream_handler = logging.StreamHandler()
_stream_handler.setFormatter(_formatter)

_file_handler = RotatingFileHandler(LOG_FILE, maxBytes=5 * 1024 * 1024, backupCount=3)
_file_handler.setFormatter(_formatter)

_default_level = logging.getLevelName(LOG_LEVEL)
if not isinstance(_default_level, int):
    _default_level = logging.INFO


def get_logger(name: str = __name__, level: int = None) -> logging.Logger:
    """Return a logger wired to the shared stream and file handlers.

    Handlers are attached once per logger name; repeated calls return the
    same configured logger.
    """
    logger = logging.getLogger(name)
    if not logger.handlers:
        logger.setLevel(level if level is not None else _default_level)
        logger.addHandler(_stream_handler)
        logger.addHandler(_file_handler)
    return logger
