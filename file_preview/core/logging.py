"""
Logging setup for the preview service
"""

import logging
import sys

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

logger = logging.getLogger("file_preview")


def setup_logging(level: str = "INFO") -> logging.Logger:
    """
    Attach a stream handler to the package logger.

    Safe to call more than once: the handler is only installed the first time,
    later calls just update the level.
    """
    logger.setLevel(level.upper())
    if not any(getattr(h, "_file_preview", False) for h in logger.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._file_preview = True
        logger.addHandler(handler)
    return logger
