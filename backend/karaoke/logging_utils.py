"""Logging configuration for the karaoke API."""

import logging
import sys


LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(level: str = "INFO") -> logging.Logger:
    """
    Configure the ``karaoke`` logger to write to stdout.

    Safe to call more than once; handlers are only added the first time.

    Args:
        level: Log level name, e.g. "DEBUG"

    Returns:
        The package logger
    """
    logger = logging.getLogger("karaoke")
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
        logger.addHandler(handler)
        logger.propagate = False

    return logger
