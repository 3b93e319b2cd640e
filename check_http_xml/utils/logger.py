"""Structured JSON logging configuration."""

import logging
import sys
from pythonjsonlogger import jsonlogger


def setup_logger(name: str = "check_http_xml", level: str = "WARNING") -> logging.Logger:
    """
    Configure structured JSON logging.

    Log records go to stderr; stdout carries only the plugin status line.

    Args:
        name: Logger name
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)

    Returns:
        logging.Logger: Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, level.upper()))

    # Remove existing handlers to avoid duplicates
    logger.handlers = []

    handler = logging.StreamHandler(sys.stderr)
    formatter = jsonlogger.JsonFormatter(
        '%(asctime)s %(name)s %(levelname)s %(message)s',
        timestamp=True
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)

    # Don't propagate to root logger
    logger.propagate = False

    return logger


def level_for_verbosity(verbosity: int, default: str = "WARNING") -> str:
    """
    Map the number of -v flags to a log level name.

    Args:
        verbosity: How many times -v was given
        default: Level used when -v is absent

    Returns:
        str: Log level name
    """
    if verbosity >= 2:
        return "DEBUG"
    if verbosity == 1:
        return "INFO"
    return default
