"""
Logging setup for MentorLink.

Every module logs through a child of the ``mentorlink`` logger, which gets a
single stdout handler the first time ``configure_logging`` runs.
"""

import logging
import sys

ROOT_LOGGER = "mentorlink"

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(level: str = "INFO") -> logging.Logger:
    """
    Attach a console handler to the package logger and set its level.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)

    Returns:
        The package root logger
    """
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    logger.handlers.clear()  # Remove existing handlers

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(console_handler)
    return logger


def get_logger(name: str) -> logging.Logger:
    """Return a logger nested under the package logger."""
    if name == ROOT_LOGGER or name.startswith(ROOT_LOGGER + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")
