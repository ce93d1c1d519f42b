"""
logging_config.py — Logging Setup for the Relay Service

Called once when the application is built. All modules log through the root
logger configured here, so every line shares the same format and destinations.

Features:
    • stdout output (container friendly) plus an optional log file
    • Process ID in every line
    • httpx / httpcore / uvicorn access logs limited to warnings
"""

import logging
import sys

from .config import Settings

LOG_FORMAT = '%(asctime)s - %(levelname)s - [PID:%(process)d] - %(message)s'

NOISY_LOGGERS = ("httpx", "httpcore", "uvicorn.access")


def setup_logging(settings: Settings):
    """
    Installs the root logging configuration.

    Args:
        settings (Settings): `LOG_LEVEL` sets the level, `LOG_FILE` adds a file
            handler next to stdout (no file when empty).
    """
    handlers = [logging.StreamHandler(sys.stdout)]
    if settings.LOG_FILE:
        handlers.append(logging.FileHandler(settings.LOG_FILE))

    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        force=True,
        format=LOG_FORMAT,
        handlers=handlers,
    )

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name):
    """Returns the logger for a module; pass `__name__`."""
    return logging.getLogger(name)
