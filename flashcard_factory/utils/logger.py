"""Logging setup."""

import logging
import sys
from typing import Optional

from ..config import SettingsManager

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%H:%M:%S"


def setup_logger(name: str = "flashcard_factory", level: Optional[str] = None) -> logging.Logger:
    """
    Configure the application logger.

    Installs a single stream handler; calling it again only updates the level.

    Args:
        name: Logger name (package root by default)
        level: Level name, e.g. "DEBUG". Defaults to the LOG_LEVEL setting.

    Returns:
        The configured logger
    """
    if level is None:
        level = SettingsManager().get("LOG_LEVEL", "INFO")

    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, str(level).upper(), logging.INFO))

    if not any(getattr(h, "_flashcard_handler", False) for h in logger.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
        handler._flashcard_handler = True
        logger.addHandler(handler)

    return logger
