"""Logging setup shared by ``main.py`` and ``garden_app.py``."""

from __future__ import annotations

import logging
import os
from typing import Iterable

LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"
LOG_DATEFMT = "%H:%M:%S"
LOG_LEVEL_ENV_VAR = "GARDEN_LOG_LEVEL"


def resolve_level(level: str | None = None) -> str:
    """Explicit level, else ``GARDEN_LOG_LEVEL``, else INFO."""
    chosen = level or os.getenv(LOG_LEVEL_ENV_VAR) or "INFO"
    return chosen.upper()


def configure_logging(
    *,
    level: str | None = None,
    format: str = LOG_FORMAT,
    datefmt: str = LOG_DATEFMT,
    extra_loggers: Iterable[str] | None = None,
) -> logging.Logger:
    """Configure the root handler and the ``garden`` logger.

    Args:
        level: Level name such as "DEBUG"; see ``resolve_level``
        format: Record format
        datefmt: Timestamp format
        extra_loggers: Other loggers (e.g. "rendering") to set to the same level

    Returns:
        The ``garden`` logger
    """
    resolved = resolve_level(level)
    logging.basicConfig(level=resolved, format=format, datefmt=datefmt)

    garden_logger = logging.getLogger("garden")
    garden_logger.setLevel(resolved)
    for name in extra_loggers or ():
        logging.getLogger(name).setLevel(resolved)

    garden_logger.debug("Logging configured at %s", resolved)
    return garden_logger
