"""Logging helpers for the project."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover
    from ..config import Settings

DEFAULT_FORMAT = "%(levelname)s:%(name)s:%(message)s"
ROOT_LOGGER = "panchangam"


def get_logger(name: str = ROOT_LOGGER, level: int | str = logging.WARNING, fmt: str = DEFAULT_FORMAT) -> logging.Logger:
    """Return a configured :class:`logging.Logger` instance.

    A ``StreamHandler`` is added only once per logger, so repeated calls just
    adjust the level.  ``level`` may be a number or a name such as ``"debug"``.
    """

    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(fmt))
        logger.addHandler(handler)
    logger.setLevel(level.upper() if isinstance(level, str) else level)
    return logger


def configure_logging(settings: "Settings", verbose: bool = False) -> logging.Logger:
    """Configure the package logger from ``settings.logging``; ``verbose`` forces DEBUG."""

    return get_logger(ROOT_LOGGER, level="DEBUG" if verbose else settings.logging.level)
