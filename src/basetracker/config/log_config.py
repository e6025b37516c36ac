from __future__ import annotations

import logging
from typing import Optional

from basetracker.config import settings

_FORMAT = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"


def configure_logging(level: Optional[str] = None) -> None:
    """
    Install a single stream handler on the package logger.

    Safe to call more than once; later calls only change the level.
    """
    logger = logging.getLogger("basetracker")
    logger.setLevel((level or settings.LOG_LEVEL).upper())
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_FORMAT, datefmt="%H:%M:%S"))
        logger.addHandler(handler)
    logger.propagate = False
