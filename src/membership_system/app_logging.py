"""Logging setup for the app and the scripts.

Everything under the ``membership_system`` logger goes to one stream handler;
LOG_LEVEL picks the level when none is passed.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Optional

LOG_FORMAT = "[%(asctime)s] %(levelname)s in %(name)s: %(message)s"
_HANDLER_NAME = "membership_system.stream"


def init_logging(level: Optional[str] = None) -> logging.Logger:
    """Configure the package logger. Calling it again only updates the level."""
    logger = logging.getLogger("membership_system")
    logger.setLevel((level or os.getenv("LOG_LEVEL", "INFO")).upper())

    if not any(h.get_name() == _HANDLER_NAME for h in logger.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.set_name(_HANDLER_NAME)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    return logger
