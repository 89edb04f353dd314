"""Logging setup for command-line use.

Library modules only create loggers; handlers are installed here, on demand.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

LOGGER_NAME = "termevents"
LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def configure_logging(level: str | int, stream: TextIO | None = None) -> logging.Logger:
    """Attach one stream handler to the package logger at ``level``.

    Calling again replaces the handler installed by a previous call.
    """
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        if getattr(handler, "_termevents_handler", False):
            logger.removeHandler(handler)
    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._termevents_handler = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    logger.setLevel(level)
    return logger
