"""Stderr logging setup for the command-line tool."""

from __future__ import annotations

import logging
import sys
from typing import TextIO

PACKAGE_LOGGER = "lds"
HANDLER_NAME = "lds-stderr"
LOG_FORMAT = "%(asctime)s %(levelname)s %(message)s"
LOG_DATE_FORMAT = "%I:%M%p"


def configure_logging(stream: TextIO | None = None, level: int = logging.INFO) -> logging.Handler:
    """Attach the stderr handler to the package logger, once per process."""
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in package_logger.handlers:
        if handler.get_name() == HANDLER_NAME:
            return handler

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.set_name(HANDLER_NAME)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
    package_logger.addHandler(handler)
    package_logger.setLevel(level)
    return handler


__all__ = ["configure_logging", "LOG_FORMAT", "LOG_DATE_FORMAT"]
