"""Logging configuration for the bquery CLI.

Diagnostics go to stderr so filtered lines on stdout stay pipeable.
"""

from __future__ import annotations

import logging
import sys


LOGGER_NAME = "bquery"
LOG_FORMAT = "bquery: %(message)s"


def _diagnostic_handlers(logger: logging.Logger) -> list[logging.Handler]:
    return [handler for handler in logger.handlers if isinstance(handler, logging.StreamHandler)]


def configure_logging(verbose: bool) -> None:
    """Configure diagnostic output based on verbosity.

    Verbose mode logs config defaults, command arguments and compiled
    queries (DEBUG) to stderr. Quiet mode only lets warnings through
    the default last-resort handler.

    Args:
        verbose: Whether to enable DEBUG logging to stderr
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.propagate = False

    if not verbose:
        logger.setLevel(logging.WARNING)
        logger.handlers.clear()
        return

    logger.setLevel(logging.DEBUG)
    for handler in _diagnostic_handlers(logger):
        logger.removeHandler(handler)
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
