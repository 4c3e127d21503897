"""Logging configuration for gimps."""
from __future__ import annotations

import logging
import sys

LOGGER_NAME = "gimps"


def setup_logging(verbose: bool = False) -> logging.Logger:
    """Send gimps' log records to stderr.

    Args:
        verbose: Whether to enable debug logging.

    Returns:
        The package logger.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)

    # replace the handler of a previous call, sys.stderr may have changed since
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(message)s", "%Y/%m/%d %H:%M:%S"))
    logger.addHandler(handler)

    return logger
