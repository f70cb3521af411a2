"""
Utility Functions
=================

Logging setup for the contour2d package.

The library itself never installs handlers; entry points (the
``python -m contour2d`` CLI and the scripts under ``scripts/``) call
:func:`configure_logging` once at start-up.
"""

from __future__ import annotations

import logging
import os

LOGGER_NAME = "contour2d"
LOG_LEVEL_ENV = "CONTOUR2D_LOG_LEVEL"


def configure_logging(level=None, logfile=None):
    """Configure logging for the contour2d package.

    Parameters
    ----------
    level : int or str, optional
        Logging level. Defaults to the ``CONTOUR2D_LOG_LEVEL`` environment
        variable, or ``INFO`` when it is unset.
    logfile : str, optional
        Path to a log file. If provided, records go to both the console and
        the file.

    Returns
    -------
    logging.Logger
        The package logger.

    Notes
    -----
    The log format is ``"HH:MM:SS message"``. Calling this twice replaces the
    handlers installed by the first call instead of stacking them.
    """
    if level is None:
        level = os.environ.get(LOG_LEVEL_ENV, "INFO")
    if isinstance(level, str):
        level = level.upper()

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter("%(asctime)s %(message)s", datefmt="%H:%M:%S")
    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(formatter)
    logger.addHandler(stream_handler)

    if logfile is not None:
        file_handler = logging.FileHandler(logfile)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger
