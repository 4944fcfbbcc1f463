"""Logging configuration for campus-directory."""

import sys

from loguru import logger

_VERBOSE_FORMAT = "{time:HH:mm:ss.SSS} {level.icon} {name}: {message}"


def configure_logging(*, verbose: bool = False) -> None:
    """Send loguru output to stderr.

    Verbose output carries timestamps and module names so interleaved
    recompute and search requests can be told apart.
    """
    logger.remove()
    if verbose:
        logger.add(sys.stderr, level="DEBUG", format=_VERBOSE_FORMAT)
    else:
        logger.add(sys.stderr, level="INFO", format="{level.icon} {message}")
