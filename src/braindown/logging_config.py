"""Logging configuration for the braindown workspace."""

import sys
from typing import TextIO

from loguru import logger


def configure_logging(*, verbose: bool = False, sink: TextIO | None = None) -> None:
    """Route loguru output of the workspace stores.

    Args:
        verbose: Also show debug records (store transitions, vault probes).
        sink: Stream to write to. Defaults to stderr.
    """
    logger.remove()
    level = "DEBUG" if verbose else "INFO"
    logger.add(
        sink or sys.stderr,
        level=level,
        format="{time:HH:mm:ss} {level.icon} {name}: {message}",
    )
