"""Logging configuration for the filefacts CLI."""

from __future__ import annotations

import logging
from typing import Optional, Union

from rich.console import Console
from rich.logging import RichHandler


def setup_logging(level: Union[int, str] = logging.INFO, console: Optional[Console] = None) -> logging.Logger:
    """Route ``filefacts`` log records through a ``RichHandler``.

    Existing handlers on the package logger are replaced so repeated calls
    do not duplicate output.
    """
    logger = logging.getLogger('filefacts')
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    logger.setLevel(level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    handler = RichHandler(console=console or Console(stderr=True), show_path=False, rich_tracebacks=True)
    handler.setFormatter(logging.Formatter('%(message)s'))
    logger.addHandler(handler)
    return logger
