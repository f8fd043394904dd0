"""Logging configuration for dotspell.

Records from every ``dotspell`` module go to stderr through a
:class:`rich.logging.RichHandler`, keeping stdout free for reports.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "dotspell"


def setup_logging(verbose: bool = False) -> logging.Logger:
    """Attach a stderr rich handler to the ``dotspell`` logger.

    Args:
        verbose: Emit debug records for discovery, classification and every
            file operation instead of warnings only.
    """

    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    level = logging.DEBUG if verbose else logging.WARNING
    handler = RichHandler(
        console=Console(stderr=True),
        show_path=verbose,
        show_time=False,
        markup=False,
        rich_tracebacks=True,
    )
    handler.setLevel(level)
    logger.addHandler(handler)
    logger.setLevel(level)

    logger.debug("Logging initialized (verbose=%s)", verbose)
    return logger
