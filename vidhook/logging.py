"""
vidhook.logging - Centralized logging configuration.

Log records from the ``vidhook`` logger are rendered on stderr through Rich,
so they stay apart from the command output printed on stdout.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

logger = logging.getLogger("vidhook")


def configure_logging(verbose: bool = False, console: Console | None = None) -> RichHandler:
    """Configure logging for the vidhook package.

    Safe to call more than once; the previous handler is replaced.

    Args:
        verbose: If True, enable DEBUG level logging; otherwise WARNING level
        console: Console to render records on (stderr by default)

    Returns:
        The installed handler
    """
    level = logging.DEBUG if verbose else logging.WARNING

    handler = RichHandler(
        console=console or Console(stderr=True),
        level=level,
        show_time=False,
        show_path=verbose,
        markup=False,
        rich_tracebacks=verbose,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))

    for existing in list(logger.handlers):
        logger.removeHandler(existing)
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False
    return handler
