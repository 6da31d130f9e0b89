"""Logging configuration for the ``fskit`` package.

Modules obtain loggers via ``logging.getLogger(__name__)``; this module
only wires a handler onto the package logger.  Rich is used for
rendering when it is installed, matching the CLI console.
"""

from __future__ import annotations

import logging

PACKAGE_LOGGER: str = "fskit"
DEFAULT_LOG_FORMAT: str = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DEFAULT_DATE_FORMAT: str = "%Y-%m-%d %H:%M:%S"


def _build_handler() -> logging.Handler:
    """Return a RichHandler on stderr, or a plain stream handler without Rich."""
    try:
        from rich.console import Console
        from rich.logging import RichHandler
    except ModuleNotFoundError:
        handler: logging.Handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(DEFAULT_LOG_FORMAT, DEFAULT_DATE_FORMAT))
        return handler

    handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        rich_tracebacks=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s", DEFAULT_DATE_FORMAT))
    return handler


def level_for_verbosity(base_level: int, verbosity: int) -> int:
    """Lower *base_level* by one step (10) per ``-v``, never below DEBUG."""
    return max(logging.DEBUG, base_level - 10 * max(verbosity, 0))


def configure_logging(level: int | str = logging.WARNING) -> logging.Logger:
    """Configure and return the package logger.

    Calling this more than once only updates the level; a second handler
    is never attached.
    """
    if isinstance(level, str):
        level_value = getattr(logging, level.upper(), logging.WARNING)
    else:
        level_value = level

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    if not package_logger.handlers:
        package_logger.addHandler(_build_handler())
    package_logger.setLevel(level_value)
    return package_logger
