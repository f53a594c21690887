from __future__ import annotations

import sys

from loguru import logger

from billing.infrastructure.config import get_config

_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | "
    "<cyan>{extra[name]}</cyan> - <level>{message}</level>"
)


class AppLogger:
    """Global logger configuration for the application.

    Sets the log level from get_config().log_level unless one is given.
    Logs go to stderr so they never interleave with the bill on stdout.
    """

    def __init__(self, level: str | None = None) -> None:
        log_level = (level or get_config().log_level).upper()
        logger.remove()
        logger.configure(extra={"name": "billing"})
        logger.add(
            sink=lambda msg: print(msg, end="", file=sys.stderr),
            level=log_level,
            format=_FORMAT,
        )


def configure_logging(level: str | None = None) -> None:
    """Install the application sink; called once by the CLI entry point."""
    AppLogger(level)


def get_logger(name: str | None = None):
    """Get a logger bound to *name* without reconfiguring sinks."""
    if name:
        return logger.bind(name=name)
    return logger.bind(name="billing")
