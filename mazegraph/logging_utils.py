"""Logging configuration and error reporting helpers."""

from __future__ import annotations

import logging
from typing import Optional

from .errors import InternalInvariantError, MazeGraphError

DEFAULT_LOGGER_NAME = "mazegraph"
DEFAULT_LOG_LEVEL = logging.INFO
DEFAULT_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(
    level: int = DEFAULT_LOG_LEVEL,
    *,
    logger_name: str = DEFAULT_LOGGER_NAME,
    fmt: str = DEFAULT_LOG_FORMAT,
    force: bool = False,
) -> logging.Logger:
    logging.basicConfig(level=level, format=fmt, force=force)
    logger = logging.getLogger(logger_name)
    logger.setLevel(level)
    return logger


def get_user_message(exc: BaseException) -> str:
    if isinstance(exc, InternalInvariantError):
        return f"Internal error (please report): {exc.user_message}"
    if isinstance(exc, MazeGraphError):
        return exc.user_message
    return f"Unexpected error: {exc}"


def log_exception(
    logger: logging.Logger,
    exc: BaseException,
    *,
    show_traceback: Optional[bool] = None,
) -> str:
    """Log ``exc`` once and return the message shown to the user.

    Tracebacks are always attached for internal invariant failures; for input
    errors they go to DEBUG unless ``show_traceback`` is set.
    """

    if show_traceback is None:
        show_traceback = isinstance(exc, InternalInvariantError)
    user_message = get_user_message(exc)
    logger.error(user_message)
    if isinstance(exc, MazeGraphError) and exc.context:
        logger.debug("Error context: %s", exc.context)
    if show_traceback:
        logger.error("Detailed traceback:", exc_info=exc)
    else:
        logger.debug("Detailed traceback:", exc_info=exc)
    return user_message


__all__ = [
    "DEFAULT_LOGGER_NAME",
    "DEFAULT_LOG_LEVEL",
    "DEFAULT_LOG_FORMAT",
    "configure_logging",
    "get_user_message",
    "log_exception",
]
