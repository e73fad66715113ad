"""
Structured logging for ethsdk.

Thin facade over the standard library ``logging`` module. All SDK loggers
live under the ``ethsdk`` namespace; the library installs a NullHandler so
nothing is printed unless the application configures logging.

Example:
    >>> from ethsdk.utils.logging import configure_logging, get_logger
    >>> configure_logging("DEBUG")
    >>> _logger = get_logger(__name__)
    >>> _logger.info("Submitted transaction", extra={"tx_hash": "0x..."})
"""

from __future__ import annotations

import logging
import sys
from typing import Optional, Union

ROOT_LOGGER_NAME = "ethsdk"
DEFAULT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_root = logging.getLogger(ROOT_LOGGER_NAME)
_root.addHandler(logging.NullHandler())

_handler: Optional[logging.Handler] = None


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger inside the SDK namespace.

    Args:
        name: Usually ``__name__`` of the calling module

    Returns:
        Logger whose name starts with ``ethsdk``
    """
    if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def configure_logging(
    level: Union[int, str] = logging.INFO,
    fmt: str = DEFAULT_FORMAT,
    stream=None,
) -> logging.Handler:
    """
    Attach a stream handler to the SDK root logger.

    Calling this again replaces the previously installed handler.

    Args:
        level: Log level name or number
        fmt: ``logging.Formatter`` format string
        stream: Output stream (default: stderr)

    Returns:
        The installed handler
    """
    global _handler

    if _handler is not None:
        _root.removeHandler(_handler)

    _handler = logging.StreamHandler(stream or sys.stderr)
    _handler.setFormatter(logging.Formatter(fmt))
    _root.addHandler(_handler)
    set_level(level)
    return _handler


def set_level(level: Union[int, str]) -> None:
    """Set the level of the SDK root logger."""
    if isinstance(level, str):
        level = level.upper()
    _root.setLevel(level)


def enable_debug() -> None:
    """Shortcut for ``configure_logging(logging.DEBUG)``."""
    configure_logging(logging.DEBUG)


def disable_logging() -> None:
    """Silence every SDK logger until the next ``set_level`` call."""
    _root.setLevel(logging.CRITICAL + 1)
