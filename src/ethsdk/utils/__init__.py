"""
ethsdk utilities.

This module provides logging and polling helpers for the SDK.
"""

from ethsdk.utils.logging import (
    configure_logging,
    disable_logging,
    enable_debug,
    get_logger,
    set_level,
)
from ethsdk.utils.polling import PollConfig, PollTimeoutError, poll_until

__all__ = [
    # Logging
    "get_logger",
    "configure_logging",
    "set_level",
    "disable_logging",
    "enable_debug",
    # Polling
    "PollConfig",
    "PollTimeoutError",
    "poll_until",
]
