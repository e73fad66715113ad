"""
Polling utilities for ethsdk.

Provides a blocking retry-with-timeout primitive used by every operation that
waits on the chain (receipts, contract addresses).
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Optional, TypeVar

from ethsdk.constants import DEFAULT_INTERVAL_SECONDS, DEFAULT_TIMEOUT_SECONDS
from ethsdk.utils.logging import get_logger

T = TypeVar("T")

_logger = get_logger(__name__)


@dataclass(frozen=True)
class PollConfig:
    """
    Configuration for polling behavior.

    Example:
        ```python
        config = PollConfig(timeout=60, interval=1.5)
        ```
    """

    timeout: float = DEFAULT_TIMEOUT_SECONDS
    """Wall-clock deadline in seconds, measured from the start of the wait."""

    interval: float = DEFAULT_INTERVAL_SECONDS
    """Delay in seconds before each check."""


class PollTimeoutError(Exception):
    """
    Raised by poll_until when the deadline elapses without a result.

    Attributes:
        timeout: Configured deadline in seconds
        attempts: Number of checks performed
        elapsed: Seconds elapsed when the deadline was detected
    """

    def __init__(self, timeout: float, attempts: int, elapsed: float) -> None:
        super().__init__(f"Not ready after {attempts} attempts ({elapsed:.1f}s, timeout {timeout}s)")
        self.timeout = timeout
        self.attempts = attempts
        self.elapsed = elapsed


def poll_until(
    check: Callable[[], Optional[T]],
    is_pending: Callable[[Exception], bool],
    config: Optional[PollConfig] = None,
    *,
    clock: Callable[[], float] = time.monotonic,
    sleep: Callable[[float], None] = time.sleep,
) -> T:
    """
    Call ``check`` on a fixed interval until it produces a result.

    Each tick first sleeps ``config.interval`` seconds and then calls
    ``check``. A result of ``None`` or an exception for which
    ``is_pending`` returns True means "not ready yet"; any other exception
    propagates immediately. The deadline is only evaluated after a check, so
    the wait can overshoot ``config.timeout`` by at most one interval.

    Args:
        check: Operation to poll (no arguments)
        is_pending: Predicate selecting exceptions that mean "not ready yet"
        config: Timeout and interval (uses defaults if None)
        clock: Monotonic time source in seconds
        sleep: Blocking sleep function

    Returns:
        The first non-None result of ``check``

    Raises:
        PollTimeoutError: If the deadline elapses first
        Exception: Whatever ``check`` raises when ``is_pending`` rejects it
    """
    config = config or PollConfig()
    start = clock()
    attempts = 0

    while True:
        sleep(config.interval)
        attempts += 1

        try:
            result = check()
        except Exception as e:
            if not is_pending(e):
                raise
            result = None

        if result is not None:
            return result

        elapsed = clock() - start
        _logger.debug("Not ready yet", extra={"attempt": attempts, "elapsed": elapsed})
        if elapsed >= config.timeout:
            raise PollTimeoutError(config.timeout, attempts, elapsed)
