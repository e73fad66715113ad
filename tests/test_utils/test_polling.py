"""
Tests for the poll_until primitive.

Tests cover:
- PollConfig defaults
- Sleep-then-check tick order
- Pending vs fatal exceptions
- Deadline evaluation and overshoot bound
"""

from typing import List

import pytest

from ethsdk.utils.polling import PollConfig, PollTimeoutError, poll_until


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0
        self.sleeps: List[float] = []

    def time(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


class NotReady(Exception):
    pass


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


def _never_pending(_error: Exception) -> bool:
    return False


# =============================================================================
# PollConfig Tests
# =============================================================================


class TestPollConfig:
    """Tests for PollConfig dataclass."""

    def test_default_values(self) -> None:
        config = PollConfig()

        assert config.timeout == 120
        assert config.interval == 2

    def test_custom_values(self) -> None:
        config = PollConfig(timeout=30, interval=0.5)

        assert config.timeout == 30
        assert config.interval == 0.5


# =============================================================================
# poll_until Tests
# =============================================================================


class TestPollUntil:
    """Tests for poll_until."""

    def test_sleeps_before_first_check(self, clock: FakeClock) -> None:
        checked_at: List[float] = []

        def check():
            checked_at.append(clock.now)
            return "done"

        result = poll_until(check, _never_pending, PollConfig(timeout=10, interval=2), clock=clock.time, sleep=clock.sleep)

        assert result == "done"
        assert checked_at == [2]

    def test_none_means_not_ready(self, clock: FakeClock) -> None:
        results = iter([None, None, 42])

        result = poll_until(
            lambda: next(results), _never_pending, PollConfig(timeout=10, interval=1), clock=clock.time, sleep=clock.sleep
        )

        assert result == 42
        assert clock.sleeps == [1, 1, 1]

    def test_pending_exception_retried(self, clock: FakeClock) -> None:
        calls = {"count": 0}

        def check():
            calls["count"] += 1
            if calls["count"] <= 2:
                raise NotReady()
            return "mined"

        result = poll_until(
            check,
            lambda e: isinstance(e, NotReady),
            PollConfig(timeout=10, interval=2),
            clock=clock.time,
            sleep=clock.sleep,
        )

        assert result == "mined"
        assert calls["count"] == 3

    def test_other_exception_propagates(self, clock: FakeClock) -> None:
        def check():
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError, match="boom"):
            poll_until(check, lambda e: isinstance(e, NotReady), PollConfig(), clock=clock.time, sleep=clock.sleep)

        assert len(clock.sleeps) == 1

    def test_timeout(self, clock: FakeClock) -> None:
        with pytest.raises(PollTimeoutError) as exc_info:
            poll_until(lambda: None, _never_pending, PollConfig(timeout=10, interval=3), clock=clock.time, sleep=clock.sleep)

        error = exc_info.value
        assert error.timeout == 10
        assert error.attempts == 4
        assert error.elapsed == 12
        # The deadline is observed at most one interval late
        assert 10 <= error.elapsed <= 10 + 3

    def test_success_on_last_tick_before_deadline(self, clock: FakeClock) -> None:
        """A result found on the tick that reaches the deadline still wins."""
        results = iter([None, None, None, None, "late"])

        result = poll_until(
            lambda: next(results), _never_pending, PollConfig(timeout=10, interval=2), clock=clock.time, sleep=clock.sleep
        )

        assert result == "late"
        assert clock.now == 10

    def test_default_config(self, clock: FakeClock) -> None:
        with pytest.raises(PollTimeoutError) as exc_info:
            poll_until(lambda: None, _never_pending, clock=clock.time, sleep=clock.sleep)

        assert exc_info.value.attempts == 60
