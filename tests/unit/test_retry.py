"""Retry/poll engine tests."""

from datetime import timedelta

import pytest

from tagsteps.utils.retry import retry_until


def test_returns_immediately_when_probe_true(clock):
    calls = []

    def probe():
        calls.append(clock())
        return True

    assert retry_until(probe, 60, 3, sleep=clock.sleep, clock=clock)
    assert calls == [0.0]
    assert clock.sleeps == []


@pytest.mark.parametrize("k", [1, 3, 10])
def test_probe_true_after_k_delays_is_called_k_plus_one_times(clock, k):
    delay = 3.0
    calls = []

    def probe():
        calls.append(clock())
        return clock() >= k * delay

    assert retry_until(probe, 300, delay, sleep=clock.sleep, clock=clock)
    assert len(calls) == k + 1
    assert clock.sleeps == [delay] * k


def test_never_true_stops_within_timeout_plus_delay(clock):
    timeout, delay = 10.0, 3.0
    calls = []

    def probe():
        calls.append(clock())
        return False

    assert not retry_until(probe, timeout, delay, sleep=clock.sleep, clock=clock)
    assert clock() > timeout
    assert clock() <= timeout + delay
    assert calls == [0.0, 3.0, 6.0, 9.0]


def test_accepts_timedelta(clock):
    assert not retry_until(
        lambda: False, timedelta(seconds=5), timedelta(seconds=2), sleep=clock.sleep, clock=clock
    )
    assert clock.sleeps == [2.0, 2.0, 2.0]


def test_probe_exception_propagates(clock):
    attempts = []

    def probe():
        attempts.append(1)
        if len(attempts) == 2:
            raise RuntimeError("element unreachable")
        return False

    with pytest.raises(RuntimeError, match="element unreachable"):
        retry_until(probe, 60, 3, sleep=clock.sleep, clock=clock)
    assert len(attempts) == 2
