from datetime import timedelta

import pytest

from boya.gate import wait_until

from conftest import T0


def test_past_target_returns_immediately(clock, sleep):
    assert wait_until(T0 - timedelta(seconds=5), clock, sleep=sleep) == 0
    assert sleep.calls == []


def test_target_equal_to_now_does_not_wait(clock, sleep):
    assert wait_until(T0, clock, sleep=sleep) == 0
    assert sleep.calls == []


def test_whole_seconds_get_one_second_margin(clock, sleep):
    assert wait_until(T0 + timedelta(seconds=10), clock, sleep=sleep) == 11
    assert sleep.calls == [11]


def test_fractional_delta_rounds_up(clock, sleep):
    assert wait_until(T0 + timedelta(seconds=2, milliseconds=100), clock, sleep=sleep) == 4


@pytest.mark.parametrize("delta_ms", [1, 999, 1000, 59_500, 3_600_001])
def test_resumes_at_or_after_target(clock, sleep, delta_ms):
    target = T0 + timedelta(milliseconds=delta_ms)
    wait_until(target, clock, sleep=sleep)
    assert clock.now() >= target
    assert len(sleep.calls) == 1


def test_delta_is_read_from_clock_at_call_time(clock, sleep):
    target = T0 + timedelta(seconds=30)
    clock.advance(25)
    assert wait_until(target, clock, sleep=sleep) == 6


def test_interrupt_propagates(clock):
    def interrupted(_seconds):
        raise KeyboardInterrupt

    with pytest.raises(KeyboardInterrupt):
        wait_until(T0 + timedelta(seconds=10), clock, sleep=interrupted)
