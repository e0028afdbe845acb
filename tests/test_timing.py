import pytest

from dodge.timing import VirtualClock, ManualFrameScheduler, PerfCounterClock


def test_virtual_clock_only_moves_forward():
    clock = VirtualClock(10)
    assert clock.advance(5) == 15
    assert clock.now() == 15
    with pytest.raises(ValueError):
        clock.advance(-1)


def test_perf_counter_clock_is_monotonic():
    clock = PerfCounterClock()
    a = clock.now()
    assert clock.now() >= a


def test_manual_scheduler_runs_in_order_and_cancels():
    scheduler = ManualFrameScheduler()
    calls = []
    first = scheduler.schedule(lambda: calls.append(1))
    scheduler.schedule(lambda: calls.append(2))
    scheduler.cancel(first)
    scheduler.cancel(first)
    scheduler.cancel(None)
    assert scheduler.pending == 1
    assert scheduler.run_next() is True
    assert scheduler.run_next() is False
    assert calls == [2]
