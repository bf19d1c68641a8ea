import threading
import time

import pytest

from focus_timer.countdown import Countdown
from focus_timer.models import InvalidDurationError
from focus_timer.scheduler import TimerLoop


@pytest.mark.parametrize("n", [1, 2, 5, 12])
def test_countdown_ticks_down_to_zero_then_stops(scheduler, n):
    ticks = []
    countdown = Countdown(n, ticks.append, scheduler=scheduler)
    countdown.start()
    assert countdown.active

    scheduler.advance(n + 5)

    assert ticks == list(range(n - 1, -1, -1))
    assert countdown.remaining == 0
    assert not countdown.active
    assert scheduler.pending() == 0


def test_one_tick_per_interval(scheduler):
    ticks = []
    countdown = Countdown(5, ticks.append, scheduler=scheduler, interval=2.0)
    countdown.start()
    scheduler.advance(1.5)
    assert ticks == []
    scheduler.advance(0.5)
    assert ticks == [4]
    scheduler.advance(4)
    assert ticks == [4, 3, 2]


def test_stop_prevents_further_ticks(scheduler):
    ticks = []
    countdown = Countdown(10, ticks.append, scheduler=scheduler)
    countdown.start()
    scheduler.advance(3)
    countdown.stop()

    scheduler.advance(20)

    assert ticks == [9, 8, 7]
    assert countdown.remaining == 7
    assert not countdown.active


def test_stop_is_idempotent(scheduler):
    countdown = Countdown(3, lambda _: None, scheduler=scheduler)
    countdown.stop()
    countdown.start()
    countdown.stop()
    countdown.stop()
    assert not countdown.active


def test_stop_from_inside_tick_handler(scheduler):
    ticks = []

    def on_tick(remaining):
        ticks.append(remaining)
        if remaining == 8:
            countdown.stop()

    countdown = Countdown(10, on_tick, scheduler=scheduler)
    countdown.start()
    scheduler.advance(10)
    assert ticks == [9, 8]
    assert scheduler.pending() == 0


def test_start_twice_warns_and_keeps_single_timer(scheduler, caplog):
    ticks = []
    countdown = Countdown(3, ticks.append, scheduler=scheduler)
    countdown.start()
    countdown.start()
    assert "already running" in caplog.text
    scheduler.advance(10)
    assert ticks == [2, 1, 0]


def test_finished_countdown_does_not_restart(scheduler):
    ticks = []
    countdown = Countdown(1, ticks.append, scheduler=scheduler)
    countdown.start()
    scheduler.advance(1)
    countdown.start()
    scheduler.advance(5)
    assert ticks == [0]
    assert not countdown.active


@pytest.mark.parametrize("bad", [0, -1])
def test_non_positive_duration_rejected(scheduler, bad):
    with pytest.raises(InvalidDurationError):
        Countdown(bad, lambda _: None, scheduler=scheduler)


def test_countdown_on_timer_loop():
    ticks = []
    finished = threading.Event()

    def on_tick(remaining):
        ticks.append(remaining)
        if remaining == 0:
            finished.set()

    with TimerLoop() as loop:
        countdown = Countdown(3, on_tick, scheduler=loop, interval=0.01)
        countdown.start()
        assert finished.wait(2.0)
    assert ticks == [2, 1, 0]
    assert not countdown.active


class _SlowClockLoop(TimerLoop):
    """Loop whose clock reads are slow on the loop thread, stretching each tick."""

    def time(self):
        if threading.current_thread().name == "focus-timer-loop":
            time.sleep(0.2)
        return super().time()


def test_stop_from_another_thread_while_tick_in_flight():
    ticks = []
    first_tick = threading.Event()

    def on_tick(remaining):
        ticks.append(remaining)
        first_tick.set()

    with _SlowClockLoop() as loop:
        countdown = Countdown(10, on_tick, scheduler=loop, interval=0.01)
        countdown.start()
        assert first_tick.wait(5.0)
        # the tick is now reading the clock before scheduling the next one
        time.sleep(0.05)
        countdown.stop()
        seen = list(ticks)
        time.sleep(0.6)
        assert ticks == seen
        assert not countdown.active
