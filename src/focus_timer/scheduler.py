"""Scheduled-callback loops that deliver timer ticks on a single context."""

from __future__ import annotations

import heapq
import itertools
import logging
import threading
import time as _time
from dataclasses import dataclass, field
from typing import Callable, Optional, Protocol

logger = logging.getLogger(__name__)

Callback = Callable[[], None]


class ScheduledCall:
    """Handle for a pending callback. Once ``cancel`` returns it never runs."""

    __slots__ = ("_callback", "_cancelled", "_lock")

    def __init__(self, callback: Callback, lock: threading.RLock) -> None:
        self._callback: Optional[Callback] = callback
        self._cancelled = False
        self._lock = lock

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        # Waits for an in-flight dispatch on another thread; re-entrant from callbacks.
        with self._lock:
            self._cancelled = True
            self._callback = None

    def _run(self) -> bool:
        with self._lock:
            callback = self._callback
            if self._cancelled or callback is None:
                return False
            self._callback = None
            callback()
            return True


class Scheduler(Protocol):
    def time(self) -> float: ...

    def call_later(self, delay: float, callback: Callback) -> ScheduledCall: ...


@dataclass(order=True, slots=True)
class _Entry:
    deadline: float
    seq: int
    call: ScheduledCall = field(compare=False)


class _CallQueue:
    """Deadline-ordered heap; ties run in scheduling order."""

    def __init__(self) -> None:
        self._heap: list[_Entry] = []
        self._counter = itertools.count()

    def push(self, deadline: float, call: ScheduledCall) -> None:
        heapq.heappush(self._heap, _Entry(deadline, next(self._counter), call))

    def peek_deadline(self) -> Optional[float]:
        self._discard_cancelled()
        return self._heap[0].deadline if self._heap else None

    def pop(self) -> _Entry:
        return heapq.heappop(self._heap)

    def __len__(self) -> int:
        return sum(1 for entry in self._heap if not entry.call.cancelled)

    def clear(self) -> None:
        self._heap.clear()

    def _discard_cancelled(self) -> None:
        while self._heap and self._heap[0].call.cancelled:
            heapq.heappop(self._heap)


class TimerLoop:
    """Run scheduled callbacks one at a time on a background thread."""

    def __init__(self, *, join_timeout: float = 10.0) -> None:
        self._queue = _CallQueue()
        self._dispatch_lock = threading.RLock()
        self._cond = threading.Condition()
        self._thread: Optional[threading.Thread] = None
        self._stop_event = threading.Event()
        self._join_timeout = join_timeout

    def time(self) -> float:
        return _time.monotonic()

    def call_later(self, delay: float, callback: Callback) -> ScheduledCall:
        call = ScheduledCall(callback, self._dispatch_lock)
        with self._cond:
            self._queue.push(self.time() + max(delay, 0.0), call)
            self._cond.notify()
        return call

    def start(self) -> None:
        with self._cond:
            if self._thread and self._thread.is_alive():
                return
            self._stop_event.clear()
            thread = threading.Thread(
                target=self._run_loop, name="focus-timer-loop", daemon=True
            )
            self._thread = thread
            thread.start()
        logger.debug("Timer loop started.")

    def stop(self) -> None:
        with self._cond:
            thread = self._thread
            self._thread = None
            self._stop_event.set()
            self._queue.clear()
            self._cond.notify_all()
        if thread and thread is not threading.current_thread():
            thread.join(timeout=self._join_timeout)
        logger.debug("Timer loop stopped.")

    def is_running(self) -> bool:
        with self._cond:
            return bool(self._thread and self._thread.is_alive())

    def __enter__(self) -> "TimerLoop":
        self.start()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.stop()

    def _run_loop(self) -> None:
        while not self._stop_event.is_set():
            with self._cond:
                if self._stop_event.is_set():
                    return
                deadline = self._queue.peek_deadline()
                if deadline is None:
                    self._cond.wait()
                    continue
                timeout = deadline - self.time()
                if timeout > 0:
                    self._cond.wait(timeout)
                    continue
                entry = self._queue.pop()
            _dispatch(entry.call)


class ManualScheduler:
    """Virtual-clock scheduler; callbacks only run inside ``advance``."""

    def __init__(self, start: float = 0.0) -> None:
        self._now = start
        self._queue = _CallQueue()
        self._dispatch_lock = threading.RLock()

    def time(self) -> float:
        return self._now

    def call_later(self, delay: float, callback: Callback) -> ScheduledCall:
        call = ScheduledCall(callback, self._dispatch_lock)
        self._queue.push(self._now + max(delay, 0.0), call)
        return call

    def advance(self, seconds: float) -> int:
        """Move the clock forward, running every callback that falls due.

        Returns the number of callbacks that ran.
        """
        target = self._now + seconds
        ran = 0
        while True:
            deadline = self._queue.peek_deadline()
            if deadline is None or deadline > target:
                break
            entry = self._queue.pop()
            self._now = max(self._now, entry.deadline)
            if _dispatch(entry.call):
                ran += 1
        self._now = target
        return ran

    def pending(self) -> int:
        return len(self._queue)


def _dispatch(call: ScheduledCall) -> bool:
    try:
        return call._run()
    except Exception:
        logger.exception("Scheduled callback failed.")
        return True
