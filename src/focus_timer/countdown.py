"""Repeating one-second countdown driven by a scheduler."""

from __future__ import annotations

import logging
import threading
from typing import Callable, Optional

from .models import validate_duration
from .scheduler import ScheduledCall, Scheduler

logger = logging.getLogger(__name__)


class Countdown:
    """Counts ``remaining`` down to zero, reporting each new value to ``on_tick``.

    The countdown is active exactly while it holds a scheduled-call handle.
    Ticks run at fixed-rate deadlines measured from ``start()``, so a late
    tick does not push back the ones after it.
    """

    def __init__(
        self,
        duration_seconds: int,
        on_tick: Callable[[int], None],
        *,
        scheduler: Scheduler,
        interval: float = 1.0,
    ) -> None:
        self.remaining = validate_duration(duration_seconds)
        self.interval = interval
        self._on_tick = on_tick
        self._scheduler = scheduler
        self._handle: Optional[ScheduledCall] = None
        self._next_deadline = 0.0
        self._lock = threading.RLock()

    @property
    def active(self) -> bool:
        return self._handle is not None

    def start(self) -> None:
        with self._lock:
            if self._handle is not None:
                logger.warning("Countdown is already running.")
                return
            if self.remaining == 0:
                return
            self._next_deadline = self._scheduler.time() + self.interval
            self._handle = self._scheduler.call_later(self.interval, self._tick)
        logger.debug("Countdown started with %d ticks remaining.", self.remaining)

    def stop(self) -> None:
        with self._lock:
            handle, self._handle = self._handle, None
        # Cancel outside our lock; it waits for an in-flight tick on the loop thread.
        if handle is not None:
            handle.cancel()
            logger.debug("Countdown stopped with %d ticks remaining.", self.remaining)

    def _tick(self) -> None:
        with self._lock:
            fired = self._handle
            if fired is None:
                return
            self.remaining -= 1
            remaining = self.remaining
        self._on_tick(remaining)

        with self._lock:
            # on_tick, or stop() from another thread, may have dropped or replaced the handle
            if self._handle is not fired:
                return
            if remaining <= 0:
                self._handle = None
                return
            self._next_deadline += self.interval
            delay = self._next_deadline - self._scheduler.time()
            self._handle = self._scheduler.call_later(delay, self._tick)
