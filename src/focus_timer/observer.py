"""Notification interface between activity managers and the presentation layer."""

from __future__ import annotations

import threading
from typing import Iterable, Optional, Protocol

from .models import ActivityRecord


class ActivityObserver(Protocol):
    """Receives the lifecycle of one activity at a time."""

    def activity_started(self, record: ActivityRecord) -> None: ...

    def time_left_changed(self, seconds_left: int) -> None: ...

    def activity_ended(self, record: ActivityRecord) -> None: ...

    def activity_cancelled(self) -> None: ...


class ObserverGroup:
    """Forwards every notification to each member, in registration order."""

    def __init__(self, observers: Iterable[ActivityObserver] = ()) -> None:
        self._observers: list[ActivityObserver] = list(observers)

    def add(self, observer: ActivityObserver) -> None:
        self._observers.append(observer)

    def activity_started(self, record: ActivityRecord) -> None:
        for observer in self._observers:
            observer.activity_started(record)

    def time_left_changed(self, seconds_left: int) -> None:
        for observer in self._observers:
            observer.time_left_changed(seconds_left)

    def activity_ended(self, record: ActivityRecord) -> None:
        for observer in self._observers:
            observer.activity_ended(record)

    def activity_cancelled(self) -> None:
        for observer in self._observers:
            observer.activity_cancelled()


class CompletionWaiter:
    """Lets a caller block until the current activity ends or is cancelled."""

    def __init__(self) -> None:
        self._done = threading.Event()
        self.outcome: Optional[str] = None

    def activity_started(self, record: ActivityRecord) -> None:
        self.outcome = None
        self._done.clear()

    def time_left_changed(self, seconds_left: int) -> None:
        pass

    def activity_ended(self, record: ActivityRecord) -> None:
        self.outcome = "completed"
        self._done.set()

    def activity_cancelled(self) -> None:
        self.outcome = "cancelled"
        self._done.set()

    def wait(self, timeout: Optional[float] = None) -> bool:
        return self._done.wait(timeout)
