"""Activity managers: run one countdown at a time and report its lifecycle."""

from __future__ import annotations

import enum
import logging
from typing import ClassVar, Optional

from .config import TimerSettings
from .countdown import Countdown
from .models import ActivityRecord, Break, Session
from .observer import ActivityObserver
from .scheduler import Scheduler
from .store import ActivityStore, RewardLedger

logger = logging.getLogger(__name__)


class ActivityState(enum.Enum):
    IDLE = "idle"
    RUNNING = "running"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class ActivityManager:
    """Drives a countdown for one activity and notifies an observer.

    Subclasses pick the record type they accept and what happens when an
    activity runs to completion.
    """

    record_type: ClassVar[type[ActivityRecord]] = ActivityRecord

    def __init__(
        self,
        observer: ActivityObserver,
        *,
        scheduler: Scheduler,
        settings: Optional[TimerSettings] = None,
    ) -> None:
        self.observer = observer
        self.settings = settings or TimerSettings()
        self._scheduler = scheduler
        self._countdown: Optional[Countdown] = None
        self._current: Optional[ActivityRecord] = None
        self._state = ActivityState.IDLE

    @property
    def state(self) -> ActivityState:
        return self._state

    @property
    def current(self) -> Optional[ActivityRecord]:
        return self._current

    def start_activity(self, record: ActivityRecord) -> None:
        if not isinstance(record, self.record_type):
            raise TypeError(
                f"{type(self).__name__} cannot run a {type(record).__name__}"
            )
        if self._state is ActivityState.RUNNING:
            logger.info("Replacing running %s.", self._current.kind if self._current else "activity")
            self.cancel_activity()

        countdown = Countdown(
            record.duration_seconds,
            lambda seconds_left: self._handle_tick(countdown, record, seconds_left),
            scheduler=self._scheduler,
            interval=self.settings.tick_interval.total_seconds(),
        )
        self._countdown = countdown
        self._current = record
        self._state = ActivityState.RUNNING

        countdown.start()
        logger.info("%s started for %ds.", record.kind.capitalize(), record.duration_seconds)
        self.observer.activity_started(record)

    def cancel_activity(self) -> None:
        countdown, self._countdown = self._countdown, None
        if countdown is not None:
            countdown.stop()
        if self._state is ActivityState.RUNNING:
            self._state = ActivityState.CANCELLED
            logger.info("%s cancelled.", self._kind().capitalize())
        self.observer.activity_cancelled()

    def _handle_tick(
        self, countdown: Countdown, record: ActivityRecord, seconds_left: int
    ) -> None:
        if countdown is not self._countdown:
            return
        if seconds_left == 0:
            self._countdown = None
            self._state = ActivityState.COMPLETED
            self._record_completion(record)
            logger.info("%s completed.", record.kind.capitalize())
            self.observer.activity_ended(record)
        else:
            logger.debug("%s tick: %ds left.", record.kind.capitalize(), seconds_left)
            self.observer.time_left_changed(seconds_left)

    def _record_completion(self, record: ActivityRecord) -> None:
        pass

    def _kind(self) -> str:
        return self._current.kind if self._current else self.record_type.kind


class SessionManager(ActivityManager):
    """Runs focus sessions; completed sessions are stored and rewarded."""

    record_type = Session

    def __init__(
        self,
        observer: ActivityObserver,
        *,
        scheduler: Scheduler,
        store: ActivityStore,
        ledger: RewardLedger,
        settings: Optional[TimerSettings] = None,
    ) -> None:
        super().__init__(observer, scheduler=scheduler, settings=settings)
        self.store = store
        self.ledger = ledger

    def start_session(self, session: Session) -> None:
        self.start_activity(session)

    def stop_session(self) -> None:
        self.cancel_activity()

    def _record_completion(self, record: ActivityRecord) -> None:
        self.store.append(record)
        self.ledger.credit(record.reward_units)


class BreakManager(ActivityManager):
    """Runs breaks. Nothing is stored or rewarded when a break ends."""

    record_type = Break

    def start_break(self, a_break: Break) -> None:
        self.start_activity(a_break)

    def cancel_break(self) -> None:
        self.cancel_activity()
