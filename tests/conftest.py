import pytest

from focus_timer.scheduler import ManualScheduler
from focus_timer.store import ActivityStore, RewardLedger


class RecordingObserver:
    """Collects notifications as (name, value) pairs."""

    def __init__(self):
        self.events = []

    def activity_started(self, record):
        self.events.append(("started", record.duration_seconds))

    def time_left_changed(self, seconds_left):
        self.events.append(("progress", seconds_left))

    def activity_ended(self, record):
        self.events.append(("completed", record.duration_seconds))

    def activity_cancelled(self):
        self.events.append(("cancelled", None))


@pytest.fixture()
def scheduler():
    return ManualScheduler()


@pytest.fixture()
def observer():
    return RecordingObserver()


@pytest.fixture()
def store():
    return ActivityStore()


@pytest.fixture()
def ledger():
    return RewardLedger()
