from focus_timer.models import Session
from focus_timer.observer import CompletionWaiter, ObserverGroup

from conftest import RecordingObserver


def test_group_forwards_to_every_member():
    first, second = RecordingObserver(), RecordingObserver()
    group = ObserverGroup([first])
    group.add(second)

    group.activity_started(Session(5))
    group.time_left_changed(4)
    group.activity_ended(Session(5))
    group.activity_cancelled()

    expected = [("started", 5), ("progress", 4), ("completed", 5), ("cancelled", None)]
    assert first.events == expected
    assert second.events == expected


def test_completion_waiter_tracks_outcome():
    waiter = CompletionWaiter()
    waiter.activity_started(Session(5))
    assert not waiter.wait(0)
    assert waiter.outcome is None

    waiter.activity_ended(Session(5))
    assert waiter.wait(0)
    assert waiter.outcome == "completed"

    waiter.activity_started(Session(5))
    assert not waiter.wait(0)
    waiter.activity_cancelled()
    assert waiter.outcome == "cancelled"
