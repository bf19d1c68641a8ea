"""Console output for activity transitions."""

from __future__ import annotations

from typing import Optional

from .models import ActivityRecord
from .store import ActivityStore, RewardLedger


class ConsolePrinter:
    """Print each activity transition and the time left."""

    def __init__(self) -> None:
        self._kind: Optional[str] = None

    def activity_started(self, record: ActivityRecord) -> None:
        self._kind = record.kind
        print(f"{record.kind} started")
        self.show_time_left(record.duration_seconds)

    def time_left_changed(self, seconds_left: int) -> None:
        self.show_time_left(seconds_left)

    def activity_ended(self, record: ActivityRecord) -> None:
        print(f"{record.kind} ended")

    def activity_cancelled(self) -> None:
        print(f"{self._kind or 'activity'} cancelled")

    def show_time_left(self, seconds_left: int) -> None:
        print(format_duration(seconds_left))


def print_balance(store: ActivityStore, ledger: RewardLedger) -> None:
    print("-" * 40)
    print(f"Coins:              {ledger.balance}")
    print(f"Completed sessions: {sum(1 for _ in store.sessions())}")
    print(f"Focused time:       {format_duration(store.total_focus_seconds)}")


def format_duration(seconds: float) -> str:
    total_seconds = int(round(seconds))
    hours, remainder = divmod(total_seconds, 3600)
    minutes, secs = divmod(remainder, 60)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"
