"""In-memory storage for completed activities and earned coins."""

from __future__ import annotations

import logging
from typing import Iterator

from .models import ActivityRecord, Session

logger = logging.getLogger(__name__)


class ActivityStore:
    """Append-only list of completed activities, in completion order."""

    def __init__(self) -> None:
        self._records: list[ActivityRecord] = []

    def append(self, record: ActivityRecord) -> None:
        self._records.append(record)
        logger.debug("Stored completed %s (%d total).", record.kind, len(self._records))

    @property
    def records(self) -> tuple[ActivityRecord, ...]:
        return tuple(self._records)

    def sessions(self) -> Iterator[Session]:
        return (record for record in self._records if isinstance(record, Session))

    @property
    def total_focus_seconds(self) -> int:
        return sum(session.duration_seconds for session in self.sessions())

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[ActivityRecord]:
        return iter(self.records)


class RewardLedger:
    """Coin balance; it only ever grows."""

    def __init__(self, starting_balance: int = 100) -> None:
        self._balance = starting_balance

    @property
    def balance(self) -> int:
        return self._balance

    def credit(self, amount: int) -> None:
        if amount < 0:
            raise ValueError(f"Cannot credit a negative amount: {amount}")
        self._balance += amount
        logger.debug("Credited %d coins; balance is now %d.", amount, self._balance)
