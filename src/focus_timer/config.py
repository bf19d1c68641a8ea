"""Configuration models and helpers for the focus timer."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta


@dataclass(slots=True)
class TimerSettings:
    """Runtime configuration for countdowns and the reward ledger."""

    tick_interval: timedelta = timedelta(seconds=1)
    starting_balance: int = 100
    join_timeout: timedelta = timedelta(seconds=10)

    @classmethod
    def from_values(
        cls,
        interval_seconds: float,
        starting_balance: int | None = None,
    ) -> "TimerSettings":
        balance = starting_balance if starting_balance is not None else 100
        return cls(
            tick_interval=timedelta(seconds=interval_seconds),
            starting_balance=balance,
        )
