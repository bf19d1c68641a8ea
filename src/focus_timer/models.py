"""Domain models for timed activities."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

HALF_HOUR_SECONDS = 30 * 60
HOUR_SECONDS = 60 * 60


class InvalidDurationError(ValueError):
    """Raised when an activity or countdown is given a non-positive duration."""

    def __init__(self, duration: object) -> None:
        super().__init__(f"Duration must be a positive number of seconds, got {duration!r}")
        self.duration = duration


def validate_duration(duration: object) -> int:
    # bool is an int subclass but never a meaningful duration
    if isinstance(duration, bool) or not isinstance(duration, int) or duration <= 0:
        raise InvalidDurationError(duration)
    return duration


@dataclass(frozen=True, slots=True)
class ActivityRecord:
    """A requested stretch of time, either focused work or a break."""

    kind: ClassVar[str] = "activity"

    duration_seconds: int

    def __post_init__(self) -> None:
        validate_duration(self.duration_seconds)

    @property
    def reward_units(self) -> int:
        return 0


@dataclass(frozen=True, slots=True)
class Session(ActivityRecord):
    """A focus session; completing one earns coins."""

    kind: ClassVar[str] = "session"

    @property
    def reward_units(self) -> int:
        if self.duration_seconds <= HALF_HOUR_SECONDS:
            return 3
        if self.duration_seconds <= HOUR_SECONDS:
            return 6
        return 9


@dataclass(frozen=True, slots=True)
class Break(ActivityRecord):
    """A rest period between sessions. Breaks carry no reward."""

    kind: ClassVar[str] = "break"
