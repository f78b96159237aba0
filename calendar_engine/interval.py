"""Half-open time intervals and the predicates every engine shares."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional


class InvalidIntervalError(ValueError):
    """Raised when an interval would start after it ends."""


def _ensure_utc(dt: datetime) -> datetime:
    """Ensure datetime is timezone-aware.

    If naive, assumes UTC. Aware values keep their own offset.
    """
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt


@dataclass(frozen=True, slots=True)
class Interval:
    """A ``[start, end)`` time range. Touching intervals do not overlap."""

    start: datetime
    end: datetime

    def __post_init__(self) -> None:
        start = _ensure_utc(self.start)
        end = _ensure_utc(self.end)
        if start > end:
            raise InvalidIntervalError(
                f"Interval start {start.isoformat()} is after end {end.isoformat()}"
            )
        object.__setattr__(self, "start", start)
        object.__setattr__(self, "end", end)

    @classmethod
    def from_minutes(cls, start: datetime, minutes: int) -> "Interval":
        if minutes < 0:
            raise InvalidIntervalError(f"Negative duration: {minutes} minutes")
        return cls(start, start + timedelta(minutes=minutes))

    @property
    def duration(self) -> timedelta:
        return self.end - self.start

    @property
    def is_empty(self) -> bool:
        return self.start == self.end


def overlaps(a: Interval, b: Interval) -> bool:
    return a.start < b.end and b.start < a.end


def contains(outer: Interval, inner: Interval) -> bool:
    return outer.start <= inner.start and inner.end <= outer.end


def duration_minutes(interval: Interval) -> int:
    """Whole minutes in the interval, rounded down."""
    return int(interval.duration.total_seconds() // 60)


def intersection(a: Interval, b: Interval) -> Optional[Interval]:
    if not overlaps(a, b):
        return None
    return Interval(max(a.start, b.start), min(a.end, b.end))


def overlap_minutes(a: Interval, b: Interval) -> int:
    shared = intersection(a, b)
    return duration_minutes(shared) if shared else 0
