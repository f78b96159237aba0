from datetime import datetime, timedelta, timezone

import pytest

from calendar_engine import Event, Interval


DAY = datetime(2025, 3, 3, tzinfo=timezone.utc)  # a Monday


def _at(hour: int, minute: int = 0, *, day_offset: int = 0) -> datetime:
    return DAY + timedelta(days=day_offset, hours=hour, minutes=minute)


def _event(
    event_id: str,
    start: datetime,
    end: datetime,
    **kwargs,
) -> Event:
    return Event(id=event_id, interval=Interval(start, end), **kwargs)


@pytest.fixture
def at():
    """Build a UTC instant on the test day: ``at(9, 30)``."""
    return _at


@pytest.fixture
def make_event():
    """Build an event from start/end instants plus optional fields."""
    return _event


@pytest.fixture
def workday(at):
    """The 08:00-18:00 UTC window of the test day."""
    return Interval(at(8), at(18))
