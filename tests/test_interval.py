from datetime import datetime, timedelta, timezone

import pytest

from calendar_engine.interval import (
    Interval,
    InvalidIntervalError,
    contains,
    duration_minutes,
    intersection,
    overlap_minutes,
    overlaps,
)


def test_interval_rejects_start_after_end(at):
    with pytest.raises(InvalidIntervalError):
        Interval(at(10), at(9))


def test_zero_length_interval_is_allowed(at):
    interval = Interval(at(9), at(9))
    assert interval.is_empty
    assert duration_minutes(interval) == 0


def test_naive_datetimes_are_treated_as_utc():
    interval = Interval(datetime(2025, 3, 3, 9), datetime(2025, 3, 3, 10))
    assert interval.start.tzinfo is timezone.utc
    assert interval == Interval(
        datetime(2025, 3, 3, 9, tzinfo=timezone.utc),
        datetime(2025, 3, 3, 10, tzinfo=timezone.utc),
    )


def test_from_minutes_builds_end_and_rejects_negative(at):
    assert Interval.from_minutes(at(9), 45).end == at(9, 45)
    with pytest.raises(InvalidIntervalError):
        Interval.from_minutes(at(9), -5)


def test_touching_intervals_do_not_overlap(at):
    first = Interval(at(9), at(10))
    second = Interval(at(10), at(11))
    assert not overlaps(first, second)
    assert not overlaps(second, first)
    assert intersection(first, second) is None
    assert overlap_minutes(first, second) == 0


def test_overlap_and_intersection(at):
    first = Interval(at(9), at(10))
    second = Interval(at(9, 30), at(10, 30))
    assert overlaps(first, second)
    assert intersection(first, second) == Interval(at(9, 30), at(10))
    assert overlap_minutes(first, second) == 30


def test_contains_is_inclusive_of_bounds(at):
    outer = Interval(at(9), at(12))
    assert contains(outer, Interval(at(9), at(12)))
    assert contains(outer, Interval(at(10), at(11)))
    assert not contains(outer, Interval(at(11), at(13)))


def test_duration_minutes_rounds_down(at):
    interval = Interval(at(9), at(9) + timedelta(minutes=10, seconds=59))
    assert duration_minutes(interval) == 10


def test_intervals_in_different_offsets_compare_by_instant():
    plus_two = timezone(timedelta(hours=2))
    local = Interval(datetime(2025, 3, 3, 11, tzinfo=plus_two), datetime(2025, 3, 3, 12, tzinfo=plus_two))
    utc = Interval(datetime(2025, 3, 3, 9, 30, tzinfo=timezone.utc), datetime(2025, 3, 3, 10, 30, tzinfo=timezone.utc))
    assert overlap_minutes(local, utc) == 30
