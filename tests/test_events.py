from datetime import date, timezone
from zoneinfo import ZoneInfo

import pytest

from calendar_engine import Event, EventCategory, Interval, events_from_payload
from calendar_engine.events import parse_instant


def test_work_events_and_events_with_attendees_are_meetings(make_event, at):
    assert make_event("w", at(9), at(10), category="work").is_meeting
    assert make_event("p", at(9), at(10), attendees={"bob"}).is_meeting
    assert not make_event("solo", at(9), at(10)).is_meeting


def test_notes_and_all_day_events_are_never_meetings(make_event, at):
    assert not make_event("n", at(9), at(10), category=EventCategory.NOTE, attendees={"bob"}).is_meeting
    assert not make_event("a", at(0), at(24), category="work", is_all_day=True).is_meeting


def test_event_coerces_category_and_attendees(make_event, at):
    event = make_event("e", at(9), at(10), category="effort", attendees=["a", "b", "a"])
    assert event.category is EventCategory.EFFORT
    assert event.attendees == frozenset({"a", "b"})


def test_unknown_category_is_rejected(make_event, at):
    with pytest.raises(ValueError):
        make_event("e", at(9), at(10), category="holiday")


def test_from_dict_accepts_zulu_times_and_camel_case():
    event = Event.from_dict(
        {
            "id": 42,
            "summary": "Design review",
            "start": "2025-03-03T09:00:00Z",
            "end": "2025-03-03T10:00:00Z",
            "isAllDay": False,
            "category": "work",
            "attendees": ["alice"],
            "location": "Room 1",
        }
    )
    assert event.id == "42"
    assert event.title == "Design review"
    assert event.start.tzinfo == timezone.utc
    assert event.start.hour == 9
    assert event.location == "Room 1"


def test_parse_instant_reads_zulu_strings_and_passes_datetimes_through(at):
    assert parse_instant("2025-03-03T09:00:00Z") == at(9)
    nine = at(9)
    assert parse_instant(nine) is nine


def test_from_dict_missing_field_raises():
    with pytest.raises(ValueError, match="end"):
        Event.from_dict({"id": "x", "start": "2025-03-03T09:00:00Z"})


def test_from_dict_reversed_times_raise():
    with pytest.raises(ValueError):
        Event.from_dict({"id": "x", "start": "2025-03-03T10:00:00Z", "end": "2025-03-03T09:00:00Z"})


def test_to_dict_round_trips_through_payload(make_event, at):
    event = make_event("e1", at(9), at(10), title="Standup", category="work", attendees={"b", "a"})
    payload = event.to_dict()
    assert payload["attendees"] == ["a", "b"]
    assert events_from_payload([payload]) == [event]


def test_local_date_uses_time_zone(make_event, at):
    event = make_event("late", at(23, 30), at(23, 45))
    assert event.local_date(timezone.utc) == date(2025, 3, 3)
    assert event.local_date(ZoneInfo("Asia/Tokyo")) == date(2025, 3, 4)
    assert isinstance(event.interval, Interval)
