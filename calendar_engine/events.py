"""Calendar event snapshots consumed by the layout and scheduling engines."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, tzinfo
from enum import Enum
from typing import Any, Dict, FrozenSet, Iterable, List, Mapping, Optional

from .interval import Interval


class EventCategory(str, Enum):
    """Event categories shown on the calendar."""

    PERSONAL = "personal"
    WORK = "work"
    EFFORT = "effort"
    NOTE = "note"


@dataclass(frozen=True, slots=True)
class Event:
    """Read-only snapshot of a calendar event.

    The engines never create, mutate or delete events; callers pass a fresh
    snapshot on every request.
    """

    id: str
    interval: Interval
    title: str = ""
    category: EventCategory = EventCategory.PERSONAL
    attendees: FrozenSet[str] = field(default_factory=frozenset)
    location: Optional[str] = None
    is_all_day: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.attendees, frozenset):
            object.__setattr__(self, "attendees", frozenset(self.attendees))
        if not isinstance(self.category, EventCategory):
            object.__setattr__(self, "category", EventCategory(self.category))

    @property
    def start(self) -> datetime:
        return self.interval.start

    @property
    def end(self) -> datetime:
        return self.interval.end

    @property
    def is_meeting(self) -> bool:
        """Check if the event counts towards meeting load.

        All-day events and notes never do; otherwise work events and anything
        with attendees count.
        """
        if self.is_all_day or self.category == EventCategory.NOTE:
            return False
        return self.category == EventCategory.WORK or bool(self.attendees)

    def local_date(self, tz: tzinfo) -> date:
        return self.start.astimezone(tz).date()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "start": self.start.isoformat(),
            "end": self.end.isoformat(),
            "category": self.category.value,
            "attendees": sorted(self.attendees),
            "location": self.location,
            "is_all_day": self.is_all_day,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Event":
        """Build an event from a JSON-style payload.

        Accepts ``start``/``end`` as ISO strings or datetimes and both
        ``is_all_day`` and ``isAllDay`` spellings.
        """
        try:
            event_id = data["id"]
            start = parse_instant(data["start"])
            end = parse_instant(data["end"])
        except KeyError as exc:
            raise ValueError(f"Event payload missing field: {exc.args[0]}") from exc

        is_all_day = data.get("is_all_day", data.get("isAllDay", False))
        return cls(
            id=str(event_id),
            interval=Interval(start, end),
            title=data.get("title") or data.get("summary") or "",
            category=EventCategory(data.get("category") or EventCategory.PERSONAL.value),
            attendees=frozenset(data.get("attendees") or ()),
            location=data.get("location") or None,
            is_all_day=bool(is_all_day),
        )


def parse_instant(value: Any) -> datetime:
    """Read an ISO-8601 string (a trailing ``Z`` included) or pass a datetime through."""
    if isinstance(value, datetime):
        return value
    if isinstance(value, str):
        # fromisoformat only learned the trailing "Z" in 3.11
        if value.endswith("Z"):
            value = value[:-1] + "+00:00"
        return datetime.fromisoformat(value)
    raise ValueError(f"Unsupported instant value: {value!r}")


def events_from_payload(items: Iterable[Mapping[str, Any]]) -> List[Event]:
    """Parse a list of event payloads, preserving order."""
    return [Event.from_dict(item) for item in items]
