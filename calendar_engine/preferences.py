"""Scheduling preferences: one validated, immutable value per request.

Every field is checked when the object is built, so the scoring code never
has to guard against missing or malformed values at call time. Hours are
local to ``time_zone`` and expressed on a 0-24 clock.
"""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta, tzinfo
from pathlib import Path
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import yaml

from .interval import Interval


FOCUS_PRIORITIES = ("low", "medium", "high")


class InvalidPreferencesError(ValueError):
    """Raised when a SchedulingPreferences value is malformed."""


@dataclass(frozen=True, slots=True)
class HourRange:
    """Local hours ``start``-``end`` (``0 <= start <= end <= 24``)."""

    start: float
    end: float

    def __post_init__(self) -> None:
        for name in ("start", "end"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise InvalidPreferencesError(f"Hour range {name} must be a number, got {value!r}")
        if not 0 <= self.start <= self.end <= 24:
            raise InvalidPreferencesError(
                f"Malformed hour range {self.start}-{self.end}; expected 0 <= start <= end <= 24"
            )

    def contains_hour(self, hour: int) -> bool:
        """Inclusive on both ends: range 9-11 accepts a start hour of 11."""
        return self.start <= hour <= self.end

    def on_day(self, day: date, tz: tzinfo) -> Interval:
        """Concrete interval for this range on a local calendar day."""
        midnight = datetime.combine(day, time(0), tzinfo=tz)
        return Interval(
            midnight + timedelta(hours=self.start),
            midnight + timedelta(hours=self.end),
        )

    def to_dict(self) -> Dict[str, float]:
        return {"start": self.start, "end": self.end}

    @classmethod
    def from_value(cls, value: Any) -> "HourRange":
        if isinstance(value, HourRange):
            return value
        if isinstance(value, Mapping):
            try:
                return cls(value["start"], value["end"])
            except KeyError as exc:
                raise InvalidPreferencesError(f"Hour range missing {exc.args[0]!r}") from exc
        if isinstance(value, (list, tuple)) and len(value) == 2:
            return cls(value[0], value[1])
        raise InvalidPreferencesError(f"Cannot read hour range from {value!r}")


@dataclass(frozen=True, slots=True)
class FocusBlock:
    """A recurring daily focus block with a protection priority."""

    hours: HourRange
    priority: str = "high"

    def __post_init__(self) -> None:
        if self.priority not in FOCUS_PRIORITIES:
            raise InvalidPreferencesError(
                f"Unknown focus priority {self.priority!r}; expected one of {FOCUS_PRIORITIES}"
            )

    def to_dict(self) -> Dict[str, Any]:
        return {**self.hours.to_dict(), "priority": self.priority}

    @classmethod
    def from_value(cls, value: Any) -> "FocusBlock":
        if isinstance(value, FocusBlock):
            return value
        if not isinstance(value, Mapping):
            raise InvalidPreferencesError(f"Cannot read focus block from {value!r}")
        return cls(HourRange.from_value(value), value.get("priority", "high"))


@dataclass(frozen=True, slots=True)
class ProductivityPatterns:
    morning_person: bool = True
    afternoon_person: bool = False
    evening_person: bool = False

    def to_dict(self) -> Dict[str, bool]:
        return {
            "morning_person": self.morning_person,
            "afternoon_person": self.afternoon_person,
            "evening_person": self.evening_person,
        }


@dataclass(frozen=True, slots=True)
class SchedulingPreferences:
    """Immutable per-request scheduling configuration."""

    preferred_times: Tuple[HourRange, ...] = (HourRange(9, 11), HourRange(14, 16))
    avoid_times: Tuple[HourRange, ...] = (HourRange(12, 13), HourRange(17, 18))
    max_meetings_per_day: int = 6
    preferred_meeting_duration: int = 30  # minutes
    buffer_between_meetings: int = 15  # minutes
    lunch_break: HourRange = HourRange(12, 13)
    working_hours: HourRange = HourRange(9, 17)
    time_zone: str = "UTC"
    focus_time_blocks: Tuple[FocusBlock, ...] = ()
    travel_time_considerations: bool = True
    productivity_patterns: ProductivityPatterns = field(default_factory=ProductivityPatterns)

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "preferred_times", tuple(HourRange.from_value(r) for r in self.preferred_times)
        )
        object.__setattr__(
            self, "avoid_times", tuple(HourRange.from_value(r) for r in self.avoid_times)
        )
        object.__setattr__(
            self, "focus_time_blocks", tuple(FocusBlock.from_value(b) for b in self.focus_time_blocks)
        )
        object.__setattr__(self, "lunch_break", HourRange.from_value(self.lunch_break))
        object.__setattr__(self, "working_hours", HourRange.from_value(self.working_hours))

        _require_int("max_meetings_per_day", self.max_meetings_per_day, minimum=0)
        _require_int("preferred_meeting_duration", self.preferred_meeting_duration, minimum=1)
        _require_int("buffer_between_meetings", self.buffer_between_meetings, minimum=0)
        if not isinstance(self.productivity_patterns, ProductivityPatterns):
            raise InvalidPreferencesError("productivity_patterns must be a ProductivityPatterns value")
        try:
            ZoneInfo(self.time_zone)
        except (ZoneInfoNotFoundError, ValueError, TypeError) as exc:
            raise InvalidPreferencesError(f"Unknown time zone {self.time_zone!r}") from exc

    @property
    def tzinfo(self) -> ZoneInfo:
        return ZoneInfo(self.time_zone)

    def local_hour(self, instant: datetime) -> int:
        return instant.astimezone(self.tzinfo).hour

    def local_days(self, interval: Interval) -> Iterable[date]:
        """Local calendar days touched by ``interval``."""
        tz = self.tzinfo
        day = interval.start.astimezone(tz).date()
        last = interval.end.astimezone(tz).date()
        while day <= last:
            yield day
            day += timedelta(days=1)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "preferred_times": [r.to_dict() for r in self.preferred_times],
            "avoid_times": [r.to_dict() for r in self.avoid_times],
            "max_meetings_per_day": self.max_meetings_per_day,
            "preferred_meeting_duration": self.preferred_meeting_duration,
            "buffer_between_meetings": self.buffer_between_meetings,
            "lunch_break": self.lunch_break.to_dict(),
            "working_hours": self.working_hours.to_dict(),
            "time_zone": self.time_zone,
            "focus_time_blocks": [b.to_dict() for b in self.focus_time_blocks],
            "travel_time_considerations": self.travel_time_considerations,
            "productivity_patterns": self.productivity_patterns.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SchedulingPreferences":
        """Build preferences from a partial mapping; missing keys use defaults."""
        known = set(cls.__dataclass_fields__)
        unknown = sorted(set(data) - known)
        if unknown:
            raise InvalidPreferencesError(f"Unknown preference fields: {', '.join(unknown)}")

        kwargs: Dict[str, Any] = dict(data)
        patterns = kwargs.get("productivity_patterns")
        if isinstance(patterns, Mapping):
            try:
                kwargs["productivity_patterns"] = ProductivityPatterns(**patterns)
            except TypeError as exc:
                raise InvalidPreferencesError(f"Malformed productivity_patterns: {exc}") from exc
        for key in ("preferred_times", "avoid_times", "focus_time_blocks"):
            if key in kwargs and not isinstance(kwargs[key], (list, tuple)):
                raise InvalidPreferencesError(f"{key} must be a list")
        return cls(**kwargs)


def _require_int(name: str, value: Any, *, minimum: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidPreferencesError(f"{name} must be an integer, got {value!r}")
    if value < minimum:
        raise InvalidPreferencesError(f"{name} must be >= {minimum}, got {value}")


DEFAULT_PREFERENCES = SchedulingPreferences()


def load_preferences(path: Path | str, *, base: Optional[Mapping[str, Any]] = None) -> SchedulingPreferences:
    """Load preferences from a YAML (or JSON) file.

    Args:
        path: File to read. JSON is valid YAML, so either format works.
        base: Optional defaults merged underneath the file's values.

    Raises:
        InvalidPreferencesError: if the file is not a mapping or fails validation.
    """
    path = Path(path)
    text = path.read_text(encoding="utf-8")
    try:
        loaded = yaml.safe_load(text) if path.suffix != ".json" else json.loads(text)
    except (yaml.YAMLError, json.JSONDecodeError) as exc:
        raise InvalidPreferencesError(f"Could not parse {path}: {exc}") from exc

    if loaded is None:
        loaded = {}
    if not isinstance(loaded, Mapping):
        raise InvalidPreferencesError(f"{path} must contain a mapping of preference fields")
    merged = {**(base or {}), **loaded}
    return SchedulingPreferences.from_dict(merged)
