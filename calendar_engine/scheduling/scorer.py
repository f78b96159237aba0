"""Weighted multi-factor scoring for one candidate time slot.

Each consideration is an independent function returning a value in [0, 1].
The overall score is their weighted sum using ``constants.CONSIDERATION_WEIGHTS``,
a fixed, versioned table that callers cannot reweight.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from .. import constants as C
from ..events import Event
from ..interval import Interval, overlaps
from ..layout.conflicts import ConflictDescriptor, detect
from ..preferences import SchedulingPreferences


@dataclass(frozen=True, slots=True)
class TimeSlot:
    """A scored candidate. Never mutated after the scorer builds it."""

    interval: Interval
    score: float
    reasons: Tuple[str, ...]
    considerations: Mapping[str, float]
    conflicts: Tuple[ConflictDescriptor, ...] = field(default_factory=tuple)

    @property
    def id(self) -> str:
        return f"slot_{int(self.interval.start.timestamp())}_{int(self.interval.end.timestamp())}"

    @property
    def is_viable(self) -> bool:
        return self.score > C.VIABILITY_CUTOFF

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "start": self.interval.start.isoformat(),
            "end": self.interval.end.isoformat(),
            "score": self.score,
            "reasons": list(self.reasons),
            "considerations": dict(self.considerations),
            "conflicts": [c.to_dict() for c in self.conflicts],
        }


# =============================================================================
# Considerations
# =============================================================================

def attendee_availability(
    candidate: Interval,
    events: Sequence[Event],
    attendees: Sequence[str],
) -> float:
    if not attendees:
        return 1.0
    wanted = set(attendees)
    conflicts = sum(
        1
        for event in events
        if overlaps(candidate, event.interval) and not wanted.isdisjoint(event.attendees)
    )
    if conflicts == 0:
        return 1.0
    return max(0.0, 1.0 - conflicts / len(wanted))


def productivity_alignment(candidate: Interval, prefs: SchedulingPreferences) -> float:
    hour = prefs.local_hour(candidate.start)
    patterns = prefs.productivity_patterns

    for flag, (first, last) in C.PRODUCTIVITY_WINDOWS.items():
        if getattr(patterns, flag) and first <= hour <= last:
            return C.PRODUCTIVITY_PEAK
    if any(r.contains_hour(hour) for r in prefs.preferred_times):
        return C.PRODUCTIVITY_PREFERRED
    if any(r.contains_hour(hour) for r in prefs.avoid_times):
        return C.PRODUCTIVITY_AVOIDED
    return C.PRODUCTIVITY_NEUTRAL


def time_zone_friendliness(candidate: Interval, prefs: SchedulingPreferences) -> float:
    hour = prefs.local_hour(candidate.start)
    for first, last, value in C.TIME_ZONE_BANDS:
        if first <= hour <= last:
            return value
    return C.TIME_ZONE_FALLBACK


def focus_time_protection(candidate: Interval, prefs: SchedulingPreferences) -> float:
    tz = prefs.tzinfo
    for block in prefs.focus_time_blocks:
        if block.priority != "high":
            continue
        for day in prefs.local_days(candidate):
            window = block.hours.on_day(day, tz)
            if overlaps(candidate, window):
                return C.FOCUS_BLOCK_PENALTY
    return C.FOCUS_BLOCK_CLEAR


def travel_time_buffer(
    candidate: Interval,
    events: Sequence[Event],
    prefs: SchedulingPreferences,
) -> float:
    if not prefs.travel_time_considerations:
        return 1.0
    window = timedelta(minutes=C.TRAVEL_LOOKAROUND_MINUTES)

    before: Optional[Event] = None
    after: Optional[Event] = None
    for event in events:
        if candidate.start - window < event.end <= candidate.start:
            if before is None or (event.end, event.id) > (before.end, before.id):
                before = event
        if candidate.end <= event.start < candidate.end + window:
            if after is None or (event.start, event.id) < (after.start, after.id):
                after = event

    score = 1.0
    if before is not None and before.location:
        score -= C.TRAVEL_LOCATION_PENALTY
    if after is not None and after.location:
        score -= C.TRAVEL_LOCATION_PENALTY
    return max(0.0, score)


def meeting_fatigue(
    candidate: Interval,
    events: Sequence[Event],
    prefs: SchedulingPreferences,
) -> float:
    tz = prefs.tzinfo
    day = candidate.start.astimezone(tz).date()
    count = sum(1 for event in events if event.is_meeting and event.local_date(tz) == day)
    for limit, value in C.FATIGUE_CURVE:
        if count <= limit:
            return value
    return C.FATIGUE_FLOOR


# =============================================================================
# Scoring
# =============================================================================

def combine(considerations: Mapping[str, float]) -> float:
    """Weighted sum of considerations, clamped to [0, 1]."""
    total = math.fsum(
        considerations[name] * weight for name, weight in C.CONSIDERATION_WEIGHTS.items()
    )
    return min(1.0, max(0.0, total))


def slot_reasons(considerations: Mapping[str, float]) -> List[str]:
    reasons: List[str] = []
    threshold = C.REASON_THRESHOLD
    if considerations[C.ATTENDEE_AVAILABILITY] > threshold:
        reasons.append("High attendee availability")
    if considerations[C.PRODUCTIVITY_ALIGNMENT] > threshold:
        reasons.append("Aligns with productivity patterns")
    if considerations[C.TIME_ZONE_FRIENDLINESS] > threshold:
        reasons.append("Optimal time zone coverage")
    if considerations[C.TRAVEL_TIME_BUFFER] > threshold:
        reasons.append("Good buffer time for travel")
    if considerations[C.MEETING_FATIGUE] > threshold:
        reasons.append("Light meeting load")
    if not reasons:
        reasons.append("Available time slot")
    return reasons


def score_slot(
    candidate: Interval,
    events: Sequence[Event],
    prefs: SchedulingPreferences,
    attendees: Sequence[str] = (),
) -> TimeSlot:
    """Score one candidate slot.

    Args:
        candidate: Interval under evaluation.
        events: Existing events for the surrounding period.
        prefs: Validated scheduling preferences.
        attendees: Attendee ids that must be free.

    Returns:
        TimeSlot with the overall score, per-consideration values, reasons and
        the conflicts ``detect`` reports for the candidate.
    """
    considerations = {
        C.ATTENDEE_AVAILABILITY: attendee_availability(candidate, events, attendees),
        C.TIME_ZONE_FRIENDLINESS: time_zone_friendliness(candidate, prefs),
        C.PRODUCTIVITY_ALIGNMENT: productivity_alignment(candidate, prefs),
        C.TRAVEL_TIME_BUFFER: travel_time_buffer(candidate, events, prefs),
        C.FOCUS_TIME_PROTECTION: focus_time_protection(candidate, prefs),
        C.MEETING_FATIGUE: meeting_fatigue(candidate, events, prefs),
    }
    return TimeSlot(
        interval=candidate,
        score=combine(considerations),
        reasons=tuple(slot_reasons(considerations)),
        considerations=considerations,
        conflicts=tuple(detect(candidate, events, prefs)),
    )
