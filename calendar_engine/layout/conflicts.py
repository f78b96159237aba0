"""Conflict detection for candidate slots and for whole event sets.

Two entry points:
- ``detect`` checks one candidate interval against existing events and the
  caller's preferences (inline warnings in an editing form, slot conflicts).
- ``analyze_conflicts`` looks at every pair in an event set (day view
  warnings) and ``generate_resolutions`` proposes fixes for one conflict.

Descriptor order from ``detect`` is part of its contract: overlaps first, then
lunch, then buffer. Callers use it for display priority.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Tuple

from .. import constants as C
from ..events import Event
from ..interval import Interval, contains, overlap_minutes, overlaps
from ..preferences import SchedulingPreferences


class ConflictKind(str, Enum):
    TIME_OVERLAP = "time_overlap"
    RESOURCE_CONFLICT = "resource_conflict"
    BUFFER_VIOLATION = "buffer_violation"
    LUNCH_OVERLAP = "lunch_overlap"


class Severity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ResolutionType(str, Enum):
    RESCHEDULE = "reschedule"
    SHORTEN = "shorten"
    MERGE = "merge"
    CANCEL = "cancel"
    SPLIT = "split"
    DELEGATE = "delegate"
    RELOCATE = "relocate"


class Effort(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Disruption(str, Enum):
    MINIMAL = "minimal"
    MODERATE = "moderate"
    SIGNIFICANT = "significant"


@dataclass(frozen=True, slots=True)
class ConflictDescriptor:
    """One detected conflict.

    Resource conflicts name what is double-booked: ``shared_attendees`` for
    people, ``location`` for a room.
    """

    kind: ConflictKind
    severity: Severity
    involved_event_ids: Tuple[str, ...]
    description: str
    shared_attendees: Tuple[str, ...] = ()
    location: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind.value,
            "severity": self.severity.value,
            "involved_event_ids": list(self.involved_event_ids),
            "description": self.description,
            "shared_attendees": list(self.shared_attendees),
            "location": self.location,
        }


@dataclass(frozen=True, slots=True)
class ConflictResolution:
    """A proposed fix for one conflict, ranked by ``recommendation_score``."""

    id: str
    type: ResolutionType
    title: str
    description: str
    effort: Effort
    disruption: Disruption
    success_probability: float
    estimated_time_saved_minutes: int
    recommendation_score: float
    manual_steps: Tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type.value,
            "title": self.title,
            "description": self.description,
            "effort": self.effort.value,
            "disruption": self.disruption.value,
            "success_probability": self.success_probability,
            "estimated_time_saved_minutes": self.estimated_time_saved_minutes,
            "recommendation_score": self.recommendation_score,
            "manual_steps": list(self.manual_steps),
        }


# =============================================================================
# Candidate detection
# =============================================================================

def detect(
    candidate: Interval,
    events: Sequence[Event],
    prefs: SchedulingPreferences,
) -> List[ConflictDescriptor]:
    """Return every conflict ``candidate`` would introduce.

    Args:
        candidate: Interval being considered (a new slot or an edited event).
        events: Existing events, scanned in the order given.
        prefs: Supplies the lunch window, buffer and time zone.

    Returns:
        Descriptors in insertion order: time overlaps, lunch, buffer.
    """
    conflicts: List[ConflictDescriptor] = []

    for event in events:
        if not overlaps(candidate, event.interval):
            continue
        full = contains(candidate, event.interval) or contains(event.interval, candidate)
        conflicts.append(
            ConflictDescriptor(
                kind=ConflictKind.TIME_OVERLAP,
                severity=Severity.HIGH if full else Severity.MEDIUM,
                involved_event_ids=(event.id,),
                description=(
                    f"Fully overlaps '{_label(event)}'" if full
                    else f"Partially overlaps '{_label(event)}'"
                ),
            )
        )

    if _touches_lunch(candidate, prefs):
        conflicts.append(
            ConflictDescriptor(
                kind=ConflictKind.LUNCH_OVERLAP,
                severity=Severity.MEDIUM,
                involved_event_ids=(),
                description="Overlaps with lunch break",
            )
        )

    buffer_conflict = _buffer_violation(candidate, events, prefs.buffer_between_meetings)
    if buffer_conflict is not None:
        conflicts.append(buffer_conflict)

    return conflicts


def _touches_lunch(candidate: Interval, prefs: SchedulingPreferences) -> bool:
    tz = prefs.tzinfo
    for day in prefs.local_days(candidate):
        lunch = prefs.lunch_break.on_day(day, tz)
        if not lunch.is_empty and overlaps(candidate, lunch):
            return True
    return False


def _buffer_violation(
    candidate: Interval,
    events: Sequence[Event],
    buffer_minutes: int,
) -> Optional[ConflictDescriptor]:
    if buffer_minutes <= 0:
        return None
    buffer = timedelta(minutes=buffer_minutes)

    before: Optional[Event] = None
    after: Optional[Event] = None
    for event in events:
        if event.end <= candidate.start:
            if before is None or (event.end, event.id) > (before.end, before.id):
                before = event
        elif event.start >= candidate.end:
            if after is None or (event.start, event.id) < (after.start, after.id):
                after = event

    involved: List[str] = []
    if before is not None and candidate.start - before.end < buffer:
        involved.append(before.id)
    if after is not None and after.start - candidate.end < buffer:
        involved.append(after.id)
    if not involved:
        return None

    return ConflictDescriptor(
        kind=ConflictKind.BUFFER_VIOLATION,
        severity=Severity.LOW,
        involved_event_ids=tuple(involved),
        description=f"Less than {buffer_minutes} minutes from an adjacent event",
    )


def _label(event: Event) -> str:
    return event.title or event.id


# =============================================================================
# Pairwise analysis
# =============================================================================

def analyze_conflicts(events: Sequence[Event]) -> List[ConflictDescriptor]:
    """Detect conflicts between every pair of events in a set.

    Events are visited in (start, id) order so the output is stable no matter
    how the caller ordered them.
    """
    ordered = sorted(events, key=lambda e: (e.start, e.id))
    conflicts: List[ConflictDescriptor] = []

    for i, first in enumerate(ordered):
        for second in ordered[i + 1:]:
            conflicts.extend(_analyze_pair(first, second))
    return conflicts


def _analyze_pair(first: Event, second: Event) -> List[ConflictDescriptor]:
    found: List[ConflictDescriptor] = []
    ids = (first.id, second.id)

    if overlaps(first.interval, second.interval):
        minutes = overlap_minutes(first.interval, second.interval)
        if minutes > C.OVERLAP_CRITICAL_MINUTES:
            severity = Severity.CRITICAL
        elif minutes > C.OVERLAP_HIGH_MINUTES:
            severity = Severity.HIGH
        else:
            severity = Severity.MEDIUM
        found.append(
            ConflictDescriptor(
                kind=ConflictKind.TIME_OVERLAP,
                severity=severity,
                involved_event_ids=ids,
                description=f"'{_label(first)}' and '{_label(second)}' overlap by {minutes} minutes",
            )
        )

        shared = sorted(first.attendees & second.attendees)
        if shared:
            found.append(
                ConflictDescriptor(
                    kind=ConflictKind.RESOURCE_CONFLICT,
                    severity=Severity.MEDIUM,
                    involved_event_ids=ids,
                    description=f"Attendees double-booked: {', '.join(shared)}",
                    shared_attendees=tuple(shared),
                )
            )
        if first.location and first.location == second.location:
            found.append(
                ConflictDescriptor(
                    kind=ConflictKind.RESOURCE_CONFLICT,
                    severity=Severity.MEDIUM,
                    involved_event_ids=ids,
                    description=f"'{first.location}' booked by both events",
                    location=first.location,
                )
            )
        return found

    if first.location and second.location and first.location != second.location:
        gap = int((second.start - first.end).total_seconds() // 60)
        if 0 <= gap < C.TRAVEL_ESTIMATE_MINUTES:
            found.append(
                ConflictDescriptor(
                    kind=ConflictKind.BUFFER_VIOLATION,
                    severity=Severity.HIGH if gap < C.TRAVEL_TIGHT_MINUTES else Severity.MEDIUM,
                    involved_event_ids=ids,
                    description=(
                        f"Only {gap} minutes to travel from '{first.location}' to "
                        f"'{second.location}' ({C.TRAVEL_ESTIMATE_MINUTES} needed)"
                    ),
                )
            )
    return found


def generate_resolutions(
    conflict: ConflictDescriptor,
    events: Sequence[Event],
) -> List[ConflictResolution]:
    """Return ranked resolutions for one pairwise conflict."""
    by_id = {event.id: event for event in events}
    involved = [by_id[i] for i in conflict.involved_event_ids if i in by_id]
    key = "_".join(conflict.involved_event_ids) or "candidate"
    resolutions: List[ConflictResolution] = []

    if conflict.kind == ConflictKind.TIME_OVERLAP and len(involved) == 2:
        first, second = involved
        minutes = overlap_minutes(first.interval, second.interval)
        resolutions.append(
            ConflictResolution(
                id=f"reschedule_{key}",
                type=ResolutionType.RESCHEDULE,
                title="Reschedule Later Event",
                description=f"Move '{_label(second)}' to the next available slot",
                effort=Effort.MEDIUM,
                disruption=Disruption.MODERATE,
                success_probability=C.RESCHEDULE_SUCCESS_PROBABILITY,
                estimated_time_saved_minutes=minutes,
                recommendation_score=0.9,
                manual_steps=(
                    "Notify all attendees",
                    "Find alternative time slot",
                    "Update calendar invitations",
                ),
            )
        )
        resolutions.append(
            ConflictResolution(
                id=f"shorten_{key}",
                type=ResolutionType.SHORTEN,
                title="Shorten First Event",
                description=f"Reduce '{_label(first)}' to end when '{_label(second)}' starts",
                effort=Effort.LOW,
                disruption=Disruption.MINIMAL,
                success_probability=0.7,
                estimated_time_saved_minutes=minutes // 2,
                recommendation_score=0.75,
            )
        )
    elif conflict.kind == ConflictKind.BUFFER_VIOLATION:
        resolutions.append(
            ConflictResolution(
                id=f"buffer_{key}",
                type=ResolutionType.RESCHEDULE,
                title="Add Travel Buffer",
                description=(
                    f"Reschedule the second event to allow {C.TRAVEL_ESTIMATE_MINUTES} "
                    "minutes of travel time"
                ),
                effort=Effort.MEDIUM,
                disruption=Disruption.MODERATE,
                success_probability=0.8,
                estimated_time_saved_minutes=0,
                recommendation_score=0.85,
            )
        )
    elif conflict.kind == ConflictKind.RESOURCE_CONFLICT and conflict.shared_attendees:
        resolutions.append(
            ConflictResolution(
                id=f"delegate_{key}",
                type=ResolutionType.DELEGATE,
                title="Delegate Attendance",
                description=(
                    f"Have {', '.join(conflict.shared_attendees)} send representatives "
                    "to one of the meetings"
                ),
                effort=Effort.LOW,
                disruption=Disruption.MINIMAL,
                success_probability=0.6,
                estimated_time_saved_minutes=30,
                recommendation_score=0.7,
            )
        )
    elif conflict.kind == ConflictKind.RESOURCE_CONFLICT and conflict.location:
        moved = involved[-1] if involved else None
        resolutions.append(
            ConflictResolution(
                id=f"relocate_{key}",
                type=ResolutionType.RELOCATE,
                title="Move to Another Room",
                description=(
                    f"Book a different room for '{_label(moved)}'" if moved
                    else f"Book a room other than '{conflict.location}'"
                ),
                effort=Effort.LOW,
                disruption=Disruption.MINIMAL,
                success_probability=0.75,
                estimated_time_saved_minutes=0,
                recommendation_score=0.8,
                manual_steps=(
                    "Check room availability",
                    "Update the event location",
                    "Notify attendees of the new room",
                ),
            )
        )
    else:
        resolutions.append(
            ConflictResolution(
                id=f"generic_{key}",
                type=ResolutionType.RESCHEDULE,
                title="Smart Reschedule",
                description="Find the best available time to resolve this conflict",
                effort=Effort.MEDIUM,
                disruption=Disruption.MODERATE,
                success_probability=0.75,
                estimated_time_saved_minutes=15,
                recommendation_score=0.8,
            )
        )

    resolutions.sort(key=lambda r: r.recommendation_score, reverse=True)
    return resolutions
