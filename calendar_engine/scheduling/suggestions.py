"""Higher-level scheduling suggestions derived from slots and events.

Strategies run independently and their results are merged, then ordered by
confidence (descending, stable):

- consolidate: related events (same leading title word, or shared attendees)
  that could become one block
- focus_time: the best 2-hour block, when it scores well enough
- reschedule: a new slot for the later event of each overlapping pair
- break_time: a short break on days with more meetings than preferred
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Tuple

from .. import constants as C
from ..events import Event, EventCategory
from ..interval import Interval, duration_minutes, intersection, overlap_minutes, overlaps
from ..layout.conflicts import ConflictKind, analyze_conflicts
from ..preferences import SchedulingPreferences
from .scorer import TimeSlot
from .search import search_slots

logger = logging.getLogger(__name__)

class SuggestionType(str, Enum):
    OPTIMAL_TIME = "optimal_time"
    RESCHEDULE = "reschedule"
    CONSOLIDATE = "consolidate"
    FOCUS_TIME = "focus_time"
    BREAK_TIME = "break_time"
    TRAVEL_BUFFER = "travel_buffer"


class ActionRequired(str, Enum):
    AUTOMATIC = "automatic"
    USER_APPROVAL = "user_approval"
    MANUAL = "manual"


SUGGESTION_TYPES = tuple(t.value for t in SuggestionType)

_WORD = re.compile(r"[a-z0-9]+")


@dataclass(frozen=True, slots=True)
class SuggestionImpact:
    productivity_gain: float
    attendee_satisfaction: float
    schedule_efficiency: float

    @classmethod
    def for_type(cls, suggestion_type: SuggestionType) -> "SuggestionImpact":
        return cls(*C.SUGGESTION_IMPACT[SuggestionType(suggestion_type).value])

    def to_dict(self) -> Dict[str, float]:
        return {
            "productivity_gain": self.productivity_gain,
            "attendee_satisfaction": self.attendee_satisfaction,
            "schedule_efficiency": self.schedule_efficiency,
        }


@dataclass(frozen=True, slots=True)
class Suggestion:
    id: str
    type: SuggestionType
    title: str
    description: str
    target_slot: TimeSlot
    impact: SuggestionImpact
    action_required: ActionRequired
    estimated_time_saved_minutes: int
    confidence: float
    involved_event_ids: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type.value,
            "title": self.title,
            "description": self.description,
            "target_slot": self.target_slot.to_dict(),
            "impact": self.impact.to_dict(),
            "action_required": self.action_required.value,
            "estimated_time_saved_minutes": self.estimated_time_saved_minutes,
            "confidence": self.confidence,
            "involved_event_ids": list(self.involved_event_ids),
        }


def generate_suggestions(
    events: Sequence[Event],
    search_range: Interval,
    prefs: SchedulingPreferences,
) -> List[Suggestion]:
    """Return every applicable suggestion for the range, most confident first."""
    in_range = [event for event in events if overlaps(event.interval, search_range)]

    suggestions: List[Suggestion] = []
    suggestions.extend(consolidation_suggestions(in_range))
    focus = focus_time_suggestion(events, search_range, prefs)
    if focus is not None:
        suggestions.append(focus)
    suggestions.extend(reschedule_suggestions(events, in_range, search_range, prefs))
    suggestions.extend(break_suggestions(events, search_range, prefs))

    suggestions.sort(key=lambda s: s.confidence, reverse=True)
    logger.debug("Generated %d suggestions for %d events in range", len(suggestions), len(in_range))
    return suggestions


# =============================================================================
# Consolidation
# =============================================================================

def leading_token(title: str) -> Optional[str]:
    """First significant word of a title, lowercased.

    Stop words and very short words are skipped so common openers like
    "Weekly" or "1:1" do not relate unrelated events.
    """
    for word in _WORD.findall(title.lower()):
        if len(word) >= C.MIN_TITLE_TOKEN_LENGTH and word not in C.TITLE_STOP_WORDS:
            return word
    return None


def _related(a: Event, b: Event) -> bool:
    token = leading_token(a.title)
    if token is not None and token == leading_token(b.title):
        return True
    return not a.attendees.isdisjoint(b.attendees)


def find_related_groups(events: Sequence[Event]) -> List[List[Event]]:
    """Group events transitively by relatedness; only groups of two or more."""
    candidates = [e for e in events if not e.is_all_day and e.category != EventCategory.NOTE]
    candidates.sort(key=lambda e: (e.start, e.id))

    parent = list(range(len(candidates)))

    def find(i: int) -> int:
        while parent[i] != i:
            parent[i] = parent[parent[i]]
            i = parent[i]
        return i

    for i, first in enumerate(candidates):
        for j in range(i + 1, len(candidates)):
            if _related(first, candidates[j]):
                root_i, root_j = find(i), find(j)
                if root_i != root_j:
                    parent[max(root_i, root_j)] = min(root_i, root_j)

    groups: Dict[int, List[Event]] = {}
    for i, event in enumerate(candidates):
        groups.setdefault(find(i), []).append(event)
    return [group for _, group in sorted(groups.items()) if len(group) >= 2]


def consolidation_suggestions(events: Sequence[Event]) -> List[Suggestion]:
    suggestions: List[Suggestion] = []
    for group in find_related_groups(events):
        block = Interval(min(e.start for e in group), max(e.end for e in group))
        slot = TimeSlot(
            interval=block,
            score=C.CONSOLIDATION_CONFIDENCE,
            reasons=("Reduces context switching", "Creates focused work blocks"),
            considerations=dict(C.CONSOLIDATED_CONSIDERATIONS),
        )
        suggestions.append(
            Suggestion(
                id=f"consolidate_{group[0].id}",
                type=SuggestionType.CONSOLIDATE,
                title="Consolidate Related Meetings",
                description=f"Combine {len(group)} related meetings to create focus blocks",
                target_slot=slot,
                impact=SuggestionImpact.for_type(SuggestionType.CONSOLIDATE),
                action_required=ActionRequired.USER_APPROVAL,
                estimated_time_saved_minutes=C.TIME_SAVED_MINUTES[SuggestionType.CONSOLIDATE.value],
                confidence=C.CONSOLIDATION_CONFIDENCE,
                involved_event_ids=tuple(e.id for e in group),
            )
        )
    return suggestions


# =============================================================================
# Focus time
# =============================================================================

def focus_time_suggestion(
    events: Sequence[Event],
    search_range: Interval,
    prefs: SchedulingPreferences,
) -> Optional[Suggestion]:
    slots = search_slots(C.FOCUS_BLOCK_MINUTES, events, search_range, prefs, top_n=1)
    if not slots or slots[0].score < C.FOCUS_SUGGESTION_MIN_SCORE:
        return None
    best = slots[0]
    return Suggestion(
        id="protect_focus_time",
        type=SuggestionType.FOCUS_TIME,
        title="Block Focus Time",
        description="Reserve a 2-hour focus block during your most productive hours",
        target_slot=best,
        impact=SuggestionImpact.for_type(SuggestionType.FOCUS_TIME),
        action_required=ActionRequired.AUTOMATIC,
        estimated_time_saved_minutes=C.TIME_SAVED_MINUTES[SuggestionType.FOCUS_TIME.value],
        confidence=best.score,
    )


# =============================================================================
# Conflict resolution
# =============================================================================

def reschedule_suggestions(
    events: Sequence[Event],
    in_range: Sequence[Event],
    search_range: Interval,
    prefs: SchedulingPreferences,
) -> List[Suggestion]:
    by_id = {event.id: event for event in in_range}
    suggestions: List[Suggestion] = []
    seen: set = set()

    for conflict in analyze_conflicts(in_range):
        if conflict.kind != ConflictKind.TIME_OVERLAP:
            continue
        first, second = (by_id[i] for i in conflict.involved_event_ids)
        if second.id in seen or second.is_all_day:
            continue
        seen.add(second.id)

        others = [event for event in events if event.id != second.id]
        slots = search_slots(
            duration_minutes(second.interval),
            others,
            search_range,
            prefs,
            attendees=sorted(second.attendees),
            top_n=5,
        )
        best = next((slot for slot in slots if not _clashes(slot, others)), None)
        if best is None:
            continue
        suggestions.append(
            Suggestion(
                id=f"reschedule_{second.id}",
                type=SuggestionType.RESCHEDULE,
                title="Reschedule Conflicting Event",
                description=(
                    f"Move '{second.title or second.id}' to "
                    f"{best.interval.start.astimezone(prefs.tzinfo):%a %H:%M} "
                    f"to clear its overlap with '{first.title or first.id}'"
                ),
                target_slot=best,
                impact=SuggestionImpact.for_type(SuggestionType.RESCHEDULE),
                action_required=ActionRequired.USER_APPROVAL,
                estimated_time_saved_minutes=overlap_minutes(first.interval, second.interval),
                confidence=best.score * C.RESCHEDULE_SUCCESS_PROBABILITY,
                involved_event_ids=(first.id, second.id),
            )
        )
    return suggestions


def _clashes(slot: TimeSlot, events: Sequence[Event]) -> bool:
    return any(overlaps(slot.interval, event.interval) for event in events if not event.is_all_day)


# =============================================================================
# Overcommitment breaks
# =============================================================================

def break_suggestions(
    events: Sequence[Event],
    search_range: Interval,
    prefs: SchedulingPreferences,
) -> List[Suggestion]:
    tz = prefs.tzinfo
    meetings_by_day: Dict[Any, int] = {}
    for event in events:
        if event.is_meeting and overlaps(event.interval, search_range):
            day = event.local_date(tz)
            meetings_by_day[day] = meetings_by_day.get(day, 0) + 1

    suggestions: List[Suggestion] = []
    for day in sorted(meetings_by_day):
        count = meetings_by_day[day]
        if count <= prefs.max_meetings_per_day:
            continue
        window = intersection(prefs.working_hours.on_day(day, tz), search_range)
        if window is None:
            continue
        slots = search_slots(C.BREAK_MINUTES, events, window, prefs, top_n=10)
        best = next((slot for slot in slots if not _clashes(slot, events)), None)
        if best is None:
            continue
        suggestions.append(
            Suggestion(
                id=f"break_{day.isoformat()}",
                type=SuggestionType.BREAK_TIME,
                title="Schedule a Break",
                description=(
                    f"{count} meetings on {day:%a %b %d} exceeds your limit of "
                    f"{prefs.max_meetings_per_day}; protect a short break"
                ),
                target_slot=best,
                impact=SuggestionImpact.for_type(SuggestionType.BREAK_TIME),
                action_required=ActionRequired.USER_APPROVAL,
                estimated_time_saved_minutes=C.TIME_SAVED_MINUTES[SuggestionType.BREAK_TIME.value],
                confidence=C.CONFIDENCE_OVERCOMMITMENT,
            )
        )
    return suggestions
