"""Calendar engine: lane layout, conflict detection and slot scheduling.

Everything here is a pure function over immutable inputs. Callers pass event
snapshots and a SchedulingPreferences value on every call and may run
independent requests in parallel.
"""
from __future__ import annotations

from .constants import CONSIDERATION_WEIGHTS, WEIGHTS_VERSION
from .events import Event, EventCategory, events_from_payload
from .interval import (
    Interval,
    InvalidIntervalError,
    contains,
    duration_minutes,
    overlaps,
)
from .layout import (
    ConflictDescriptor,
    ConflictKind,
    ConflictResolution,
    Disruption,
    Effort,
    EventPlacement,
    LaneAssignment,
    ResolutionType,
    Severity,
    analyze_conflicts,
    assign_lanes,
    assign_lanes_by_day,
    detect,
    generate_resolutions,
    layout_events,
    normalize_for_span,
)
from .preferences import (
    DEFAULT_PREFERENCES,
    FocusBlock,
    HourRange,
    InvalidPreferencesError,
    ProductivityPatterns,
    SchedulingPreferences,
    load_preferences,
)
from .scheduling import (
    ActionRequired,
    EmptyRangeError,
    Suggestion,
    SuggestionImpact,
    SuggestionType,
    TimeSlot,
    generate_suggestions,
    score_slot,
    search_slots,
)


__all__ = [
    # Constants
    "CONSIDERATION_WEIGHTS",
    "WEIGHTS_VERSION",
    # Model
    "Event",
    "EventCategory",
    "events_from_payload",
    "Interval",
    "InvalidIntervalError",
    "contains",
    "duration_minutes",
    "overlaps",
    # Preferences
    "DEFAULT_PREFERENCES",
    "FocusBlock",
    "HourRange",
    "InvalidPreferencesError",
    "ProductivityPatterns",
    "SchedulingPreferences",
    "load_preferences",
    # Layout
    "ConflictDescriptor",
    "ConflictKind",
    "ConflictResolution",
    "Disruption",
    "Effort",
    "EventPlacement",
    "LaneAssignment",
    "ResolutionType",
    "Severity",
    "analyze_conflicts",
    "assign_lanes",
    "assign_lanes_by_day",
    "detect",
    "generate_resolutions",
    "layout_events",
    "normalize_for_span",
    # Scheduling
    "ActionRequired",
    "EmptyRangeError",
    "Suggestion",
    "SuggestionImpact",
    "SuggestionType",
    "TimeSlot",
    "generate_suggestions",
    "score_slot",
    "search_slots",
]
