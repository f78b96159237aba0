"""Versioned scoring weights and heuristic thresholds.

Every magic number the scheduling and conflict engines rely on lives here so
that scores stay comparable across runs and tests can assert against the
table directly. Bump ``WEIGHTS_VERSION`` whenever a value changes.
"""
from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, Tuple


WEIGHTS_VERSION = "1"

# Consideration names, in the order they are reported on a TimeSlot.
ATTENDEE_AVAILABILITY = "attendee_availability"
TIME_ZONE_FRIENDLINESS = "time_zone_friendliness"
PRODUCTIVITY_ALIGNMENT = "productivity_alignment"
TRAVEL_TIME_BUFFER = "travel_time_buffer"
FOCUS_TIME_PROTECTION = "focus_time_protection"
MEETING_FATIGUE = "meeting_fatigue"

CONSIDERATION_WEIGHTS: Mapping[str, float] = MappingProxyType(
    {
        ATTENDEE_AVAILABILITY: 0.30,
        TIME_ZONE_FRIENDLINESS: 0.15,
        PRODUCTIVITY_ALIGNMENT: 0.25,
        TRAVEL_TIME_BUFFER: 0.10,
        FOCUS_TIME_PROTECTION: 0.15,
        MEETING_FATIGUE: 0.05,
    }
)

# Slots scoring at or below this are not viable and never leave the search.
VIABILITY_CUTOFF = 0.3

# Score given to a reason rule before it fires (strictly greater than).
REASON_THRESHOLD = 0.8

# Search grid.
SLOT_GRANULARITY_MINUTES = 30
DEFAULT_TOP_N = 10

# time_zone_friendliness: (first hour, last hour inclusive, score), first match wins.
TIME_ZONE_BANDS: Tuple[Tuple[int, int, float], ...] = (
    (9, 16, 1.0),
    (8, 17, 0.8),
    (7, 18, 0.6),
)
TIME_ZONE_FALLBACK = 0.3

# productivity_alignment
PRODUCTIVITY_WINDOWS: Mapping[str, Tuple[int, int]] = MappingProxyType(
    {
        "morning_person": (8, 11),
        "afternoon_person": (13, 16),
        "evening_person": (16, 18),
    }
)
PRODUCTIVITY_PEAK = 1.0
PRODUCTIVITY_PREFERRED = 0.9
PRODUCTIVITY_AVOIDED = 0.2
PRODUCTIVITY_NEUTRAL = 0.6

# focus_time_protection
FOCUS_BLOCK_PENALTY = 0.3
FOCUS_BLOCK_CLEAR = 1.0

# travel_time_buffer
TRAVEL_LOOKAROUND_MINUTES = 15
TRAVEL_LOCATION_PENALTY = 0.3

# meeting_fatigue: (max meetings that day, score), first match wins.
FATIGUE_CURVE: Tuple[Tuple[int, float], ...] = (
    (3, 1.0),
    (5, 0.8),
    (7, 0.6),
)
FATIGUE_FLOOR = 0.4

# Pairwise conflict analysis.
OVERLAP_CRITICAL_MINUTES = 30
OVERLAP_HIGH_MINUTES = 15
TRAVEL_ESTIMATE_MINUTES = 30
TRAVEL_TIGHT_MINUTES = 15

# Suggestions.
FOCUS_BLOCK_MINUTES = 120
FOCUS_SUGGESTION_MIN_SCORE = 0.8
CONSOLIDATION_CONFIDENCE = 0.85
RESCHEDULE_SUCCESS_PROBABILITY = 0.85
CONFIDENCE_OVERCOMMITMENT = 0.65
BREAK_MINUTES = 15

TIME_SAVED_MINUTES: Mapping[str, int] = MappingProxyType(
    {
        "consolidate": 30,
        "focus_time": 60,
        "break_time": 15,
    }
)

# (productivity_gain, attendee_satisfaction, schedule_efficiency)
SUGGESTION_IMPACT: Mapping[str, Tuple[float, float, float]] = MappingProxyType(
    {
        "consolidate": (0.8, 0.7, 0.9),
        "focus_time": (0.9, 0.8, 0.8),
        "reschedule": (0.6, 0.7, 0.8),
        "break_time": (0.7, 0.6, 0.5),
    }
)

# Considerations reported for a consolidated block, which is not scored.
CONSOLIDATED_CONSIDERATIONS: Mapping[str, float] = MappingProxyType(
    {
        ATTENDEE_AVAILABILITY: 0.9,
        TIME_ZONE_FRIENDLINESS: 0.8,
        PRODUCTIVITY_ALIGNMENT: 0.9,
        TRAVEL_TIME_BUFFER: 1.0,
        FOCUS_TIME_PROTECTION: 0.7,
        MEETING_FATIGUE: 0.6,
    }
)

# Title words never used to relate events for consolidation.
TITLE_STOP_WORDS = frozenset(
    {
        "the", "and", "for", "with", "meeting", "call", "sync", "chat",
        "weekly", "daily", "monthly", "new", "re", "fw",
    }
)
MIN_TITLE_TOKEN_LENGTH = 3
