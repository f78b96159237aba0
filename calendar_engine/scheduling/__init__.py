"""Time-slot scheduling engine: scoring, search and suggestions."""
from __future__ import annotations

from .scorer import TimeSlot, score_slot
from .search import EmptyRangeError, candidate_intervals, search_slots
from .suggestions import (
    SUGGESTION_TYPES,
    ActionRequired,
    Suggestion,
    SuggestionImpact,
    SuggestionType,
    generate_suggestions,
)


__all__ = [
    "TimeSlot",
    "score_slot",
    "EmptyRangeError",
    "candidate_intervals",
    "search_slots",
    "SUGGESTION_TYPES",
    "ActionRequired",
    "Suggestion",
    "SuggestionImpact",
    "SuggestionType",
    "generate_suggestions",
]
