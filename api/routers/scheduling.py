"""Scheduling Router - candidate checks, slot search and suggestions.

Handles:
- Conflicts for one proposed interval
- Ranked free-slot search
- Calendar improvement suggestions
"""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from api.dependencies import (
    get_settings,
    serialize_conflict,
    serialize_slot,
    serialize_suggestion,
    to_events,
    to_interval,
    to_preferences,
    unprocessable,
)
from api.models import DetectRequest, SlotSearchRequest, SuggestionRequest
from calendar_engine import (
    InvalidIntervalError,
    WEIGHTS_VERSION,
    detect,
    generate_suggestions,
    search_slots,
)
from calendar_engine.config import Settings

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/conflicts")
def detect_endpoint(
    request: DetectRequest,
    settings: Settings = Depends(get_settings),
) -> dict:
    """List the conflicts a proposed interval would create."""
    candidate = to_interval(request.candidate)
    events = to_events(request.events)
    prefs = to_preferences(request.preferences, settings)

    conflicts = detect(candidate, events, prefs)
    return {
        "conflicts": [serialize_conflict(c) for c in conflicts],
        "count": len(conflicts),
    }


@router.post("/slots")
def slots_endpoint(
    request: SlotSearchRequest,
    settings: Settings = Depends(get_settings),
) -> dict:
    """Return the best viable slots for a meeting, best first."""
    search_range = to_interval(request.range)
    events = to_events(request.events)
    prefs = to_preferences(request.preferences, settings)
    top_n = request.top_n if request.top_n is not None else settings.search_top_n

    try:
        slots = search_slots(
            request.duration_minutes,
            events,
            search_range,
            prefs,
            attendees=request.attendees,
            top_n=top_n,
        )
    except InvalidIntervalError as exc:
        raise unprocessable(exc) from exc

    logger.info(
        "Slot search for %d minutes returned %d slots", request.duration_minutes, len(slots)
    )
    return {
        "slots": [serialize_slot(s) for s in slots],
        "count": len(slots),
        "weightsVersion": WEIGHTS_VERSION,
    }


@router.post("/suggestions")
def suggestions_endpoint(
    request: SuggestionRequest,
    settings: Settings = Depends(get_settings),
) -> dict:
    """Suggest consolidations, focus time, reschedules and breaks."""
    search_range = to_interval(request.range)
    events = to_events(request.events)
    prefs = to_preferences(request.preferences, settings)

    suggestions = generate_suggestions(events, search_range, prefs)
    return {
        "suggestions": [serialize_suggestion(s) for s in suggestions],
        "count": len(suggestions),
    }
