"""Shared dependencies and helper functions for API routers.

Converts request models into engine values and engine results into the
camelCase response format the frontend reads.

Usage in routers:
    from api.dependencies import get_settings, to_events, serialize_slot
"""
from __future__ import annotations

import logging
from functools import lru_cache
from typing import Any, Dict, List, Optional, Sequence

from fastapi import HTTPException

from calendar_engine import (
    ConflictDescriptor,
    ConflictResolution,
    Event,
    EventPlacement,
    Interval,
    InvalidIntervalError,
    InvalidPreferencesError,
    LaneAssignment,
    SchedulingPreferences,
    Suggestion,
    TimeSlot,
)
from calendar_engine.config import Settings, load_settings

from .models import EventModel, PreferencesModel, RangeModel

logger = logging.getLogger(__name__)


# =============================================================================
# Cached Functions
# =============================================================================

@lru_cache
def get_settings() -> Settings:
    """Get application settings (cached)."""
    return load_settings()


# =============================================================================
# Request Conversion
# =============================================================================

def unprocessable(exc: Exception) -> HTTPException:
    """Map a domain validation error to a 422 response."""
    logger.info("Rejected request: %s", exc)
    return HTTPException(status_code=422, detail=str(exc))


def to_interval(model: RangeModel) -> Interval:
    try:
        return Interval(model.start, model.end)
    except InvalidIntervalError as exc:
        raise unprocessable(exc) from exc


def to_events(models: Sequence[EventModel]) -> List[Event]:
    events: List[Event] = []
    for model in models:
        try:
            events.append(
                Event(
                    id=model.id,
                    interval=Interval(model.start, model.end),
                    title=model.title,
                    category=model.category,
                    attendees=frozenset(model.attendees),
                    location=model.location,
                    is_all_day=model.is_all_day,
                )
            )
        except InvalidIntervalError as exc:
            raise unprocessable(ValueError(f"Event {model.id}: {exc}")) from exc
    return events


def to_preferences(
    model: Optional[PreferencesModel],
    settings: Settings,
) -> SchedulingPreferences:
    """Build validated preferences; the configured time zone fills a missing one."""
    data: Dict[str, Any] = {"time_zone": settings.default_time_zone}
    if model is not None:
        data.update(model.model_dump(exclude_none=True))
    try:
        return SchedulingPreferences.from_dict(data)
    except InvalidPreferencesError as exc:
        raise unprocessable(exc) from exc


# =============================================================================
# Serialization Helpers
# =============================================================================

# Values under these keys are keyed by data (event ids, consideration names)
# and keep their keys as-is.
_VERBATIM_KEYS = frozenset({"lanes", "considerations"})


def _camel(key: str) -> str:
    head, *rest = key.split("_")
    return head + "".join(part.title() for part in rest)


def camelize(value: Any) -> Any:
    """Rename the snake_case keys of an engine ``to_dict()`` payload to camelCase."""
    if isinstance(value, dict):
        return {
            _camel(key): item if key in _VERBATIM_KEYS else camelize(item)
            for key, item in value.items()
        }
    if isinstance(value, list):
        return [camelize(item) for item in value]
    return value


def serialize_conflict(conflict: ConflictDescriptor) -> dict:
    return camelize(conflict.to_dict())


def serialize_resolution(resolution: ConflictResolution) -> dict:
    return camelize(resolution.to_dict())


def serialize_slot(slot: TimeSlot) -> dict:
    return camelize(slot.to_dict())


def serialize_suggestion(suggestion: Suggestion) -> dict:
    return camelize(suggestion.to_dict())


def serialize_lanes(assignment: LaneAssignment) -> dict:
    return camelize(assignment.to_dict())


def serialize_placement(placement: EventPlacement) -> dict:
    return camelize(placement.to_dict())
