"""Shared Pydantic models for API routers.

Request bodies use camelCase aliases for the web frontend and also accept the
snake_case field names. Unknown keys are rejected.

Usage in routers:
    from api.models import EventModel, SlotSearchRequest
"""
from __future__ import annotations

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Calendar Snapshots
# =============================================================================

class EventModel(BaseModel):
    """Event snapshot sent by the calendar views."""
    id: str
    title: str = ""
    start: datetime
    end: datetime
    category: Literal["personal", "work", "effort", "note"] = "personal"
    attendees: List[str] = Field(default_factory=list)
    location: Optional[str] = None
    is_all_day: bool = Field(False, alias="isAllDay")

    model_config = ConfigDict(populate_by_name=True, extra="forbid")


class RangeModel(BaseModel):
    """Half-open time range ``[start, end)``."""
    start: datetime
    end: datetime

    model_config = ConfigDict(extra="forbid")


class HourRangeModel(BaseModel):
    start: float
    end: float

    model_config = ConfigDict(extra="forbid")


class FocusBlockModel(BaseModel):
    start: float
    end: float
    priority: Literal["low", "medium", "high"] = "high"

    model_config = ConfigDict(extra="forbid")


class ProductivityPatternsModel(BaseModel):
    morning_person: bool = Field(True, alias="morningPerson")
    afternoon_person: bool = Field(False, alias="afternoonPerson")
    evening_person: bool = Field(False, alias="eveningPerson")

    model_config = ConfigDict(populate_by_name=True, extra="forbid")


class PreferencesModel(BaseModel):
    """Partial scheduling preferences; omitted fields use the defaults."""
    preferred_times: Optional[List[HourRangeModel]] = Field(None, alias="preferredTimes")
    avoid_times: Optional[List[HourRangeModel]] = Field(None, alias="avoidTimes")
    max_meetings_per_day: Optional[int] = Field(None, alias="maxMeetingsPerDay")
    preferred_meeting_duration: Optional[int] = Field(None, alias="preferredMeetingDuration")
    buffer_between_meetings: Optional[int] = Field(None, alias="bufferBetweenMeetings")
    lunch_break: Optional[HourRangeModel] = Field(None, alias="lunchBreak")
    working_hours: Optional[HourRangeModel] = Field(None, alias="workingHours")
    time_zone: Optional[str] = Field(None, alias="timeZone")
    focus_time_blocks: Optional[List[FocusBlockModel]] = Field(None, alias="focusTimeBlocks")
    travel_time_considerations: Optional[bool] = Field(None, alias="travelTimeConsiderations")
    productivity_patterns: Optional[ProductivityPatternsModel] = Field(
        None, alias="productivityPatterns"
    )

    model_config = ConfigDict(populate_by_name=True, extra="forbid")


# =============================================================================
# Layout Requests
# =============================================================================

class LaneRequest(BaseModel):
    """Request body for lane assignment."""
    events: List[EventModel] = Field(default_factory=list)
    span: Optional[RangeModel] = Field(
        None, description="Rendering span; all-day and zero-length events are stretched to it."
    )
    detailed: bool = Field(False, description="Include collision groups and expansion spans.")

    model_config = ConfigDict(extra="forbid")


class ConflictAnalysisRequest(BaseModel):
    """Request body for pairwise conflict analysis."""
    events: List[EventModel] = Field(default_factory=list)
    include_resolutions: bool = Field(True, alias="includeResolutions")

    model_config = ConfigDict(populate_by_name=True, extra="forbid")


# =============================================================================
# Scheduling Requests
# =============================================================================

class DetectRequest(BaseModel):
    """Request body for checking one candidate interval."""
    candidate: RangeModel
    events: List[EventModel] = Field(default_factory=list)
    preferences: Optional[PreferencesModel] = None

    model_config = ConfigDict(extra="forbid")


class SlotSearchRequest(BaseModel):
    """Request body for ranked slot search."""
    duration_minutes: int = Field(..., alias="durationMinutes")
    range: RangeModel
    events: List[EventModel] = Field(default_factory=list)
    attendees: List[str] = Field(default_factory=list)
    preferences: Optional[PreferencesModel] = None
    top_n: Optional[int] = Field(None, alias="topN")

    model_config = ConfigDict(populate_by_name=True, extra="forbid")


class SuggestionRequest(BaseModel):
    """Request body for scheduling suggestions."""
    range: RangeModel
    events: List[EventModel] = Field(default_factory=list)
    preferences: Optional[PreferencesModel] = None

    model_config = ConfigDict(extra="forbid")
