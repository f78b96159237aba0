"""Layout Router - lane assignment and conflict analysis.

Handles:
- Lane assignment for a day or week column
- Pairwise conflict analysis with ranked resolutions
"""
from __future__ import annotations

import logging

from fastapi import APIRouter

from api.dependencies import (
    serialize_conflict,
    serialize_lanes,
    serialize_placement,
    serialize_resolution,
    to_events,
    to_interval,
)
from api.models import ConflictAnalysisRequest, LaneRequest
from calendar_engine import (
    analyze_conflicts,
    assign_lanes,
    generate_resolutions,
    layout_events,
    normalize_for_span,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/lanes")
def lanes_endpoint(request: LaneRequest) -> dict:
    """Assign a lane to every event in one rendering span."""
    events = to_events(request.events)
    if request.span is not None:
        events = normalize_for_span(events, to_interval(request.span))

    assignment = assign_lanes(events)
    response = serialize_lanes(assignment)
    if request.detailed:
        response["placements"] = [serialize_placement(p) for p in layout_events(events)]

    logger.info("Laid out %d events in %d lanes", len(events), assignment.lane_count)
    return response


@router.post("/conflicts")
def conflicts_endpoint(request: ConflictAnalysisRequest) -> dict:
    """Report every conflicting pair, optionally with resolutions."""
    events = to_events(request.events)
    conflicts = analyze_conflicts(events)

    items = []
    for conflict in conflicts:
        item = serialize_conflict(conflict)
        if request.include_resolutions:
            item["resolutions"] = [
                serialize_resolution(r) for r in generate_resolutions(conflict, events)
            ]
        items.append(item)

    return {"conflicts": items, "count": len(items)}
