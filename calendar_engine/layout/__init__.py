"""Event layout and conflict engine.

Lanes stack overlapping events for rendering; the conflict detector reports
overlaps, double-booked resources, tight buffers and lunch clashes.
"""
from __future__ import annotations

from .conflicts import (
    ConflictDescriptor,
    ConflictKind,
    ConflictResolution,
    Disruption,
    Effort,
    ResolutionType,
    Severity,
    analyze_conflicts,
    detect,
    generate_resolutions,
)
from .lanes import (
    EventPlacement,
    LaneAssignment,
    assign_lanes,
    assign_lanes_by_day,
    layout_events,
    normalize_for_span,
)


__all__ = [
    # Conflicts
    "ConflictDescriptor",
    "ConflictKind",
    "ConflictResolution",
    "Disruption",
    "Effort",
    "ResolutionType",
    "Severity",
    "analyze_conflicts",
    "detect",
    "generate_resolutions",
    # Lanes
    "EventPlacement",
    "LaneAssignment",
    "assign_lanes",
    "assign_lanes_by_day",
    "layout_events",
    "normalize_for_span",
]
