"""Lane assignment for stacking overlapping events in one rendering span.

Greedy interval-graph coloring: events sorted by start (longer first, then id)
each take the lowest lane that is free by their start time. For interval
graphs this uses exactly as many lanes as the largest set of mutually
overlapping events, and the total order makes reruns produce identical lanes.
"""
from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from datetime import date, datetime, tzinfo
from typing import Dict, List, Mapping, Sequence

from ..events import Event
from ..interval import Interval, overlaps


@dataclass(frozen=True, slots=True)
class LaneAssignment:
    """Lane per event id plus the number of lanes the span needs."""

    lanes: Mapping[str, int]
    lane_count: int

    def to_dict(self) -> Dict[str, object]:
        return {"lanes": dict(self.lanes), "lane_count": self.lane_count}


@dataclass(frozen=True, slots=True)
class EventPlacement:
    """Where one event renders inside its collision group."""

    event_id: str
    lane: int
    span: int  # lanes occupied, counting its own, when expanded to the right
    group_id: str
    group_lane_count: int

    def to_dict(self) -> Dict[str, object]:
        return {
            "event_id": self.event_id,
            "lane": self.lane,
            "span": self.span,
            "group_id": self.group_id,
            "group_lane_count": self.group_lane_count,
        }


def _layout_order(events: Sequence[Event]) -> List[Event]:
    return sorted(events, key=lambda e: (e.start, -e.interval.duration, e.id))


def assign_lanes(events: Sequence[Event]) -> LaneAssignment:
    """Assign each event a zero-based lane for one rendering span.

    Precondition: all-day and zero-duration events were already stretched to
    the span (see ``normalize_for_span``).
    """
    lane_end_times: List[datetime] = []
    lanes: Dict[str, int] = {}

    for event in _layout_order(events):
        for lane, lane_end in enumerate(lane_end_times):
            if lane_end <= event.start:
                break
        else:
            lane = len(lane_end_times)
            lane_end_times.append(event.end)
        lane_end_times[lane] = event.end
        lanes[event.id] = lane

    return LaneAssignment(lanes=lanes, lane_count=len(lane_end_times))


def normalize_for_span(events: Sequence[Event], span: Interval) -> List[Event]:
    """Stretch all-day and zero-duration events over the whole span."""
    normalized: List[Event] = []
    for event in events:
        if event.is_all_day or event.interval.is_empty:
            event = Event(
                id=event.id,
                interval=span,
                title=event.title,
                category=event.category,
                attendees=event.attendees,
                location=event.location,
                is_all_day=event.is_all_day,
            )
        normalized.append(event)
    return normalized


def layout_events(events: Sequence[Event]) -> List[EventPlacement]:
    """Lanes plus collision groups and expansion spans.

    A collision group is a run of transitively overlapping events; it closes
    as soon as an event starts at or after the latest end seen so far. Lanes
    come from ``assign_lanes`` over the whole span, so they match the plain
    assignment exactly.
    """
    ordered = _layout_order(events)
    assignment = assign_lanes(ordered)

    groups: List[List[Event]] = []
    group_end = None
    for event in ordered:
        if not groups or event.start >= group_end:
            groups.append([event])
            group_end = event.end
        else:
            groups[-1].append(event)
            group_end = max(group_end, event.end)

    placements: List[EventPlacement] = []
    for index, group in enumerate(groups):
        by_lane: Dict[int, List[Event]] = defaultdict(list)
        for event in group:
            by_lane[assignment.lanes[event.id]].append(event)
        lane_count = max(by_lane) + 1

        for event in group:
            lane = assignment.lanes[event.id]
            span = 1
            for right in range(lane + 1, lane_count):
                if any(overlaps(event.interval, other.interval) for other in by_lane.get(right, ())):
                    break
                span += 1
            placements.append(
                EventPlacement(
                    event_id=event.id,
                    lane=lane,
                    span=span,
                    group_id=f"group-{index}",
                    group_lane_count=lane_count,
                )
            )
    return placements


def assign_lanes_by_day(events: Sequence[Event], tz: tzinfo) -> Dict[date, LaneAssignment]:
    """Split events by local start date and lay out each day on its own."""
    by_day: Dict[date, List[Event]] = defaultdict(list)
    for event in events:
        by_day[event.local_date(tz)].append(event)
    return {day: assign_lanes(by_day[day]) for day in sorted(by_day)}
