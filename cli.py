#!/usr/bin/env python3
"""Calendar Engine CLI."""
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, List, Optional

from calendar_engine import (
    Event,
    Interval,
    SchedulingPreferences,
    analyze_conflicts,
    assign_lanes,
    assign_lanes_by_day,
    detect,
    events_from_payload,
    generate_resolutions,
    generate_suggestions,
    layout_events,
    load_preferences,
    search_slots,
)
from calendar_engine.config import ConfigError, Settings, load_settings
from calendar_engine.events import parse_instant


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="calendar-engine",
        description="Lay out calendar events, check conflicts and find meeting slots.",
    )

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("events", help="JSON file holding a list of events (or {\"events\": [...]}).")
    common.add_argument(
        "--preferences",
        help="YAML or JSON file with scheduling preferences (defaults otherwise).",
    )
    common.add_argument(
        "--json",
        action="store_true",
        help="Print machine-readable JSON instead of text.",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    lanes_parser = subparsers.add_parser(
        "lanes",
        parents=[common],
        help="Assign rendering lanes to overlapping events.",
    )
    lanes_parser.add_argument(
        "--detailed",
        action="store_true",
        help="Show collision groups and expansion spans.",
    )
    lanes_parser.add_argument(
        "--by-day",
        action="store_true",
        help="Lay out each local day separately (uses the preferences time zone).",
    )

    conflicts_parser = subparsers.add_parser(
        "conflicts",
        parents=[common],
        help="Analyze conflicts between events, or for one candidate interval.",
    )
    conflicts_parser.add_argument("--start", help="Candidate start (ISO format).")
    conflicts_parser.add_argument("--end", help="Candidate end (ISO format).")

    slots_parser = subparsers.add_parser(
        "slots",
        parents=[common],
        help="Find the best free slots for a meeting.",
    )
    slots_parser.add_argument("--start", required=True, help="Search range start (ISO format).")
    slots_parser.add_argument("--end", required=True, help="Search range end (ISO format).")
    slots_parser.add_argument(
        "--duration",
        type=int,
        default=None,
        help="Meeting length in minutes (defaults to the preferred meeting duration).",
    )
    slots_parser.add_argument(
        "--attendee",
        action="append",
        default=[],
        help="Required attendee; repeat for several.",
    )
    slots_parser.add_argument(
        "--top",
        type=int,
        default=None,
        help="Maximum number of slots to return.",
    )

    suggest_parser = subparsers.add_parser(
        "suggest",
        parents=[common],
        help="Suggest consolidations, focus time, reschedules and breaks.",
    )
    suggest_parser.add_argument("--start", required=True, help="Range start (ISO format).")
    suggest_parser.add_argument("--end", required=True, help="Range end (ISO format).")

    return parser


def _load_events(path: str) -> List[Event]:
    payload = json.loads(Path(path).read_text(encoding="utf-8"))
    if isinstance(payload, dict):
        payload = payload.get("events", [])
    if not isinstance(payload, list):
        raise ValueError(f"{path} must contain a list of events")
    return events_from_payload(payload)


def _load_preferences(path: Optional[str], settings: Settings) -> SchedulingPreferences:
    base = {"time_zone": settings.default_time_zone}
    if path is None:
        return SchedulingPreferences.from_dict(base)
    return load_preferences(path, base=base)


def _parse_range(start: str, end: str) -> Interval:
    return Interval(parse_instant(start), parse_instant(end))


def _print_json(payload: Any) -> None:
    print(json.dumps(payload, indent=2))


def _cmd_lanes(args: argparse.Namespace, settings: Settings) -> int:
    events = _load_events(args.events)

    if args.by_day:
        prefs = _load_preferences(args.preferences, settings)
        by_day = assign_lanes_by_day(events, prefs.tzinfo)
        if args.json:
            _print_json({day.isoformat(): a.to_dict() for day, a in by_day.items()})
            return 0
        for day, assignment in by_day.items():
            print(f"{day.isoformat()}: {assignment.lane_count} lane(s)")
            for event_id, lane in assignment.lanes.items():
                print(f"  - {event_id}: lane {lane}")
        return 0

    if args.detailed:
        placements = layout_events(events)
        if args.json:
            _print_json([p.to_dict() for p in placements])
            return 0
        for placement in placements:
            print(
                f"- {placement.event_id}: lane {placement.lane} of {placement.group_lane_count}"
                f" | span {placement.span} | {placement.group_id}"
            )
        return 0

    assignment = assign_lanes(events)
    if args.json:
        _print_json(assignment.to_dict())
        return 0
    print(f"Lanes needed: {assignment.lane_count}")
    for event_id, lane in assignment.lanes.items():
        print(f"- {event_id}: lane {lane}")
    return 0


def _cmd_conflicts(args: argparse.Namespace, settings: Settings) -> int:
    events = _load_events(args.events)

    if args.start or args.end:
        if not (args.start and args.end):
            print("Both --start and --end are needed to check a candidate.", file=sys.stderr)
            return 1
        prefs = _load_preferences(args.preferences, settings)
        conflicts = detect(_parse_range(args.start, args.end), events, prefs)
        if args.json:
            _print_json([c.to_dict() for c in conflicts])
            return 0
        if not conflicts:
            print("No conflicts.")
        for conflict in conflicts:
            print(f"- [{conflict.severity.value}] {conflict.kind.value}: {conflict.description}")
        return 0

    conflicts = analyze_conflicts(events)
    if args.json:
        _print_json(
            [
                {
                    **c.to_dict(),
                    "resolutions": [r.to_dict() for r in generate_resolutions(c, events)],
                }
                for c in conflicts
            ]
        )
        return 0
    if not conflicts:
        print("No conflicts.")
    for conflict in conflicts:
        print(f"- [{conflict.severity.value}] {conflict.description}")
        for resolution in generate_resolutions(conflict, events):
            print(f"    {resolution.title} (score {resolution.recommendation_score:.2f})")
    return 0


def _cmd_slots(args: argparse.Namespace, settings: Settings) -> int:
    events = _load_events(args.events)
    prefs = _load_preferences(args.preferences, settings)
    duration = args.duration if args.duration is not None else prefs.preferred_meeting_duration
    top_n = args.top if args.top is not None else settings.search_top_n

    slots = search_slots(
        duration,
        events,
        _parse_range(args.start, args.end),
        prefs,
        attendees=args.attendee,
        top_n=top_n,
    )
    if args.json:
        _print_json([s.to_dict() for s in slots])
        return 0
    if not slots:
        print("No viable slots in range.")
        return 0
    print(f"Top {len(slots)} slots for a {duration}-minute meeting:\n")
    for idx, slot in enumerate(slots, 1):
        print(
            f"{idx}. {slot.interval.start:%Y-%m-%d %H:%M}-{slot.interval.end:%H:%M}"
            f" (score {slot.score:.2f}) {', '.join(slot.reasons)}"
        )
    return 0


def _cmd_suggest(args: argparse.Namespace, settings: Settings) -> int:
    events = _load_events(args.events)
    prefs = _load_preferences(args.preferences, settings)

    suggestions = generate_suggestions(events, _parse_range(args.start, args.end), prefs)
    if args.json:
        _print_json([s.to_dict() for s in suggestions])
        return 0
    if not suggestions:
        print("No suggestions.")
        return 0
    for suggestion in suggestions:
        print(f"- {suggestion.title} (confidence {suggestion.confidence:.2f})")
        print(f"    {suggestion.description}")
    return 0


COMMANDS = {
    "lanes": _cmd_lanes,
    "conflicts": _cmd_conflicts,
    "slots": _cmd_slots,
    "suggest": _cmd_suggest,
}


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        settings = load_settings()
    except ConfigError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 1
    logging.basicConfig(level=settings.log_level)

    handler = COMMANDS.get(args.command)
    if handler is None:
        parser.error(f"Unknown command: {args.command}")
        return 2
    try:
        return handler(args, settings)
    except (OSError, ValueError) as exc:
        print(f"{args.command} failed: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
