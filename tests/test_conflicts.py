import pytest

from calendar_engine import (
    ConflictKind,
    Effort,
    Interval,
    ResolutionType,
    SchedulingPreferences,
    Severity,
    analyze_conflicts,
    detect,
    generate_resolutions,
)


@pytest.fixture
def quiet_prefs():
    """No buffer and an empty lunch window, so only overlaps are reported."""
    return SchedulingPreferences(buffer_between_meetings=0, lunch_break=(0, 0))


def test_full_overlap_is_high_and_partial_is_medium(make_event, at, quiet_prefs):
    inside = make_event("inside", at(9, 15), at(9, 45), title="Inside")
    partial = make_event("partial", at(9, 30), at(10, 30), title="Partial")

    conflicts = detect(Interval(at(9), at(10)), [inside, partial], quiet_prefs)

    assert [(c.kind, c.severity, c.involved_event_ids) for c in conflicts] == [
        (ConflictKind.TIME_OVERLAP, Severity.HIGH, ("inside",)),
        (ConflictKind.TIME_OVERLAP, Severity.MEDIUM, ("partial",)),
    ]
    assert conflicts[0].description == "Fully overlaps 'Inside'"


def test_candidate_inside_an_event_is_a_full_overlap(make_event, at, quiet_prefs):
    big = make_event("big", at(8), at(12))
    [conflict] = detect(Interval(at(9), at(10)), [big], quiet_prefs)
    assert conflict.severity == Severity.HIGH


def test_touching_event_is_not_an_overlap(make_event, at, quiet_prefs):
    before = make_event("before", at(8), at(9))
    assert detect(Interval(at(9), at(10)), [before], quiet_prefs) == []


def test_lunch_overlap_is_reported(at):
    prefs = SchedulingPreferences(buffer_between_meetings=0)
    [conflict] = detect(Interval(at(11, 30), at(12, 30)), [], prefs)
    assert conflict.kind == ConflictKind.LUNCH_OVERLAP
    assert conflict.severity == Severity.MEDIUM
    assert conflict.involved_event_ids == ()


def test_lunch_window_follows_time_zone(at):
    prefs = SchedulingPreferences(buffer_between_meetings=0, time_zone="America/New_York")
    # 12:00 UTC is 07:00 in New York in early March
    assert detect(Interval(at(12), at(13)), [], prefs) == []
    [conflict] = detect(Interval(at(17), at(17, 30)), [], prefs)
    assert conflict.kind == ConflictKind.LUNCH_OVERLAP


def test_buffer_violation_names_adjacent_events(make_event, at):
    prefs = SchedulingPreferences(lunch_break=(0, 0))
    events = [
        make_event("far", at(7), at(8)),
        make_event("before", at(8), at(8, 55)),
        make_event("after", at(10, 10), at(11)),
    ]

    conflicts = detect(Interval(at(9), at(10)), events, prefs)

    assert len(conflicts) == 1
    assert conflicts[0].kind == ConflictKind.BUFFER_VIOLATION
    assert conflicts[0].severity == Severity.LOW
    assert conflicts[0].involved_event_ids == ("before", "after")


def test_buffer_respected_reports_nothing(make_event, at):
    prefs = SchedulingPreferences(lunch_break=(0, 0))
    events = [make_event("before", at(8), at(8, 45)), make_event("after", at(10, 15), at(11))]
    assert detect(Interval(at(9), at(10)), events, prefs) == []


def test_detect_reports_in_insertion_order(make_event, at):
    events = [make_event("lunch-meeting", at(12), at(12, 30)), make_event("next", at(12, 50), at(13, 30))]
    kinds = [c.kind for c in detect(Interval(at(12, 15), at(12, 45)), events, SchedulingPreferences())]
    assert kinds == [
        ConflictKind.TIME_OVERLAP,
        ConflictKind.LUNCH_OVERLAP,
        ConflictKind.BUFFER_VIOLATION,
    ]


@pytest.mark.parametrize(
    "a,b",
    [
        ((9, 0, 10, 0), (9, 30, 10, 30)),
        ((9, 0, 10, 0), (10, 0, 11, 0)),
        ((9, 0, 12, 0), (10, 0, 11, 0)),
        ((9, 0, 9, 30), (11, 0, 12, 0)),
    ],
)
def test_overlap_detection_is_symmetric(make_event, at, quiet_prefs, a, b):
    first = make_event("a", at(a[0], a[1]), at(a[2], a[3]))
    second = make_event("b", at(b[0], b[1]), at(b[2], b[3]))

    forward = detect(first.interval, [second], quiet_prefs)
    backward = detect(second.interval, [first], quiet_prefs)

    assert bool(forward) == bool(backward)


def test_analyze_grades_overlap_by_minutes(make_event, at):
    events = [
        make_event("a", at(9), at(10)),
        make_event("b", at(9, 50), at(11)),  # 10 minutes with a
        make_event("c", at(10, 30), at(12)),  # 30 minutes with b
        make_event("d", at(11, 15), at(13)),  # 45 minutes with c
    ]
    severities = {
        c.involved_event_ids: c.severity
        for c in analyze_conflicts(events)
        if c.kind == ConflictKind.TIME_OVERLAP
    }
    assert severities == {
        ("a", "b"): Severity.MEDIUM,
        ("b", "c"): Severity.HIGH,
        ("c", "d"): Severity.CRITICAL,
    }


def test_analyze_is_independent_of_input_order(make_event, at):
    events = [
        make_event("a", at(9), at(10), attendees={"sam"}),
        make_event("b", at(9, 30), at(10, 30), attendees={"sam"}),
        make_event("c", at(10), at(11)),
    ]
    assert analyze_conflicts(events) == analyze_conflicts(list(reversed(events)))


def test_analyze_reports_shared_attendees_and_rooms(make_event, at):
    events = [
        make_event("a", at(9), at(10), attendees={"sam", "kim"}, location="Room 1"),
        make_event("b", at(9, 30), at(10, 30), attendees={"kim"}, location="Room 1"),
    ]
    resource = [c for c in analyze_conflicts(events) if c.kind == ConflictKind.RESOURCE_CONFLICT]
    assert len(resource) == 2
    assert resource[0].description == "Attendees double-booked: kim"
    assert "Room 1" in resource[1].description


def test_shared_attendees_without_overlap_are_fine(make_event, at):
    events = [
        make_event("a", at(9), at(10), attendees={"kim"}),
        make_event("b", at(13), at(14), attendees={"kim"}),
    ]
    assert analyze_conflicts(events) == []


def test_analyze_flags_tight_travel(make_event, at):
    events = [
        make_event("office", at(9), at(10), location="Office"),
        make_event("client", at(10, 10), at(11), location="Client site"),
        make_event("cafe", at(11, 20), at(12), location="Cafe"),
        make_event("home", at(13), at(14), location="Home"),
    ]
    travel = [c for c in analyze_conflicts(events) if c.kind == ConflictKind.BUFFER_VIOLATION]
    assert [(c.involved_event_ids, c.severity) for c in travel] == [
        (("office", "client"), Severity.HIGH),
        (("client", "cafe"), Severity.MEDIUM),
    ]


def test_resolutions_for_overlap_are_ranked(make_event, at):
    events = [make_event("a", at(9), at(10)), make_event("b", at(9, 30), at(10, 30))]
    [conflict] = analyze_conflicts(events)

    resolutions = generate_resolutions(conflict, events)

    assert [r.type for r in resolutions] == ["reschedule", "shorten"]
    assert resolutions[0].recommendation_score > resolutions[1].recommendation_score
    assert resolutions[0].estimated_time_saved_minutes == 30
    assert resolutions[0].manual_steps


def test_resolutions_for_travel_and_resources(make_event, at):
    travel_events = [
        make_event("a", at(9), at(10), location="Office"),
        make_event("b", at(10, 5), at(11), location="Client"),
    ]
    [travel] = analyze_conflicts(travel_events)
    assert [r.title for r in generate_resolutions(travel, travel_events)] == ["Add Travel Buffer"]

    resource_events = [
        make_event("a", at(9), at(10), attendees={"kim"}),
        make_event("b", at(9), at(10), attendees={"kim"}),
    ]
    resource = next(
        c for c in analyze_conflicts(resource_events) if c.kind == ConflictKind.RESOURCE_CONFLICT
    )
    assert [r.type for r in generate_resolutions(resource, resource_events)] == ["delegate"]


def test_room_only_clash_suggests_another_room(make_event, at):
    events = [
        make_event("a", at(9), at(10), title="Design review", location="Room 1"),
        make_event("b", at(9), at(10), title="Hiring sync", location="Room 1"),
    ]
    resource = next(
        c for c in analyze_conflicts(events) if c.kind == ConflictKind.RESOURCE_CONFLICT
    )
    assert resource.location == "Room 1"
    assert resource.shared_attendees == ()

    [resolution] = generate_resolutions(resource, events)
    assert resolution.type is ResolutionType.RELOCATE
    assert resolution.title == "Move to Another Room"
    assert "Hiring sync" in resolution.description
    assert resolution.effort is Effort.LOW
    assert resolution.to_dict()["type"] == "relocate"


def test_lunch_conflicts_get_a_generic_resolution(at):
    [lunch] = detect(Interval(at(12), at(12, 30)), [], SchedulingPreferences(buffer_between_meetings=0))
    [resolution] = generate_resolutions(lunch, [])
    assert resolution.id == "generic_candidate"
