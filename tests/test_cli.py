import json

import pytest

import cli


@pytest.fixture
def events_file(tmp_path):
    path = tmp_path / "events.json"
    path.write_text(
        json.dumps(
            {
                "events": [
                    {"id": "e1", "start": "2025-03-03T09:00:00Z", "end": "2025-03-03T10:00:00Z"},
                    {"id": "e2", "start": "2025-03-03T09:30:00Z", "end": "2025-03-03T10:30:00Z"},
                    {"id": "e3", "start": "2025-03-03T10:15:00Z", "end": "2025-03-03T11:00:00Z"},
                ]
            }
        ),
        encoding="utf-8",
    )
    return path


def test_lanes_json(events_file, capsys):
    assert cli.main(["lanes", str(events_file), "--json"]) == 0
    assert json.loads(capsys.readouterr().out) == {
        "lanes": {"e1": 0, "e2": 1, "e3": 0},
        "lane_count": 2,
    }


def test_lanes_text_by_day(events_file, capsys):
    assert cli.main(["lanes", str(events_file), "--by-day"]) == 0
    out = capsys.readouterr().out
    assert "2025-03-03: 2 lane(s)" in out


def test_lanes_detailed(events_file, capsys):
    assert cli.main(["lanes", str(events_file), "--detailed", "--json"]) == 0
    placements = json.loads(capsys.readouterr().out)
    assert {p["event_id"] for p in placements} == {"e1", "e2", "e3"}
    assert all(p["group_id"] == "group-0" for p in placements)


def test_conflicts_lists_pairs_with_resolutions(events_file, capsys):
    assert cli.main(["conflicts", str(events_file), "--json"]) == 0
    conflicts = json.loads(capsys.readouterr().out)
    assert [c["involved_event_ids"] for c in conflicts] == [["e1", "e2"], ["e2", "e3"]]
    assert conflicts[0]["resolutions"][0]["type"] == "reschedule"


def test_conflicts_for_candidate(events_file, capsys):
    code = cli.main(
        [
            "conflicts",
            str(events_file),
            "--start",
            "2025-03-03T14:00:00Z",
            "--end",
            "2025-03-03T15:00:00Z",
        ]
    )
    assert code == 0
    assert "No conflicts." in capsys.readouterr().out


def test_conflicts_candidate_needs_both_bounds(events_file, capsys):
    assert cli.main(["conflicts", str(events_file), "--start", "2025-03-03T14:00:00Z"]) == 1
    assert "--end" in capsys.readouterr().err


def test_slots_with_yaml_preferences(events_file, tmp_path, capsys):
    prefs = tmp_path / "prefs.yml"
    prefs.write_text("preferred_meeting_duration: 45\n", encoding="utf-8")

    code = cli.main(
        [
            "slots",
            str(events_file),
            "--start",
            "2025-03-03T08:00:00Z",
            "--end",
            "2025-03-03T18:00:00Z",
            "--preferences",
            str(prefs),
            "--top",
            "2",
            "--json",
        ]
    )

    assert code == 0
    slots = json.loads(capsys.readouterr().out)
    assert len(slots) == 2
    assert slots[0]["id"].startswith("slot_")


def test_suggest_text(events_file, capsys):
    code = cli.main(
        ["suggest", str(events_file), "--start", "2025-03-03T08:00:00Z", "--end", "2025-03-03T18:00:00Z"]
    )
    assert code == 0
    assert "Block Focus Time" in capsys.readouterr().out


def test_bad_events_file_exits_with_error(tmp_path, capsys):
    path = tmp_path / "events.json"
    path.write_text(json.dumps([{"id": "x", "start": "2025-03-03T10:00:00Z"}]), encoding="utf-8")

    assert cli.main(["lanes", str(path)]) == 1
    assert "lanes failed" in capsys.readouterr().err


def test_missing_file_exits_with_error(tmp_path, capsys):
    assert cli.main(["lanes", str(tmp_path / "missing.json")]) == 1
    assert capsys.readouterr().err


def test_bad_preferences_exit_with_error(events_file, tmp_path, capsys):
    prefs = tmp_path / "prefs.yml"
    prefs.write_text("lunch_break: {start: 14, end: 13}\n", encoding="utf-8")

    code = cli.main(
        [
            "slots",
            str(events_file),
            "--start",
            "2025-03-03T08:00:00Z",
            "--end",
            "2025-03-03T18:00:00Z",
            "--preferences",
            str(prefs),
        ]
    )
    assert code == 1
    assert "Malformed hour range" in capsys.readouterr().err
