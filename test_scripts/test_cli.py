# test_scripts/test_cli.py

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone

import pytest

from conftest import make_phase_dates
from roadmap_dashboard.cli import EXIT_INVALID, EXIT_NOT_FOUND, EXIT_OK, build_parser, main, render_timeline, run
from roadmap_dashboard.services.dashboard import Dashboard
from roadmap_dashboard.timeline.rows import collect_timeline_rows
from roadmap_dashboard.timeline.window import TimelineWindow

UTC = timezone.utc


@pytest.fixture
def dashboard(data_store) -> Dashboard:
    return Dashboard(data_store)


def _run(dashboard, *argv):
    return run(build_parser().parse_args(list(argv)), dashboard)


def test_capability_and_plan_commands(dashboard, capsys):
    assert _run(dashboard, "capability", "add", "Payments", "--lead", "Ana") == EXIT_OK
    cap_id = capsys.readouterr().out.strip()

    assert _run(dashboard, "plan", "add", cap_id, "--from", "2026-01-05") == EXIT_OK
    assert _run(dashboard, "plan", "add", cap_id, "--from", "2026-02-05") == EXIT_OK
    capsys.readouterr()

    assert _run(dashboard, "plan", "history", cap_id) == EXIT_OK
    lines = capsys.readouterr().out.strip().splitlines()
    assert [line.split("\t")[1] for line in lines] == ["v2", "v1"]

    assert _run(dashboard, "plan", "active", cap_id) == EXIT_OK
    first = capsys.readouterr().out.splitlines()[0]
    assert first.startswith("REQ\t2026-02-05T00:00:00")


def test_plan_add_rejects_end_before_start(dashboard, capsys):
    dates = [
        "2026-01-10", "2026-01-01",
        "2026-01-11", "2026-01-20",
        "2026-01-21", "2026-02-20",
        "2026-02-21", "2026-03-10",
        "2026-03-11", "2026-03-30",
    ]
    assert _run(dashboard, "plan", "add", "cap", "--dates", *dates) == EXIT_INVALID
    assert "Requirement end date must be later than start date" in capsys.readouterr().err
    assert dashboard.get_history("cap") == []

    assert _run(dashboard, "plan", "add", "cap", "--dates", *dates, "--force") == EXIT_OK
    assert len(dashboard.get_history("cap")) == 1


def test_missing_records_return_not_found(dashboard):
    assert _run(dashboard, "plan", "delete", "missing") == EXIT_NOT_FOUND
    assert _run(dashboard, "plan", "active", "missing") == EXIT_NOT_FOUND
    assert _run(dashboard, "capability", "delete", "missing") == EXIT_NOT_FOUND


def test_export_and_stats(dashboard, capsys):
    dashboard.add_capability({"name": "Payments"})
    capsys.readouterr()

    assert _run(dashboard, "export") == EXIT_OK
    assert len(json.loads(capsys.readouterr().out)["capabilities"]) == 1

    assert _run(dashboard, "stats") == EXIT_OK
    assert "capabilities\t1" in capsys.readouterr().out


def test_render_timeline_marks_phases(dashboard):
    cap = dashboard.add_capability({"name": "Payments"})
    dashboard.add_plan(cap.id, make_phase_dates(start=datetime(2026, 1, 1, tzinfo=UTC), step_days=3))
    window = TimelineWindow(start=datetime(2026, 1, 1, tzinfo=UTC), end=datetime(2026, 1, 31, tzinfo=UTC))

    rows = collect_timeline_rows(dashboard.capabilities.list_all(), dashboard.plans)
    lines = render_timeline(rows, window, columns=30)

    assert lines[0].strip().startswith("|Jan")
    track = lines[1].split("|")[1]
    assert len(track) == 30
    assert track.startswith("RRR")
    assert "v1*" in lines[1]


@pytest.fixture
def restore_app_logger():
    app_logger = logging.getLogger("roadmap_dashboard")
    saved = (app_logger.handlers[:], app_logger.level, app_logger.propagate)
    yield app_logger
    app_logger.handlers = saved[0]
    app_logger.setLevel(saved[1])
    app_logger.propagate = saved[2]


def test_main_keeps_stdout_for_command_output(engine, capsys, restore_app_logger):
    assert main(["capability", "add", "Payments"], engine=engine) == EXIT_OK
    added = capsys.readouterr()
    cap_id = added.out.strip()
    assert len(added.out.splitlines()) == 1
    assert "cli.start" in added.err

    assert main(["export"], engine=engine) == EXIT_OK
    exported = json.loads(capsys.readouterr().out)
    assert [c["id"] for c in exported["capabilities"]] == [cap_id]


def test_main_export_then_import_round_trip(engine, tmp_path, capsys, restore_app_logger):
    main(["capability", "add", "Payments"], engine=engine)
    capsys.readouterr()
    assert main(["export"], engine=engine) == EXIT_OK
    backup = tmp_path / "backup.json"
    backup.write_text(capsys.readouterr().out, encoding="utf-8")

    assert main(["reset"], engine=engine) == EXIT_OK
    assert main(["import", str(backup)], engine=engine) == EXIT_OK
    capsys.readouterr()

    assert main(["capability", "list"], engine=engine) == EXIT_OK
    assert "Payments" in capsys.readouterr().out
