# test_scripts/test_timeline_projector.py

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from conftest import make_phase_dates
from roadmap_dashboard import get_phase_position
from roadmap_dashboard.schemas.roadmap_plan import Phase
from roadmap_dashboard.timeline.projector import ZERO_POSITION, project_plan

UTC = timezone.utc
WINDOW_START = datetime(2026, 1, 1, tzinfo=UTC)
WINDOW_END = datetime(2026, 1, 31, tzinfo=UTC)  # 30 days


def test_range_outside_window_has_zero_width():
    before = get_phase_position(
        datetime(2025, 10, 1, tzinfo=UTC), datetime(2025, 11, 1, tzinfo=UTC), WINDOW_START, WINDOW_END
    )
    after = get_phase_position(
        datetime(2026, 3, 1, tzinfo=UTC), datetime(2026, 4, 1, tzinfo=UTC), WINDOW_START, WINDOW_END
    )
    assert before.width == 0
    assert after.width == 0
    assert not after.is_visible


def test_range_equal_to_window_spans_everything():
    pos = get_phase_position(WINDOW_START, WINDOW_END, WINDOW_START, WINDOW_END)
    assert pos.left == 0
    assert pos.width == 1
    assert pos.width_percent == "100%"


def test_partial_range_uses_whole_days():
    pos = get_phase_position(
        datetime(2026, 1, 7, 18, tzinfo=UTC), datetime(2026, 1, 22, tzinfo=UTC), WINDOW_START, WINDOW_END
    )
    assert pos.left == pytest.approx(6 / 30)
    assert pos.width == pytest.approx(14 / 30)
    assert pos.left_percent == "20%"


def test_range_overlapping_window_start_is_clamped():
    pos = get_phase_position(
        datetime(2025, 12, 1, tzinfo=UTC), datetime(2026, 1, 16, tzinfo=UTC), WINDOW_START, WINDOW_END
    )
    assert pos.left == 0
    assert pos.width == pytest.approx(15 / 30)


def test_degenerate_window_returns_zero_position():
    pos = get_phase_position(WINDOW_START, WINDOW_END, WINDOW_START, WINDOW_START)
    assert pos == ZERO_POSITION


def test_project_plan_returns_bar_per_phase_in_order():
    plan = make_phase_dates(start=datetime(2026, 1, 1, tzinfo=UTC), step_days=3)

    bars = project_plan(plan, WINDOW_START, WINDOW_END)

    assert [b.phase for b in bars] == [Phase.REQUIREMENTS, Phase.DESIGN, Phase.DEVELOPMENT, Phase.CST, Phase.UAT]
    assert [b.short_label for b in bars] == ["REQ", "DES", "DEV", "CST", "UAT"]
    assert bars[0].position.left == 0
    assert bars[0].position.width == pytest.approx(3 / 30)
    assert all(b.position.is_visible for b in bars)
