# test_scripts/test_timeline_grid.py

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from conftest import make_phase_dates
from roadmap_dashboard import build_month_grid
from roadmap_dashboard.config import settings
from roadmap_dashboard.schemas.roadmap_plan import Phase
from roadmap_dashboard.timeline.grid import build_day_axis, content_height, phase_for_day

UTC = timezone.utc


def test_month_grid_covers_months_inclusive():
    grid = build_month_grid(datetime(2025, 12, 15, tzinfo=UTC), datetime(2026, 3, 2, tzinfo=UTC), month_width=100)

    assert [c.label for c in grid.months] == ["Dec 2025", "Jan 2026", "Feb 2026", "Mar 2026"]
    assert [c.left_px for c in grid.months] == [0, 100, 200, 300]
    assert all(c.width_px == 100 for c in grid.months)
    assert grid.content_width == grid.month_count * 100 == 400


def test_month_grid_uses_configured_width_and_is_deterministic():
    start = datetime(2026, 1, 1, tzinfo=UTC)
    end = datetime(2026, 12, 31, tzinfo=UTC)

    first = build_month_grid(start, end)
    second = build_month_grid(start, end)

    assert first == second
    assert first.month_width == settings.TIMELINE_MONTH_WIDTH
    assert first.content_width == 12 * settings.TIMELINE_MONTH_WIDTH


def test_month_grid_empty_for_reversed_window():
    grid = build_month_grid(datetime(2026, 5, 1, tzinfo=UTC), datetime(2026, 1, 1, tzinfo=UTC))
    assert grid.months == []
    assert grid.content_width == 0


def test_month_grid_rejects_non_positive_width():
    with pytest.raises(ValueError):
        build_month_grid(datetime(2026, 1, 1, tzinfo=UTC), datetime(2026, 2, 1, tzinfo=UTC), month_width=0)


def test_day_axis_labels():
    axis = build_day_axis(datetime(2026, 1, 30, tzinfo=UTC), datetime(2026, 2, 2, tzinfo=UTC))
    assert [c.label for c in axis] == ["Jan 30", "Jan 31", "Feb 1", "Feb 2"]


def test_phase_for_day_returns_first_matching_phase():
    plan = make_phase_dates(start=datetime(2026, 1, 1, tzinfo=UTC), step_days=2)

    assert phase_for_day(plan, datetime(2026, 1, 2, tzinfo=UTC)).phase == Phase.REQUIREMENTS
    assert phase_for_day(plan, datetime(2026, 1, 6, 12, tzinfo=UTC)).phase == Phase.DESIGN
    assert phase_for_day(plan, datetime(2026, 1, 19, tzinfo=UTC)).phase == Phase.UAT
    assert phase_for_day(plan, datetime(2026, 1, 4, tzinfo=UTC)) is None
    assert phase_for_day(plan, datetime(2026, 1, 20, tzinfo=UTC)) is None

    overlapping = make_phase_dates(start=datetime(2026, 1, 1, tzinfo=UTC), step_days=0)
    assert phase_for_day(overlapping, datetime(2026, 1, 1, tzinfo=UTC)).phase == Phase.REQUIREMENTS


def test_content_height_uses_row_height():
    assert content_height(3) == 3 * settings.TIMELINE_ROW_HEIGHT
    assert content_height(3, row_height=10) == 30
    assert content_height(0) == 0
