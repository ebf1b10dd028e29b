# roadmap_dashboard/timeline/grid.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

from roadmap_dashboard.config import settings
from roadmap_dashboard.schemas.roadmap_plan import PHASES, PhaseDates, PhaseSpec
from roadmap_dashboard.utils.dates import (
    DateLike,
    each_day_of_interval,
    each_month_of_interval,
    ensure_utc,
    format_day_label,
    format_month_label,
    parse_plan_date,
    start_of_day,
)


@dataclass(frozen=True)
class MonthCell:
    start: datetime
    label: str
    left_px: int
    width_px: int


@dataclass(frozen=True)
class MonthGrid:
    """Month header cells for a window; content_width is months x month_width."""
    months: List[MonthCell]
    month_width: int
    content_width: int

    @property
    def month_count(self) -> int:
        return len(self.months)


@dataclass(frozen=True)
class DayCell:
    day: datetime
    label: str


def build_month_grid(
    window_start: DateLike,
    window_end: DateLike,
    month_width: Optional[int] = None,
) -> MonthGrid:
    """One cell per calendar month in [window_start, window_end], inclusive."""
    width = month_width if month_width is not None else settings.TIMELINE_MONTH_WIDTH
    if width <= 0:
        raise ValueError("month_width must be positive")

    months = each_month_of_interval(window_start, window_end)
    cells = [
        MonthCell(start=month, label=format_month_label(month), left_px=index * width, width_px=width)
        for index, month in enumerate(months)
    ]
    return MonthGrid(months=cells, month_width=width, content_width=len(cells) * width)


def content_height(row_count: int, row_height: Optional[int] = None) -> int:
    """Pixel height of the row area below the month header."""
    height = row_height if row_height is not None else settings.TIMELINE_ROW_HEIGHT
    return max(0, row_count) * height


def build_day_axis(start: DateLike, end: DateLike) -> List[DayCell]:
    """Every day in [start, end], for the day-level table."""
    return [DayCell(day=day, label=format_day_label(day)) for day in each_day_of_interval(start, end)]


def phase_for_day(plan: PhaseDates, day: DateLike) -> Optional[PhaseSpec]:
    """First phase whose day range contains `day`; None when it falls in no phase."""
    target = start_of_day(ensure_utc(day))
    for spec in PHASES:
        start = start_of_day(parse_plan_date(getattr(plan, spec.start_field, None)))
        end = start_of_day(parse_plan_date(getattr(plan, spec.end_field, None)))
        if start <= target <= end:
            return spec
    return None


__all__ = [
    "MonthCell",
    "MonthGrid",
    "DayCell",
    "build_month_grid",
    "content_height",
    "build_day_axis",
    "phase_for_day",
]
