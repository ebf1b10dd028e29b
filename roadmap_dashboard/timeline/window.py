# roadmap_dashboard/timeline/window.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Optional

from roadmap_dashboard.config import settings
from roadmap_dashboard.utils.dates import (
    DateLike,
    add_months,
    end_of_month,
    ensure_utc,
    months_between,
    start_of_month,
    utcnow,
)


@dataclass(frozen=True)
class TimelineWindow:
    start: datetime
    end: datetime

    def contains(self, value: DateLike) -> bool:
        return self.start <= ensure_utc(value) <= self.end


def default_visible_window(
    now: Optional[DateLike] = None,
    months_before: Optional[int] = None,
    months_after: Optional[int] = None,
) -> TimelineWindow:
    """Whole months from `months_before` back to `months_after` ahead of now."""
    now_dt = ensure_utc(now) if now is not None else utcnow()
    before = settings.TIMELINE_MONTHS_BEFORE if months_before is None else months_before
    after = settings.TIMELINE_MONTHS_AFTER if months_after is None else months_after
    return TimelineWindow(
        start=start_of_month(add_months(now_dt, -before)),
        end=end_of_month(add_months(now_dt, after)),
    )


def full_timeline_bounds(
    plan_dates: Iterable[DateLike],
    now: Optional[DateLike] = None,
    padding_months: Optional[int] = None,
) -> TimelineWindow:
    """
    Scrollable range: the default window widened to cover every plan date,
    padded by whole months on each side.
    """
    visible = default_visible_window(now)
    padding = settings.TIMELINE_PADDING_MONTHS if padding_months is None else padding_months

    dates = [ensure_utc(d) for d in plan_dates]
    if not dates:
        return visible

    earliest = start_of_month(add_months(min(dates), -padding))
    latest = end_of_month(add_months(max(dates), padding))
    return TimelineWindow(start=min(visible.start, earliest), end=max(visible.end, latest))


def initial_scroll_offset(
    full_window: TimelineWindow,
    visible_window: TimelineWindow,
    month_width: Optional[int] = None,
) -> int:
    """Pixels to scroll so the visible window's first month is at the left edge."""
    width = settings.TIMELINE_MONTH_WIDTH if month_width is None else month_width
    return max(0, months_between(full_window.start, visible_window.start)) * width


__all__ = [
    "TimelineWindow",
    "default_visible_window",
    "full_timeline_bounds",
    "initial_scroll_offset",
]
