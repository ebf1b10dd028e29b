# roadmap_dashboard/utils/dates.py
"""
Date utilities shared by the plan store and timeline rendering.

All datetimes handled by the core are timezone-aware UTC. Naive values coming
from callers are taken to already be UTC.
"""
from __future__ import annotations

import calendar
import math
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone
from typing import Any, List, Optional, Union

DateLike = Union[date, datetime]

MONTH_ABBREVIATIONS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)

_ONE_DAY = timedelta(days=1)


@dataclass(frozen=True)
class ClampedInterval:
    """
    Intersection of an interval with a visible window.
    When there is no overlap, `empty` is True and start == end == window start.
    """
    start: datetime
    end: datetime
    empty: bool = False


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def ensure_utc(value: DateLike) -> datetime:
    """Promote a date or naive datetime to an aware UTC datetime."""
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)
    return datetime.combine(value, time.min, tzinfo=timezone.utc)


def coerce_date(value: Any) -> Optional[datetime]:
    """None for absent values; raises ValueError/TypeError/OverflowError on malformed ones."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (datetime, date)):
        return ensure_utc(value)
    if isinstance(value, (int, float)):
        if math.isnan(value) or math.isinf(value):
            return None
        # Numeric timestamps are epoch milliseconds
        return datetime.fromtimestamp(value / 1000.0, tz=timezone.utc)
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        if text[-1] in ("Z", "z"):
            text = text[:-1] + "+00:00"
        return ensure_utc(datetime.fromisoformat(text))
    return None


def parse_plan_date(value: Any, fallback: Optional[DateLike] = None) -> datetime:
    """
    Coerce a date-like value into an aware UTC datetime.

    Accepts ISO-8601 strings, epoch-millisecond numbers, and date/datetime
    objects. Anything absent or unparseable yields `fallback` (default: now).
    Never raises.
    """
    try:
        parsed = coerce_date(value)
    except (ValueError, TypeError, OverflowError, OSError):
        parsed = None
    if parsed is not None:
        return parsed
    if fallback is None:
        return utcnow()
    return ensure_utc(fallback)


def clamp_interval(
    start: DateLike,
    end: DateLike,
    window_start: DateLike,
    window_end: DateLike,
) -> ClampedInterval:
    """Intersect [start, end] with [window_start, window_end]."""
    window_start = ensure_utc(window_start)
    window_end = ensure_utc(window_end)
    clamped_start = max(ensure_utc(start), window_start)
    clamped_end = min(ensure_utc(end), window_end)
    if clamped_end < clamped_start:
        return ClampedInterval(start=window_start, end=window_start, empty=True)
    return ClampedInterval(start=clamped_start, end=clamped_end)


def days_between(earlier: DateLike, later: DateLike) -> int:
    """Whole days from `earlier` to `later`, truncated toward zero."""
    return math.trunc((ensure_utc(later) - ensure_utc(earlier)) / _ONE_DAY)


def start_of_month(value: DateLike) -> datetime:
    dt = ensure_utc(value)
    return dt.replace(day=1, hour=0, minute=0, second=0, microsecond=0)


def end_of_month(value: DateLike) -> datetime:
    """Last instant of the month containing `value`."""
    dt = ensure_utc(value)
    last_day = calendar.monthrange(dt.year, dt.month)[1]
    return dt.replace(day=last_day, hour=23, minute=59, second=59, microsecond=999999)


def start_of_day(value: DateLike) -> datetime:
    dt = ensure_utc(value)
    return dt.replace(hour=0, minute=0, second=0, microsecond=0)


def add_months(value: DateLike, months: int) -> datetime:
    """Shift by whole months, clamping the day to the target month's length."""
    dt = ensure_utc(value)
    index = dt.year * 12 + (dt.month - 1) + months
    year, month = divmod(index, 12)
    month += 1
    day = min(dt.day, calendar.monthrange(year, month)[1])
    return dt.replace(year=year, month=month, day=day)


def each_month_of_interval(start: DateLike, end: DateLike) -> List[datetime]:
    """First instant of every month touched by [start, end]; empty if end < start."""
    start_dt = ensure_utc(start)
    end_dt = ensure_utc(end)
    if end_dt < start_dt:
        return []
    months: List[datetime] = []
    current = start_of_month(start_dt)
    while current <= end_dt:
        months.append(current)
        current = add_months(current, 1)
    return months


def each_day_of_interval(start: DateLike, end: DateLike) -> List[datetime]:
    """Midnight of every day in [start, end]; empty if end < start."""
    end_dt = ensure_utc(end)
    if end_dt < ensure_utc(start):
        return []
    current = start_of_day(start)
    days: List[datetime] = []
    while current <= end_dt:
        days.append(current)
        current = current + _ONE_DAY
    return days


def months_between(start: DateLike, end: DateLike) -> int:
    """Number of calendar months from start's month up to (excluding) end's month."""
    s = ensure_utc(start)
    e = ensure_utc(end)
    return (e.year - s.year) * 12 + (e.month - s.month)


def format_month_label(value: DateLike) -> str:
    dt = ensure_utc(value)
    return f"{MONTH_ABBREVIATIONS[dt.month - 1]} {dt.year}"


def format_day_label(value: DateLike) -> str:
    dt = ensure_utc(value)
    return f"{MONTH_ABBREVIATIONS[dt.month - 1]} {dt.day}"


def to_iso(value: DateLike) -> str:
    """ISO-8601 UTC string with a trailing Z; keeps microseconds so parsing restores the instant."""
    dt = ensure_utc(value)
    return dt.isoformat(timespec="microseconds").replace("+00:00", "Z")
