# roadmap_dashboard/timeline/projector.py
"""
Projection of phase date ranges onto a visible timeline window.

Positions are fractions of the window span measured in whole days, so a
renderer can scale them to any pixel width.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

from roadmap_dashboard.schemas.roadmap_plan import PHASES, Phase, PhaseDates
from roadmap_dashboard.utils.dates import DateLike, clamp_interval, days_between, parse_plan_date

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PhasePosition:
    left: float
    width: float

    @property
    def left_percent(self) -> str:
        return _percent(self.left)

    @property
    def width_percent(self) -> str:
        return _percent(self.width)

    @property
    def is_visible(self) -> bool:
        return self.width > 0


ZERO_POSITION = PhasePosition(left=0.0, width=0.0)


@dataclass(frozen=True)
class PhaseBar:
    phase: Phase
    label: str
    short_label: str
    start: datetime
    end: datetime
    position: PhasePosition


def _percent(fraction: float) -> str:
    return f"{fraction * 100:g}%"


def get_phase_position(
    start: DateLike,
    end: DateLike,
    window_start: DateLike,
    window_end: DateLike,
) -> PhasePosition:
    """
    Horizontal placement of [start, end] inside [window_start, window_end].

    The range is clamped to the window first; no overlap gives a zero-width
    position. Offset, duration and window length are whole days, truncated.
    """
    clamped = clamp_interval(start, end, window_start, window_end)
    if clamped.empty:
        return ZERO_POSITION

    total_days = days_between(window_start, window_end)
    if total_days <= 0:
        logger.debug(
            "timeline.projector.degenerate_window",
            extra={"total": total_days, "reason": f"{window_start}..{window_end}"},
        )
        return ZERO_POSITION

    offset_days = days_between(window_start, clamped.start)
    duration_days = days_between(clamped.start, clamped.end)
    return PhasePosition(left=offset_days / total_days, width=duration_days / total_days)


def project_plan(
    plan: PhaseDates,
    window_start: DateLike,
    window_end: DateLike,
    fallback: Optional[DateLike] = None,
) -> List[PhaseBar]:
    """One bar per phase, in phase order; unparseable dates fall back to `fallback` (or now)."""
    bars: List[PhaseBar] = []
    for spec in PHASES:
        start = parse_plan_date(getattr(plan, spec.start_field, None), fallback)
        end = parse_plan_date(getattr(plan, spec.end_field, None), fallback)
        bars.append(
            PhaseBar(
                phase=spec.phase,
                label=spec.label,
                short_label=spec.short_label,
                start=start,
                end=end,
                position=get_phase_position(start, end, window_start, window_end),
            )
        )
    return bars


__all__ = [
    "PhasePosition",
    "PhaseBar",
    "ZERO_POSITION",
    "get_phase_position",
    "project_plan",
]
