# roadmap_dashboard/timeline/rows.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Container, Iterable, List, Optional, Sequence, Tuple

from roadmap_dashboard.schemas.capability import Capability
from roadmap_dashboard.schemas.roadmap_plan import PhaseDates, RoadmapPlan
from roadmap_dashboard.services.plan_store import PlanStore


@dataclass(frozen=True)
class TimelineRow:
    capability: Capability
    plan: RoadmapPlan
    is_active: bool


def collect_timeline_rows(
    capabilities: Iterable[Capability],
    plan_store: PlanStore,
    show_history: Container[str] = (),
) -> List[TimelineRow]:
    """
    Rows to draw, capability by capability: the active plan first, then,
    for capabilities in `show_history`, every older version (history[1:]).
    """
    rows: List[TimelineRow] = []
    for capability in capabilities:
        active = plan_store.get_active_plan(capability.id)
        if active is not None:
            rows.append(TimelineRow(capability=capability, plan=active, is_active=True))
        if capability.id in show_history:
            for plan in plan_store.get_history(capability.id)[1:]:
                rows.append(TimelineRow(capability=capability, plan=plan, is_active=False))
    return rows


def collect_plan_dates(
    plan_store: PlanStore,
    capabilities: Iterable[Capability],
    show_history: Container[str] = (),
) -> List[datetime]:
    """Every date of every plan that would be drawn."""
    dates: List[datetime] = []
    for row in collect_timeline_rows(capabilities, plan_store, show_history):
        dates.extend(row.plan.all_dates())
    return dates


def plan_date_bounds(plans: Sequence[PhaseDates]) -> Optional[Tuple[datetime, datetime]]:
    """Earliest and latest date across all ten fields of all plans; None for no plans."""
    dates = [d for plan in plans for d in plan.all_dates()]
    if not dates:
        return None
    return min(dates), max(dates)


__all__ = [
    "TimelineRow",
    "collect_timeline_rows",
    "collect_plan_dates",
    "plan_date_bounds",
]
