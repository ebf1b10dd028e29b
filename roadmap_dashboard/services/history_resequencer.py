# roadmap_dashboard/services/history_resequencer.py
"""
Plan deletion with version resequencing.

Removing a plan renumbers the surviving plans of the same capability 1..M by
creation time and, when the removed plan was the active one, hands the active
flag to the most recently created survivor. Everything here is a pure
transform: plan values are copied, never edited.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence

from roadmap_dashboard.schemas.roadmap_plan import RoadmapPlan


@dataclass(frozen=True)
class ResequenceResult:
    deleted: RoadmapPlan
    plans: List[RoadmapPlan]
    activated_plan_id: Optional[str] = None


def resequence_capability(
    plans: Sequence[RoadmapPlan],
    capability_id: str,
    reactivate: bool = False,
) -> tuple[List[RoadmapPlan], Optional[str]]:
    """
    Renumber the plans of one capability by created_at ascending.

    Equal created_at values keep their relative collection order (stable
    sort). Every plan of the capability gets a fresh copy whether or not its
    version changes. With `reactivate`, only the highest resequenced version
    stays active.

    Returns the new plan list (collection order preserved) and the id of the
    plan activated, if any.
    """
    siblings = sorted(
        (p for p in plans if p.capability_id == capability_id),
        key=lambda p: p.created_at,
    )
    new_versions = {plan.id: index + 1 for index, plan in enumerate(siblings)}
    activated_id = siblings[-1].id if (reactivate and siblings) else None

    result: List[RoadmapPlan] = []
    for plan in plans:
        if plan.capability_id != capability_id:
            result.append(plan)
            continue
        update = {"version": new_versions[plan.id]}
        if reactivate:
            update["is_active"] = plan.id == activated_id
        result.append(plan.model_copy(update=update))
    return result, activated_id


def delete_and_resequence(plans: Sequence[RoadmapPlan], plan_id: str) -> Optional[ResequenceResult]:
    """Remove `plan_id` and resequence its capability; None when the id is unknown."""
    deleted = next((p for p in plans if p.id == plan_id), None)
    if deleted is None:
        return None

    remaining = [p for p in plans if p.id != plan_id]
    resequenced, activated_id = resequence_capability(
        remaining,
        deleted.capability_id,
        reactivate=deleted.is_active,
    )
    return ResequenceResult(deleted=deleted, plans=resequenced, activated_plan_id=activated_id)


__all__ = ["ResequenceResult", "resequence_capability", "delete_and_resequence"]
