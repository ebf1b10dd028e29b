# roadmap_dashboard/services/plan_store.py

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Dict, List, Optional, Union

from pydantic import ValidationError

from roadmap_dashboard.config import settings
from roadmap_dashboard.errors import PlanIntegrityError, RecordValidationError
from roadmap_dashboard.schemas.roadmap_plan import PHASE_DATE_FIELDS, PhaseDates, RoadmapPlan
from roadmap_dashboard.services.data_store import AppDataStore
from roadmap_dashboard.services.history_resequencer import delete_and_resequence

logger = logging.getLogger(__name__)

PhaseDatesInput = Union[PhaseDates, Dict[str, object]]


class PlanStore:
    """
    Mutation and read surface for roadmap plans.

    Submitting dates for a capability always creates a new version: the new
    plan becomes the only active one and earlier versions are kept as history.
    """

    def __init__(self, store: AppDataStore, strict_active_check: Optional[bool] = None) -> None:
        self.store = store
        self.strict_active_check = (
            settings.STRICT_ACTIVE_PLAN_CHECK if strict_active_check is None else strict_active_check
        )

    # Mutations -------------------------------------------------------

    def add_plan(self, capability_id: str, phase_dates: PhaseDatesInput) -> RoadmapPlan:
        """
        Deactivate every plan of the capability and append a new active version.

        The new version is the capability's plan count (counted before the
        deactivation, so it includes every prior version) plus one. The
        capability id is not checked against existing capabilities.
        """
        dates = self._coerce_phase_dates(phase_dates)
        data = self.store.data

        if not any(c.id == capability_id for c in data.capabilities):
            # Known validation gap: plans may be attached to unknown capabilities
            logger.warning("plan_store.add_plan.orphan", extra={"capability_id": capability_id})

        existing_count = sum(1 for p in data.roadmap_plans if p.capability_id == capability_id)
        updated_plans = [
            p.model_copy(update={"is_active": False}) if p.capability_id == capability_id else p
            for p in data.roadmap_plans
        ]

        new_plan = RoadmapPlan(
            id=self.store.new_id(),
            capability_id=capability_id,
            version=existing_count + 1,
            is_active=True,
            created_at=self.store.now(),
            **{name: getattr(dates, name) for name in PHASE_DATE_FIELDS},
        )
        self.store.commit(data.model_copy(update={"roadmap_plans": updated_plans + [new_plan]}))

        logger.info(
            "plan_store.add_plan.created",
            extra={"capability_id": capability_id, "plan_id": new_plan.id, "version": new_plan.version},
        )
        return new_plan

    def update_plan(self, capability_id: str, phase_dates: PhaseDatesInput) -> RoadmapPlan:
        """Same as add_plan: an update is recorded as a new version."""
        return self.add_plan(capability_id, phase_dates)

    def delete_plan(self, plan_id: str) -> bool:
        """
        Delete a plan and resequence its capability's history.

        Unknown ids are a no-op (returns False) so repeated deletes are safe.
        """
        data = self.store.data
        result = delete_and_resequence(data.roadmap_plans, plan_id)
        if result is None:
            logger.info("plan_store.delete_plan.not_found", extra={"plan_id": plan_id})
            return False

        self.store.commit(data.model_copy(update={"roadmap_plans": result.plans}))
        logger.info(
            "plan_store.delete_plan.done",
            extra={
                "plan_id": plan_id,
                "capability_id": result.deleted.capability_id,
                "version": result.deleted.version,
                "reason": f"activated={result.activated_plan_id}" if result.activated_plan_id else None,
            },
        )
        return True

    # Reads -----------------------------------------------------------

    def get_plan(self, plan_id: str) -> Optional[RoadmapPlan]:
        return next((p for p in self.store.data.roadmap_plans if p.id == plan_id), None)

    def get_history(self, capability_id: str) -> List[RoadmapPlan]:
        """All plans of the capability, newest version first."""
        plans = self.store.data.plans_for(capability_id)
        return sorted(plans, key=lambda p: p.version, reverse=True)

    def get_active_plan(self, capability_id: str) -> Optional[RoadmapPlan]:
        """
        The capability's active plan, or None.

        More than one active plan is a data-integrity violation: raises
        PlanIntegrityError in strict mode, otherwise logs it and returns None.
        """
        active = [p for p in self.store.data.plans_for(capability_id) if p.is_active]
        if len(active) == 1:
            return active[0]
        if not active:
            return None

        message = f"Capability {capability_id} has {len(active)} active plans"
        logger.error(
            "plan_store.integrity.multiple_active",
            extra={"capability_id": capability_id, "count": len(active)},
        )
        if self.strict_active_check:
            raise PlanIntegrityError(capability_id, message)
        return None

    def check_integrity(self) -> List[str]:
        """Describe every active-plan or version-sequence violation in the store."""
        by_capability: Dict[str, List[RoadmapPlan]] = defaultdict(list)
        for plan in self.store.data.roadmap_plans:
            by_capability[plan.capability_id].append(plan)

        problems: List[str] = []
        for capability_id, plans in by_capability.items():
            active_count = sum(1 for p in plans if p.is_active)
            if active_count > 1:
                problems.append(f"{capability_id}: {active_count} active plans")
            versions = sorted(p.version for p in plans)
            if versions != list(range(1, len(plans) + 1)):
                problems.append(f"{capability_id}: versions {versions} are not 1..{len(plans)}")
        return problems

    @staticmethod
    def _coerce_phase_dates(phase_dates: PhaseDatesInput) -> PhaseDates:
        if isinstance(phase_dates, PhaseDates):
            return phase_dates.to_phase_dates()
        try:
            return PhaseDates.model_validate(phase_dates)
        except ValidationError as exc:
            raise RecordValidationError(f"Invalid plan dates: {exc.error_count()} error(s)") from exc


__all__ = ["PlanStore"]
