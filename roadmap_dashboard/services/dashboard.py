# roadmap_dashboard/services/dashboard.py

from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from roadmap_dashboard.services.capability_store import CapabilityStore
from roadmap_dashboard.services.data_store import AppDataStore, Clock, IdFactory, generate_id
from roadmap_dashboard.services.local_storage import LocalStorage
from roadmap_dashboard.services.milestone_store import MilestoneStore
from roadmap_dashboard.services.plan_store import PlanStore
from roadmap_dashboard.utils.dates import utcnow

logger = logging.getLogger(__name__)


class Dashboard:
    """
    One data store with the capability, milestone and plan stores wired to it.

    The flat method names are what the CLI and other callers use; the
    underlying stores stay reachable as attributes.
    """

    def __init__(self, store: AppDataStore, strict_active_check: Optional[bool] = None) -> None:
        self.store = store
        self.capabilities = CapabilityStore(store)
        self.milestones = MilestoneStore(store)
        self.plans = PlanStore(store, strict_active_check=strict_active_check)

    @classmethod
    def from_engine(
        cls,
        engine: Engine,
        storage_key: Optional[str] = None,
        clock: Clock = utcnow,
        id_factory: IdFactory = generate_id,
        strict_active_check: Optional[bool] = None,
    ) -> "Dashboard":
        """
        Open local storage on `engine` and load the persisted aggregate.

        An unreadable database is logged and the dashboard starts empty,
        without storage, so nothing is written back over the damaged file.
        """
        storage: Optional[LocalStorage]
        try:
            storage = LocalStorage.from_engine(engine)
        except SQLAlchemyError as exc:
            logger.error("data_store.load.malformed", extra={"reason": str(exc)})
            storage = None

        store = AppDataStore(
            storage=storage,
            storage_key=storage_key,
            clock=clock,
            id_factory=id_factory,
        )
        store.load()
        return cls(store, strict_active_check=strict_active_check)

    # Capabilities
    def add_capability(self, payload):
        return self.capabilities.add(payload)

    def update_capability(self, capability_id, changes):
        return self.capabilities.update(capability_id, changes)

    def delete_capability(self, capability_id):
        return self.capabilities.delete(capability_id)

    def get_capability(self, capability_id):
        return self.capabilities.get(capability_id)

    def search_capabilities(self, term):
        return self.capabilities.search(term)

    # Milestones
    def add_milestone(self, payload):
        return self.milestones.add(payload)

    def update_milestone(self, milestone_id, changes):
        return self.milestones.update(milestone_id, changes)

    def delete_milestone(self, milestone_id):
        return self.milestones.delete(milestone_id)

    def search_milestones(self, term):
        return self.milestones.search(term)

    def dangling_milestone_refs(self):
        return self.milestones.dangling_milestone_refs()

    # Roadmap plans
    def add_plan(self, capability_id, phase_dates):
        return self.plans.add_plan(capability_id, phase_dates)

    def update_plan(self, capability_id, phase_dates):
        return self.plans.update_plan(capability_id, phase_dates)

    def delete_plan(self, plan_id):
        return self.plans.delete_plan(plan_id)

    def get_history(self, capability_id):
        return self.plans.get_history(capability_id)

    def get_active_plan(self, capability_id):
        return self.plans.get_active_plan(capability_id)


__all__ = ["Dashboard"]
