# roadmap_dashboard/services/milestone_store.py

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union

from pydantic import ValidationError

from roadmap_dashboard.errors import RecordValidationError
from roadmap_dashboard.schemas.milestone import Milestone, MilestoneCreate, MilestoneUpdate
from roadmap_dashboard.services.data_store import AppDataStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DanglingMilestoneRef:
    capability_id: str
    capability_name: str
    milestone_name: str


class MilestoneStore:
    """
    Keyed CRUD over milestones.

    Capabilities point at milestones by name, and nothing cascades when a
    milestone is renamed or deleted; `dangling_milestone_refs` reports the fallout.
    """

    def __init__(self, store: AppDataStore) -> None:
        self.store = store

    def list_all(self) -> List[Milestone]:
        return list(self.store.data.milestones)

    def get(self, milestone_id: str) -> Optional[Milestone]:
        return next((m for m in self.store.data.milestones if m.id == milestone_id), None)

    def add(self, payload: Union[MilestoneCreate, Dict[str, Any]]) -> Milestone:
        fields = self._validate(MilestoneCreate, payload)
        now = self.store.now()
        milestone = Milestone(id=self.store.new_id(), created_at=now, updated_at=now, **fields)

        data = self.store.data
        self.store.commit(data.model_copy(update={"milestones": data.milestones + [milestone]}))
        logger.info("milestone_store.add.created", extra={"milestone_id": milestone.id})
        return milestone

    def update(
        self, milestone_id: str, changes: Union[MilestoneUpdate, Dict[str, Any]]
    ) -> Optional[Milestone]:
        fields = self._validate(MilestoneUpdate, changes, exclude_unset=True)
        fields = {k: v for k, v in fields.items() if v is not None}

        data = self.store.data
        updated: Optional[Milestone] = None
        milestones = []
        for milestone in data.milestones:
            if milestone.id == milestone_id:
                milestone = milestone.model_copy(update={**fields, "updated_at": self.store.now()})
                updated = milestone
            milestones.append(milestone)

        if updated is None:
            logger.info("milestone_store.update.not_found", extra={"milestone_id": milestone_id})
            return None

        self.store.commit(data.model_copy(update={"milestones": milestones}))
        logger.info("milestone_store.update.done", extra={"milestone_id": milestone_id})
        return updated

    def delete(self, milestone_id: str) -> bool:
        data = self.store.data
        milestones = [m for m in data.milestones if m.id != milestone_id]
        if len(milestones) == len(data.milestones):
            logger.info("milestone_store.delete.not_found", extra={"milestone_id": milestone_id})
            return False
        self.store.commit(data.model_copy(update={"milestones": milestones}))
        logger.info("milestone_store.delete.done", extra={"milestone_id": milestone_id})
        return True

    def search(self, term: str) -> List[Milestone]:
        """Name matches (case-insensitive), earliest date first."""
        needle = (term or "").strip().lower()
        matches = [m for m in self.store.data.milestones if needle in m.name.lower()]
        return sorted(matches, key=lambda m: m.date)

    def dangling_milestone_refs(self) -> List[DanglingMilestoneRef]:
        """Capabilities naming a milestone that does not exist (reported, not repaired)."""
        known = {m.name for m in self.store.data.milestones}
        refs: List[DanglingMilestoneRef] = []
        for capability in self.store.data.capabilities:
            name = capability.milestone_name()
            if name is not None and name not in known:
                refs.append(DanglingMilestoneRef(capability.id, capability.name, name))
        return refs

    @staticmethod
    def _validate(model, payload, exclude_unset: bool = False) -> Dict[str, Any]:
        try:
            obj = payload if isinstance(payload, model) else model.model_validate(payload)
        except ValidationError as exc:
            raise RecordValidationError(f"Invalid milestone: {exc.errors()[0]['msg']}") from exc
        return {name: getattr(obj, name) for name in obj.model_dump(exclude_unset=exclude_unset)}


__all__ = ["MilestoneStore", "DanglingMilestoneRef"]
