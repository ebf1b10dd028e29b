# roadmap_dashboard/services/capability_store.py

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Union

from pydantic import ValidationError

from roadmap_dashboard.errors import RecordValidationError
from roadmap_dashboard.schemas.capability import Capability, CapabilityCreate, CapabilityUpdate
from roadmap_dashboard.services.data_store import AppDataStore

logger = logging.getLogger(__name__)


class CapabilityStore:
    """Keyed CRUD over capabilities. Deleting a capability also deletes its roadmap plans."""

    def __init__(self, store: AppDataStore) -> None:
        self.store = store

    def list_all(self) -> List[Capability]:
        return list(self.store.data.capabilities)

    def get(self, capability_id: str) -> Optional[Capability]:
        return next((c for c in self.store.data.capabilities if c.id == capability_id), None)

    def add(self, payload: Union[CapabilityCreate, Dict[str, Any]]) -> Capability:
        """
        Create a capability.

        Raises:
            RecordValidationError: missing/blank name or bad enum value.
        """
        fields = self._validate(CapabilityCreate, payload)
        now = self.store.now()
        capability = Capability(id=self.store.new_id(), created_at=now, updated_at=now, **fields)

        data = self.store.data
        self.store.commit(data.model_copy(update={"capabilities": data.capabilities + [capability]}))
        logger.info("capability_store.add.created", extra={"capability_id": capability.id})
        return capability

    def update(
        self, capability_id: str, changes: Union[CapabilityUpdate, Dict[str, Any]]
    ) -> Optional[Capability]:
        """Apply partial changes and refresh updated_at; unknown ids are a no-op (None)."""
        fields = self._validate(CapabilityUpdate, changes, exclude_unset=True)
        fields = {k: v for k, v in fields.items() if v is not None}

        data = self.store.data
        updated: Optional[Capability] = None
        capabilities = []
        for cap in data.capabilities:
            if cap.id == capability_id:
                cap = cap.model_copy(update={**fields, "updated_at": self.store.now()})
                updated = cap
            capabilities.append(cap)

        if updated is None:
            logger.info("capability_store.update.not_found", extra={"capability_id": capability_id})
            return None

        self.store.commit(data.model_copy(update={"capabilities": capabilities}))
        logger.info("capability_store.update.done", extra={"capability_id": capability_id})
        return updated

    def delete(self, capability_id: str) -> bool:
        """Remove the capability and every plan referencing it. Unknown ids are a no-op."""
        data = self.store.data
        if not any(c.id == capability_id for c in data.capabilities):
            logger.info("capability_store.delete.not_found", extra={"capability_id": capability_id})
            return False

        plans = [p for p in data.roadmap_plans if p.capability_id != capability_id]
        removed_plans = len(data.roadmap_plans) - len(plans)
        self.store.commit(
            data.model_copy(
                update={
                    "capabilities": [c for c in data.capabilities if c.id != capability_id],
                    "roadmap_plans": plans,
                }
            )
        )
        logger.info(
            "capability_store.delete.done",
            extra={"capability_id": capability_id, "removed": removed_plans},
        )
        return True

    def search(self, term: str) -> List[Capability]:
        """Case-insensitive substring match on name, workstream lead, SME and BA."""
        needle = (term or "").strip().lower()
        if not needle:
            return self.list_all()
        return [
            c
            for c in self.store.data.capabilities
            if any(needle in value.lower() for value in (c.name, c.workstream_lead, c.sme, c.ba))
        ]

    @staticmethod
    def _validate(model, payload, exclude_unset: bool = False) -> Dict[str, Any]:
        try:
            obj = payload if isinstance(payload, model) else model.model_validate(payload)
        except ValidationError as exc:
            raise RecordValidationError(f"Invalid capability: {exc.errors()[0]['msg']}") from exc
        return {name: getattr(obj, name) for name in obj.model_dump(exclude_unset=exclude_unset)}


__all__ = ["CapabilityStore"]
