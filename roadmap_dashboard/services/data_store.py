# roadmap_dashboard/services/data_store.py

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from sqlalchemy.exc import SQLAlchemyError

from roadmap_dashboard.config import settings
from roadmap_dashboard.errors import DataImportError, DataLoadError
from roadmap_dashboard.schemas.app_data import AppData
from roadmap_dashboard.schemas.capability import CapabilityStatus
from roadmap_dashboard.services.local_storage import LocalStorage
from roadmap_dashboard.services.serialization import deserialize_app_data, serialize_app_data
from roadmap_dashboard.utils.dates import utcnow

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]
IdFactory = Callable[[], str]


def generate_id() -> str:
    return uuid.uuid4().hex[:12]


@dataclass(frozen=True)
class DataStats:
    """Collection sizes and serialized footprint of the aggregate."""
    capabilities: int
    milestones: int
    roadmap_plans: int
    total_size: int  # characters of the serialized JSON

    @property
    def total_size_kb(self) -> float:
        return round(self.total_size / 1024, 1)


@dataclass(frozen=True)
class DashboardSummary:
    total_capabilities: int
    milestones: int
    active_plans: int
    completed_capabilities: int


class AppDataStore:
    """
    Owner of the AppData aggregate.

    Every mutation goes through `commit`, which swaps in a new AppData value
    with a single assignment and then writes the whole aggregate to local
    storage. Create one per application (or per test) and hand it to the
    Plan/Capability/Milestone stores.
    """

    def __init__(
        self,
        storage: Optional[LocalStorage] = None,
        storage_key: Optional[str] = None,
        clock: Clock = utcnow,
        id_factory: IdFactory = generate_id,
    ) -> None:
        self._storage = storage
        self.storage_key = storage_key or settings.STORAGE_KEY
        self.clock = clock
        self.id_factory = id_factory
        self._data = AppData.empty()

    @property
    def data(self) -> AppData:
        return self._data

    def load(self) -> AppData:
        """
        Read the aggregate from storage.

        Missing data yields an empty aggregate. Malformed or unreadable data is logged as an
        error and also yields an empty aggregate, so the caller keeps running.
        """
        if self._storage is None:
            return self._data

        try:
            raw = self._storage.get_item(self.storage_key)
        except SQLAlchemyError as exc:
            logger.error(
                "data_store.load.malformed",
                extra={"storage_key": self.storage_key, "reason": str(exc)},
            )
            self._data = AppData.empty()
            return self._data

        if raw is None:
            logger.info("data_store.load.empty", extra={"storage_key": self.storage_key})
            self._data = AppData.empty()
            return self._data

        try:
            self._data = deserialize_app_data(raw)
        except DataLoadError as exc:
            logger.error(
                "data_store.load.malformed",
                extra={"storage_key": self.storage_key, "reason": str(exc)},
            )
            self._data = AppData.empty()
            return self._data

        logger.info(
            "data_store.load.done",
            extra={
                "storage_key": self.storage_key,
                "count": len(self._data.capabilities),
                "total": len(self._data.roadmap_plans),
            },
        )
        return self._data

    def commit(self, new_data: AppData) -> None:
        """Replace the aggregate and persist it (best effort)."""
        self._data = new_data
        self._save()

    def _save(self) -> None:
        if self._storage is None:
            return
        try:
            self._storage.set_item(self.storage_key, serialize_app_data(self._data))
        except Exception:
            # In-memory state stays authoritative; the next commit retries the write
            logger.exception("data_store.save_failed", extra={"storage_key": self.storage_key})

    def now(self) -> datetime:
        return self.clock()

    def new_id(self) -> str:
        return self.id_factory()

    # Export / import -------------------------------------------------

    def export_json(self, indent: Optional[int] = 2) -> str:
        return serialize_app_data(self._data, indent=indent)

    def import_data(self, data: AppData) -> None:
        """Replace all existing data."""
        self.commit(data)
        logger.info(
            "data_store.import.done",
            extra={"count": len(data.capabilities), "total": len(data.roadmap_plans)},
        )

    def import_json(self, text: str) -> AppData:
        """
        Replace all existing data with a JSON export.

        Raises:
            DataImportError: if the text is blank, not JSON, lacks a collection,
                or holds a malformed record. The store is left unchanged.
        """
        if not text or not text.strip():
            raise DataImportError("Please provide JSON data to import")
        try:
            data = deserialize_app_data(text)
        except DataLoadError as exc:
            logger.warning("data_store.import.rejected", extra={"reason": str(exc)})
            raise DataImportError(f"Failed to import data: {exc}") from exc
        self.import_data(data)
        return data

    def reset(self) -> None:
        self.commit(AppData.empty())
        logger.info("data_store.reset")

    # Read-only summaries ---------------------------------------------

    def stats(self) -> DataStats:
        return DataStats(
            capabilities=len(self._data.capabilities),
            milestones=len(self._data.milestones),
            roadmap_plans=len(self._data.roadmap_plans),
            total_size=len(serialize_app_data(self._data)),
        )

    def dashboard_summary(self) -> DashboardSummary:
        data = self._data
        return DashboardSummary(
            total_capabilities=len(data.capabilities),
            milestones=len(data.milestones),
            active_plans=sum(1 for p in data.roadmap_plans if p.is_active),
            completed_capabilities=sum(
                1 for c in data.capabilities if c.status == CapabilityStatus.COMPLETED
            ),
        )


__all__ = [
    "AppDataStore",
    "DataStats",
    "DashboardSummary",
    "generate_id",
]
