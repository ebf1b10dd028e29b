# roadmap_dashboard/errors.py
"""Exception types raised by the roadmap dashboard core."""

from __future__ import annotations


class RoadmapDataError(Exception):
    """Base class for all store and persistence errors."""


class RecordValidationError(RoadmapDataError, ValueError):
    """A create/update was rejected; the store is left unchanged."""


class PlanIntegrityError(RoadmapDataError):
    """Stored plans violate an invariant (e.g. more than one active plan)."""

    def __init__(self, capability_id: str, message: str) -> None:
        super().__init__(message)
        self.capability_id = capability_id


class DataLoadError(RoadmapDataError):
    """Persisted aggregate could not be decoded."""


class DataImportError(RoadmapDataError, ValueError):
    """An import payload was rejected; the store is left unchanged."""


__all__ = [
    "RoadmapDataError",
    "RecordValidationError",
    "PlanIntegrityError",
    "DataLoadError",
    "DataImportError",
]
