# roadmap_dashboard/services/serialization.py
"""
JSON wire format of the AppData aggregate.

The persisted document is an object with three arrays (capabilities,
milestones, roadmapPlans); record fields use camelCase and every date is an
ISO-8601 string.
"""
from __future__ import annotations

import json
from typing import Any, Dict

from pydantic import ValidationError

from roadmap_dashboard.errors import DataLoadError
from roadmap_dashboard.schemas.app_data import AppData

REQUIRED_COLLECTIONS = ("capabilities", "milestones", "roadmapPlans")


def app_data_to_dict(data: AppData) -> Dict[str, Any]:
    return data.model_dump(mode="json", by_alias=True)


def serialize_app_data(data: AppData, indent: int | None = None) -> str:
    return json.dumps(app_data_to_dict(data), indent=indent)


def app_data_from_dict(raw: Any) -> AppData:
    """
    Validate a decoded document into AppData.

    Raises:
        DataLoadError: if a collection is missing or any record is malformed
            (including unparseable dates).
    """
    if not isinstance(raw, dict):
        raise DataLoadError("Persisted data must be a JSON object.")

    missing = [name for name in REQUIRED_COLLECTIONS if not isinstance(raw.get(name), list)]
    if missing:
        raise DataLoadError(f"Invalid data structure: missing collections {', '.join(missing)}")

    try:
        return AppData.model_validate(raw)
    except ValidationError as exc:
        raise DataLoadError(f"Invalid record in persisted data: {exc.error_count()} error(s)") from exc


def deserialize_app_data(text: str) -> AppData:
    try:
        raw = json.loads(text)
    except (TypeError, ValueError) as exc:
        raise DataLoadError(f"Persisted data is not valid JSON: {exc}") from exc
    return app_data_from_dict(raw)


__all__ = [
    "REQUIRED_COLLECTIONS",
    "app_data_to_dict",
    "serialize_app_data",
    "app_data_from_dict",
    "deserialize_app_data",
]
