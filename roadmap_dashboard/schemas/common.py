"""Shared pydantic building blocks for the persisted records."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BeforeValidator, ConfigDict, PlainSerializer
from pydantic.alias_generators import to_camel
from typing_extensions import Annotated

from roadmap_dashboard.utils.dates import coerce_date, to_iso


def _require_date(value: Any) -> datetime:
    """Strict counterpart of parse_plan_date: records never hold a fallback date."""
    try:
        parsed = coerce_date(value)
    except (TypeError, OverflowError, OSError) as exc:
        raise ValueError(f"Invalid date value: {value!r}") from exc
    if parsed is None:
        raise ValueError(f"Invalid date value: {value!r}")
    return parsed


# Aware UTC datetime in memory, ISO-8601 string on disk
UtcDateTime = Annotated[
    datetime,
    BeforeValidator(_require_date),
    PlainSerializer(to_iso, return_type=str, when_used="json"),
]

# Records are immutable values; field names are snake_case in Python and
# camelCase in the persisted JSON.
RECORD_CONFIG = ConfigDict(
    frozen=True,
    alias_generator=to_camel,
    populate_by_name=True,
    use_enum_values=False,
)
