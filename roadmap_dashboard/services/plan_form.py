# roadmap_dashboard/services/plan_form.py
"""
Helpers for the plan entry form: pre-filled dates and per-phase checks.

The plan store accepts any ten dates; the ordering rules below are only
applied by callers that collect dates from a user.
"""
from __future__ import annotations

from datetime import timedelta
from typing import Dict, Optional, Sequence

from roadmap_dashboard.config import settings
from roadmap_dashboard.schemas.roadmap_plan import PHASE_DATE_FIELDS, Phase, PhaseDates
from roadmap_dashboard.utils.dates import DateLike, start_of_day, utcnow

_END_BEFORE_START = "{name} end date must be later than start date"

# Form wording uses the singular for the first phase
_ERROR_NAMES = {Phase.REQUIREMENTS: "Requirement"}


def default_phase_dates(
    today: Optional[DateLike] = None,
    offsets: Optional[Sequence[int]] = None,
) -> PhaseDates:
    """Ten dates laid out as day offsets from `today` (midnight UTC)."""
    base = start_of_day(today if today is not None else utcnow())
    offsets = list(offsets if offsets is not None else settings.PLAN_DEFAULT_PHASE_OFFSETS)
    if len(offsets) != len(PHASE_DATE_FIELDS):
        raise ValueError(f"Expected {len(PHASE_DATE_FIELDS)} day offsets, got {len(offsets)}")
    return PhaseDates(
        **{name: base + timedelta(days=days) for name, days in zip(PHASE_DATE_FIELDS, offsets)}
    )


def validate_phase_dates(dates: PhaseDates) -> Dict[str, str]:
    """
    Check that every phase ends after it starts.

    Returns a mapping of end-date field name -> message; empty when valid.
    Overlap between phases is allowed.
    """
    errors: Dict[str, str] = {}
    for spec, start, end in dates.phase_ranges():
        if end <= start:
            errors[spec.end_field] = _END_BEFORE_START.format(name=_ERROR_NAMES.get(spec.phase, spec.label))
    return errors


__all__ = ["default_phase_dates", "validate_phase_dates"]
