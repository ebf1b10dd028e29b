from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import List, NamedTuple, Tuple

from pydantic import BaseModel, Field

from roadmap_dashboard.schemas.common import RECORD_CONFIG, UtcDateTime


class Phase(str, Enum):
    """The five ordered phases of a roadmap plan."""
    REQUIREMENTS = "requirement"
    DESIGN = "design"
    DEVELOPMENT = "dev"
    CST = "cst"
    UAT = "uat"


class PhaseSpec(NamedTuple):
    phase: Phase
    label: str
    short_label: str
    start_field: str
    end_field: str


# Ordered phase definitions; field names match PhaseDates attributes
PHASES: Tuple[PhaseSpec, ...] = (
    PhaseSpec(Phase.REQUIREMENTS, "Requirements", "REQ", "requirement_start_date", "requirement_end_date"),
    PhaseSpec(Phase.DESIGN, "Design", "DES", "design_start_date", "design_end_date"),
    PhaseSpec(Phase.DEVELOPMENT, "Development", "DEV", "dev_start_date", "dev_end_date"),
    PhaseSpec(Phase.CST, "CST", "CST", "cst_start_date", "cst_end_date"),
    PhaseSpec(Phase.UAT, "UAT", "UAT", "uat_start_date", "uat_end_date"),
)

PHASE_DATE_FIELDS: Tuple[str, ...] = tuple(
    field for spec in PHASES for field in (spec.start_field, spec.end_field)
)


class PhaseDates(BaseModel):
    """
    The ten dates submitted for a plan.

    Ordering (start <= end, phases sequential) is deliberately NOT enforced
    here; see plan_form.validate_phase_dates for the form-level check.
    """
    model_config = RECORD_CONFIG

    requirement_start_date: UtcDateTime
    requirement_end_date: UtcDateTime
    design_start_date: UtcDateTime
    design_end_date: UtcDateTime
    dev_start_date: UtcDateTime
    dev_end_date: UtcDateTime
    cst_start_date: UtcDateTime
    cst_end_date: UtcDateTime
    uat_start_date: UtcDateTime
    uat_end_date: UtcDateTime

    def phase_range(self, spec: PhaseSpec) -> Tuple[datetime, datetime]:
        return getattr(self, spec.start_field), getattr(self, spec.end_field)

    def phase_ranges(self) -> List[Tuple[PhaseSpec, datetime, datetime]]:
        return [(spec, *self.phase_range(spec)) for spec in PHASES]

    def all_dates(self) -> List[datetime]:
        return [getattr(self, name) for name in PHASE_DATE_FIELDS]

    def to_phase_dates(self) -> "PhaseDates":
        """Strip plan metadata, leaving only the ten dates."""
        return PhaseDates(**{name: getattr(self, name) for name in PHASE_DATE_FIELDS})


class RoadmapPlan(PhaseDates):
    id: str
    capability_id: str
    version: int = Field(..., ge=1)
    is_active: bool = False
    created_at: UtcDateTime
