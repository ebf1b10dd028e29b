from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field

from roadmap_dashboard.schemas.capability import Capability
from roadmap_dashboard.schemas.common import RECORD_CONFIG
from roadmap_dashboard.schemas.milestone import Milestone
from roadmap_dashboard.schemas.roadmap_plan import RoadmapPlan


class AppData(BaseModel):
    """
    Aggregate root holding the three independent collections.

    Treated as an immutable value: stores build a new AppData for every
    mutation (see AppDataStore.commit) instead of editing lists in place.
    """
    model_config = RECORD_CONFIG

    capabilities: List[Capability] = Field(default_factory=list)
    milestones: List[Milestone] = Field(default_factory=list)
    roadmap_plans: List[RoadmapPlan] = Field(default_factory=list)

    @classmethod
    def empty(cls) -> "AppData":
        return cls()

    def plans_for(self, capability_id: str) -> List[RoadmapPlan]:
        return [p for p in self.roadmap_plans if p.capability_id == capability_id]
