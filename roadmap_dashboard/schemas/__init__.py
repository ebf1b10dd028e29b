from .capability import (
	NO_MILESTONE,
	Capability,
	CapabilityCreate,
	CapabilityStatus,
	CapabilityUpdate,
	RagStatus,
)
from .milestone import Milestone, MilestoneCreate, MilestoneUpdate
from .roadmap_plan import PHASE_DATE_FIELDS, PHASES, Phase, PhaseDates, PhaseSpec, RoadmapPlan
from .app_data import AppData

__all__ = [
	"NO_MILESTONE",
	"Capability",
	"CapabilityCreate",
	"CapabilityStatus",
	"CapabilityUpdate",
	"RagStatus",
	"Milestone",
	"MilestoneCreate",
	"MilestoneUpdate",
	"PHASE_DATE_FIELDS",
	"PHASES",
	"Phase",
	"PhaseDates",
	"PhaseSpec",
	"RoadmapPlan",
	"AppData",
]
