"""Roadmap plan versioning and timeline layout for the capability dashboard."""

from roadmap_dashboard.errors import (
	DataImportError,
	DataLoadError,
	PlanIntegrityError,
	RecordValidationError,
	RoadmapDataError,
)
from roadmap_dashboard.services.dashboard import Dashboard
from roadmap_dashboard.services.data_store import AppDataStore
from roadmap_dashboard.services.plan_store import PlanStore
from roadmap_dashboard.timeline.grid import build_month_grid
from roadmap_dashboard.timeline.projector import get_phase_position
from roadmap_dashboard.utils.dates import parse_plan_date

__version__ = "0.1.0"

__all__ = [
	"DataImportError",
	"DataLoadError",
	"PlanIntegrityError",
	"RecordValidationError",
	"RoadmapDataError",
	"Dashboard",
	"AppDataStore",
	"PlanStore",
	"build_month_grid",
	"get_phase_position",
	"parse_plan_date",
]
