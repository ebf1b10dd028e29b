from roadmap_dashboard.timeline.grid import (
	DayCell,
	MonthCell,
	MonthGrid,
	build_day_axis,
	build_month_grid,
	content_height,
	phase_for_day,
)
from roadmap_dashboard.timeline.projector import (
	ZERO_POSITION,
	PhaseBar,
	PhasePosition,
	get_phase_position,
	project_plan,
)
from roadmap_dashboard.timeline.rows import (
	TimelineRow,
	collect_plan_dates,
	collect_timeline_rows,
	plan_date_bounds,
)
from roadmap_dashboard.timeline.window import (
	TimelineWindow,
	default_visible_window,
	full_timeline_bounds,
	initial_scroll_offset,
)

__all__ = [
	"DayCell",
	"MonthCell",
	"MonthGrid",
	"build_day_axis",
	"build_month_grid",
	"content_height",
	"phase_for_day",
	"ZERO_POSITION",
	"PhaseBar",
	"PhasePosition",
	"get_phase_position",
	"project_plan",
	"TimelineRow",
	"collect_plan_dates",
	"collect_timeline_rows",
	"plan_date_bounds",
	"TimelineWindow",
	"default_visible_window",
	"full_timeline_bounds",
	"initial_scroll_offset",
]
