#!/usr/bin/env python3
"""Command-line front end for the roadmap dashboard.

Usage examples:
    roadmap-dashboard capability add "Payments API" --lead Ana --milestone "MVP"
    roadmap-dashboard plan add <capability_id> --from 2026-01-05
    roadmap-dashboard plan history <capability_id>
    roadmap-dashboard timeline --history <capability_id> --columns 96
    roadmap-dashboard export > backup.json
    roadmap-dashboard import backup.json

Exit codes:
    0 on success, 1 on unexpected exception, 2 on invalid input,
    3 when the requested record does not exist.
"""
from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional, Sequence

from sqlalchemy.engine import Engine

from roadmap_dashboard.config import settings, setup_json_logging
from roadmap_dashboard.errors import RoadmapDataError
from roadmap_dashboard.schemas.roadmap_plan import PHASE_DATE_FIELDS, PhaseDates
from roadmap_dashboard.services.dashboard import Dashboard
from roadmap_dashboard.services.plan_form import default_phase_dates, validate_phase_dates
from roadmap_dashboard.timeline.grid import build_month_grid
from roadmap_dashboard.timeline.projector import project_plan
from roadmap_dashboard.timeline.rows import TimelineRow, collect_timeline_rows
from roadmap_dashboard.timeline.window import TimelineWindow, default_visible_window
from roadmap_dashboard.utils.dates import coerce_date, to_iso

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_INVALID = 2
EXIT_NOT_FOUND = 3


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Manage capabilities, milestones and roadmap plans.")
    parser.add_argument(
        "--log-level",
        type=str,
        default=settings.LOG_LEVEL,
        help="Logging level (e.g. INFO, DEBUG).",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    # capability
    cap = sub.add_parser("capability", help="Capability operations.")
    cap_sub = cap.add_subparsers(dest="action", required=True)
    cap_add = cap_sub.add_parser("add")
    cap_add.add_argument("name")
    cap_add.add_argument("--lead", default="")
    cap_add.add_argument("--sme", default="")
    cap_add.add_argument("--ba", default="")
    cap_add.add_argument("--milestone", default="none")
    cap_add.add_argument("--status", default=None)
    cap_add.add_argument("--rag", default=None)
    cap_add.add_argument("--notes", default="")
    cap_list = cap_sub.add_parser("list")
    cap_list.add_argument("--search", default="")
    cap_del = cap_sub.add_parser("delete")
    cap_del.add_argument("capability_id")

    # milestone
    ms = sub.add_parser("milestone", help="Milestone operations.")
    ms_sub = ms.add_subparsers(dest="action", required=True)
    ms_add = ms_sub.add_parser("add")
    ms_add.add_argument("name")
    ms_add.add_argument("date", help="ISO-8601 date.")
    ms_list = ms_sub.add_parser("list")
    ms_list.add_argument("--search", default="")
    ms_del = ms_sub.add_parser("delete")
    ms_del.add_argument("milestone_id")
    ms_sub.add_parser("dangling", help="Capabilities pointing at unknown milestones.")

    # plan
    plan = sub.add_parser("plan", help="Roadmap plan operations.")
    plan_sub = plan.add_subparsers(dest="action", required=True)
    plan_add = plan_sub.add_parser("add", help="Create a new plan version.")
    plan_add.add_argument("capability_id")
    plan_add.add_argument(
        "--dates",
        nargs=len(PHASE_DATE_FIELDS),
        default=None,
        metavar="DATE",
        help="Ten ISO dates: start/end for REQ, DES, DEV, CST and UAT.",
    )
    plan_add.add_argument("--from", dest="from_date", default=None, help="Base date for default phase dates.")
    plan_add.add_argument("--force", action="store_true", help="Skip the end-after-start checks.")
    plan_hist = plan_sub.add_parser("history")
    plan_hist.add_argument("capability_id")
    plan_active = plan_sub.add_parser("active")
    plan_active.add_argument("capability_id")
    plan_del = plan_sub.add_parser("delete")
    plan_del.add_argument("plan_id")
    plan_sub.add_parser("check", help="Report active-plan and version violations.")

    # timeline
    tl = sub.add_parser("timeline", help="Render the roadmap as text.")
    tl.add_argument("--history", nargs="*", default=[], metavar="CAPABILITY_ID")
    tl.add_argument("--columns", type=int, default=96)

    # data
    exp = sub.add_parser("export", help="Print all data as JSON.")
    exp.add_argument("--indent", type=int, default=2)
    imp = sub.add_parser("import", help="Replace all data with a JSON export.")
    imp.add_argument("path")
    sub.add_parser("reset", help="Delete all data.")
    sub.add_parser("stats", help="Show counts and storage size.")
    return parser


def configure_logging(level: str) -> None:
    # stdout carries command output (ids, exports), so logs go to stderr
    setup_json_logging(getattr(logging, level.upper(), logging.INFO), stream=sys.stderr)


def _read_phase_dates(args: argparse.Namespace) -> PhaseDates:
    if args.dates:
        return PhaseDates.model_validate(dict(zip(PHASE_DATE_FIELDS, args.dates)))
    return default_phase_dates(coerce_date(args.from_date))


def render_timeline(
    rows: Sequence[TimelineRow],
    window: TimelineWindow,
    columns: int = 96,
) -> List[str]:
    """Fixed-width text rendering: one header line of month labels, one line per row."""
    grid = build_month_grid(window.start, window.end)
    header = [" "] * columns
    for cell in grid.months:
        col = int(cell.left_px / grid.content_width * columns)
        for i, ch in enumerate(cell.label[:3]):
            if col + i < columns:
                header[col + i] = ch

    name_width = max([len(r.capability.name) for r in rows] + [10]) + 6
    lines = [" " * name_width + "|" + "".join(header) + "|"]
    for row in rows:
        track = ["."] * columns
        for bar in project_plan(row.plan, window.start, window.end):
            if not bar.position.is_visible:
                continue
            first = int(bar.position.left * columns)
            last = max(first + 1, int((bar.position.left + bar.position.width) * columns))
            for col in range(first, min(last, columns)):
                track[col] = bar.short_label[0]
        tag = f"v{row.plan.version}" + ("*" if row.is_active else "")
        lines.append(f"{row.capability.name:<{name_width - 6}} {tag:<5}|" + "".join(track) + "|")
    return lines


def run(args: argparse.Namespace, dashboard: Dashboard) -> int:
    out = sys.stdout

    if args.command == "capability":
        if args.action == "add":
            payload = {
                "name": args.name,
                "workstream_lead": args.lead,
                "sme": args.sme,
                "ba": args.ba,
                "milestone": args.milestone,
                "notes": args.notes,
            }
            if args.status:
                payload["status"] = args.status
            if args.rag:
                payload["rag_status"] = args.rag
            cap = dashboard.add_capability(payload)
            print(cap.id, file=out)
        elif args.action == "list":
            for cap in dashboard.search_capabilities(args.search):
                print(f"{cap.id}\t{cap.name}\t{cap.status.value}\t{cap.rag_status.value}\t{cap.milestone}", file=out)
        elif args.action == "delete":
            if not dashboard.delete_capability(args.capability_id):
                return EXIT_NOT_FOUND
        return EXIT_OK

    if args.command == "milestone":
        if args.action == "add":
            ms = dashboard.add_milestone({"name": args.name, "date": args.date})
            print(ms.id, file=out)
        elif args.action == "list":
            for ms in dashboard.search_milestones(args.search):
                print(f"{ms.id}\t{ms.name}\t{to_iso(ms.date)}", file=out)
        elif args.action == "delete":
            if not dashboard.delete_milestone(args.milestone_id):
                return EXIT_NOT_FOUND
        elif args.action == "dangling":
            for ref in dashboard.dangling_milestone_refs():
                print(f"{ref.capability_id}\t{ref.capability_name}\t{ref.milestone_name}", file=out)
        return EXIT_OK

    if args.command == "plan":
        if args.action == "add":
            dates = _read_phase_dates(args)
            problems = validate_phase_dates(dates)
            if problems and not args.force:
                for message in problems.values():
                    print(message, file=sys.stderr)
                return EXIT_INVALID
            plan = dashboard.add_plan(args.capability_id, dates)
            print(f"{plan.id}\tv{plan.version}", file=out)
        elif args.action == "history":
            for plan in dashboard.get_history(args.capability_id):
                marker = "active" if plan.is_active else ""
                print(f"{plan.id}\tv{plan.version}\t{to_iso(plan.created_at)}\t{marker}", file=out)
        elif args.action == "active":
            plan = dashboard.get_active_plan(args.capability_id)
            if plan is None:
                return EXIT_NOT_FOUND
            for spec, start, end in plan.phase_ranges():
                print(f"{spec.short_label}\t{to_iso(start)}\t{to_iso(end)}", file=out)
        elif args.action == "delete":
            if not dashboard.delete_plan(args.plan_id):
                return EXIT_NOT_FOUND
        elif args.action == "check":
            problems = dashboard.plans.check_integrity()
            for problem in problems:
                print(problem, file=out)
            return EXIT_INVALID if problems else EXIT_OK
        return EXIT_OK

    if args.command == "timeline":
        window = default_visible_window(dashboard.store.now())
        rows = collect_timeline_rows(
            dashboard.capabilities.list_all(), dashboard.plans, show_history=set(args.history)
        )
        for line in render_timeline(rows, window, columns=args.columns):
            print(line, file=out)
        return EXIT_OK

    if args.command == "export":
        print(dashboard.store.export_json(indent=args.indent), file=out)
        return EXIT_OK

    if args.command == "import":
        with open(args.path, encoding="utf-8") as fh:
            dashboard.store.import_json(fh.read())
        return EXIT_OK

    if args.command == "reset":
        dashboard.store.reset()
        return EXIT_OK

    if args.command == "stats":
        stats = dashboard.store.stats()
        summary = dashboard.store.dashboard_summary()
        print(f"capabilities\t{stats.capabilities}", file=out)
        print(f"milestones\t{stats.milestones}", file=out)
        print(f"roadmap_plans\t{stats.roadmap_plans}", file=out)
        print(f"active_plans\t{summary.active_plans}", file=out)
        print(f"completed_capabilities\t{summary.completed_capabilities}", file=out)
        print(f"size_kb\t{stats.total_size_kb}", file=out)
        return EXIT_OK

    return EXIT_INVALID


def main(argv: Optional[Sequence[str]] = None, engine: Optional[Engine] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)
    logger.info("cli.start", extra={"reason": args.command})

    if engine is None:
        from roadmap_dashboard.db.session import engine

    try:
        dashboard = Dashboard.from_engine(engine)
        code = run(args, dashboard)
    except KeyboardInterrupt:
        logger.warning("cli.interrupted")
        return 130
    except (RoadmapDataError, ValueError) as exc:
        print(str(exc), file=sys.stderr)
        return EXIT_INVALID
    except Exception:
        logger.exception("cli.error")
        return EXIT_ERROR
    logger.info("cli.done")
    return code


if __name__ == "__main__":
    sys.exit(main())
