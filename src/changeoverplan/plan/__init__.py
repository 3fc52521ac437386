"""Production plan reconstruction.

Turns the factory's weekly planning workbook into style runs per sewing
line: calendar columns, style/target/manpower row triples, supervisor to
line resolution and the per-line style progression.
"""

from changeoverplan.plan.api import parse_plan_file, parse_plan_sheets, parse_plan_workbook
from changeoverplan.plan.calendar import extract_calendar
from changeoverplan.plan.layout import DEFAULT_PLAN_LAYOUT, PlanLayout
from changeoverplan.plan.lines import LINE_SCHEDULES, LineResolver, resolve_line
from changeoverplan.plan.progression import link_style_progression
from changeoverplan.plan.scanner import scan_style_blocks
from changeoverplan.plan.views import group_styles, search_styles, summarize_plan, timeline_lanes

__all__ = [
    "DEFAULT_PLAN_LAYOUT",
    "LINE_SCHEDULES",
    "LineResolver",
    "PlanLayout",
    "extract_calendar",
    "group_styles",
    "link_style_progression",
    "parse_plan_file",
    "parse_plan_sheets",
    "parse_plan_workbook",
    "resolve_line",
    "scan_style_blocks",
    "search_styles",
    "summarize_plan",
    "timeline_lanes",
]
