"""Read-side helpers over parsed style runs (search, grouping, summaries)."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date
from typing import Any, Literal

from changeoverplan.core.models import StyleEntry
from changeoverplan.data.excel_io import round_half_up
from changeoverplan.plan.lines import UNASSIGNED

GroupBy = Literal["line", "supervisor"]


@dataclass(frozen=True)
class DailyTotal:
    date: date
    target: int
    manpower: int


@dataclass(frozen=True)
class PlanSummary:
    unique_styles: int
    supervisors: int
    total_target: int
    total_manpower: int
    avg_manpower_per_style: int
    daily_totals: list[DailyTotal]
    anomalies: list[dict[str, Any]]
    remarks: list[dict[str, Any]]

    def to_dict(self) -> dict[str, Any]:
        return {
            "uniqueStyles": self.unique_styles,
            "supervisors": self.supervisors,
            "totalTarget": self.total_target,
            "totalManpower": self.total_manpower,
            "avgManpowerPerStyle": self.avg_manpower_per_style,
            "dailyTotals": [
                {"date": d.date.isoformat(), "target": d.target, "manpower": d.manpower}
                for d in self.daily_totals
            ],
            "anomalies": self.anomalies,
            "remarks": self.remarks,
        }


@dataclass(frozen=True)
class Timeline:
    lanes: dict[str, list[StyleEntry]]
    start: date | None
    end: date | None


def search_styles(styles: list[StyleEntry], query: str) -> list[StyleEntry]:
    """Case-insensitive substring match on style, line, supervisor and running style."""
    q = (query or "").strip().lower()
    if not q:
        return list(styles)
    return [
        s
        for s in styles
        if any(
            q in (value or "").lower()
            for value in (s.style_name, s.physical_line, s.supervisor, s.current_running_style)
        )
    ]


def natural_key(text: str) -> list:
    """Digit-aware, case-insensitive sort key ("S-2" < "S-10")."""
    return [(0, int(part), "") if part.isdigit() else (1, 0, part.lower()) for part in re.split(r"(\d+)", text)]


def group_styles(styles: list[StyleEntry], by: GroupBy = "line") -> dict[str, list[StyleEntry]]:
    groups: dict[str, list[StyleEntry]] = {}
    for s in styles:
        if by == "supervisor":
            key = s.supervisor or UNASSIGNED
        else:
            key = s.physical_line or s.supervisor or UNASSIGNED
        groups.setdefault(key, []).append(s)
    return {key: groups[key] for key in sorted(groups, key=natural_key)}


def summarize_plan(styles: list[StyleEntry]) -> PlanSummary:
    daily: dict[date, list[int]] = {}
    anomalies: list[dict[str, Any]] = []
    remarks: list[dict[str, Any]] = []
    per_style_avg = 0.0

    for s in styles:
        for a in s.anomalies:
            anomalies.append({**a.to_dict(), "styleName": s.style_name, "line": s.physical_line})
        for text in s.remarks:
            remarks.append({"text": text, "styleName": s.style_name, "line": s.physical_line})
        for plan in s.daily_plans:
            totals = daily.setdefault(plan.date, [0, 0])
            totals[0] += plan.target
            totals[1] += plan.manpower
        if s.daily_plans:
            per_style_avg += s.total_manpower / len(s.daily_plans)

    return PlanSummary(
        unique_styles=len({s.style_name for s in styles}),
        supervisors=len({s.supervisor for s in styles}),
        total_target=sum(s.total_target for s in styles),
        total_manpower=sum(s.total_manpower for s in styles),
        avg_manpower_per_style=round_half_up(per_style_avg / (len(styles) or 1)),
        daily_totals=[DailyTotal(date=d, target=t, manpower=m) for d, (t, m) in sorted(daily.items())],
        anomalies=anomalies,
        remarks=remarks,
    )


def timeline_lanes(styles: list[StyleEntry]) -> Timeline:
    """Runs that can be drawn on a timeline, one lane per physical line."""
    visible = [
        s
        for s in styles
        if s.start_date and s.end_date and (s.total_target > 0 or s.total_manpower > 0)
    ]
    if not visible:
        return Timeline(lanes={}, start=None, end=None)

    lanes: dict[str, list[StyleEntry]] = {}
    for s in visible:
        lanes.setdefault(s.physical_line or UNASSIGNED, []).append(s)

    return Timeline(
        lanes={lane: lanes[lane] for lane in sorted(lanes)},
        start=min(s.start_date for s in visible),
        end=max(s.end_date for s in visible),
    )
