from __future__ import annotations

import logging
from dataclasses import dataclass

from changeoverplan.core.models import Anomaly, CalendarDay, DailyPlan, StyleEntry, UnitType
from changeoverplan.data.excel_io import Matrix, cell_at, cell_text, coerce_count, row_at
from changeoverplan.plan.classify import (
    is_new_style,
    is_quantity,
    is_remark,
    is_supervisor_name,
    is_total_row,
    unit_header,
)
from changeoverplan.plan.layout import DEFAULT_PLAN_LAYOUT, PlanLayout
from changeoverplan.plan.lines import DEFAULT_LINE_RESOLVER, UNASSIGNED, LineResolver

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _RowContext:
    sheet_name: str
    row_index: int
    unit: UnitType
    supervisor: str
    physical_line: str
    current_running_style: str


def scan_style_blocks(
    matrix: Matrix,
    calendar: dict[int, CalendarDay],
    *,
    sheet_name: str,
    layout: PlanLayout = DEFAULT_PLAN_LAYOUT,
    resolver: LineResolver = DEFAULT_LINE_RESOLVER,
) -> list[StyleEntry]:
    """Walk the style/target/manpower row triples of one plan sheet.

    Returns one StyleEntry per contiguous style run, in row then column
    order. The unit ("Main Unit"/"Sub Unit") carries over from the last
    header row seen above.
    """
    styles: list[StyleEntry] = []
    unit: UnitType = "Main Unit"

    last_row = min(len(matrix) - 1, layout.style_end_row)
    for r in range(layout.style_start_row, last_row + 1, layout.row_stride):
        style_row = row_at(matrix, r)
        ctx_text = cell_text(cell_at(style_row, layout.line_ctx_col))

        unit = unit_header(ctx_text) or unit
        if is_total_row(ctx_text):
            logger.debug("Sheet %s row %d: total row skipped", sheet_name, r + 1)
            continue

        supervisor = ctx_text if is_supervisor_name(ctx_text) else UNASSIGNED
        ctx = _RowContext(
            sheet_name=sheet_name,
            row_index=r,
            unit=unit,
            supervisor=supervisor,
            physical_line=resolver.resolve(supervisor),
            current_running_style=cell_text(cell_at(style_row, layout.current_style_col)),
        )
        styles.extend(
            _scan_style_row(
                ctx,
                style_row=style_row,
                target_row=row_at(matrix, r + 1),
                manpower_row=row_at(matrix, r + 2),
                calendar=calendar,
                plan_start_col=layout.plan_start_col,
            )
        )

    return styles


def _scan_style_row(
    ctx: _RowContext,
    *,
    style_row: list,
    target_row: list,
    manpower_row: list,
    calendar: dict[int, CalendarDay],
    plan_start_col: int,
) -> list[StyleEntry]:
    closed: list[StyleEntry] = []
    active: StyleEntry | None = None

    for c in range(plan_start_col, len(style_row)):
        text = cell_text(style_row[c])
        day = calendar.get(c)

        if is_new_style(text):
            if active is not None:
                # A run ends on the day the next one starts on this row.
                if day is not None:
                    active.end_date = day.date
                closed.append(active)
            active = _open_style(ctx, text, c, style_row)

        if active is None:
            continue

        if text and is_remark(text):
            when = day.date.isoformat() if day is not None else "Unknown Date"
            active.remarks.append(f"{when}: {text}")

        if day is not None:
            _capture_day(active, day, cell_at(target_row, c), cell_at(manpower_row, c))

    if active is not None:
        closed.append(active)
    return closed


def _open_style(ctx: _RowContext, name: str, col: int, style_row: list) -> StyleEntry:
    style = StyleEntry(
        id=f"{ctx.sheet_name}-R{ctx.row_index}-C{col}",
        style_name=name,
        sheet_name=ctx.sheet_name,
        unit=ctx.unit,
        physical_line=ctx.physical_line,
        supervisor=ctx.supervisor,
        current_running_style=ctx.current_running_style,
        row_index=ctx.row_index,
        col_index=col,
    )
    # Order quantity sits right of the style name ("300pcs").
    right = cell_text(cell_at(style_row, col + 1))
    if is_quantity(right):
        style.quantity = right
    return style


def _capture_day(style: StyleEntry, day: CalendarDay, target_cell, manpower_cell) -> None:
    target = coerce_count(target_cell)
    manpower = coerce_count(manpower_cell)

    # The run spans every calendar column it covers, holidays included.
    if style.start_date is None:
        style.start_date = day.date
    style.end_date = day.date

    has_plan = target > 0 or manpower > 0
    if not has_plan and day.is_holiday:
        return

    style.add_daily_plan(
        DailyPlan(
            date=day.date,
            day_label=day.day_label,
            is_holiday=day.is_holiday,
            target=target,
            manpower=manpower,
        )
    )
    if day.is_holiday and has_plan:
        style.anomalies.append(
            Anomaly(
                kind="holiday_production",
                severity="medium",
                message=f"Production planned on holiday ({day.day_label})",
            )
        )
