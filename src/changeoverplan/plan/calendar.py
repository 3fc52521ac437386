from __future__ import annotations

from datetime import date
from typing import Any

from changeoverplan.core.models import CalendarDay
from changeoverplan.data.excel_io import Matrix, cell_at, cell_text, coerce_cell_date, is_blank, row_at
from changeoverplan.plan.classify import is_holiday_label
from changeoverplan.plan.layout import DEFAULT_PLAN_LAYOUT, PlanLayout


def day_label(value: Any, day: date) -> str:
    """Text of a day-row cell; date cells and blanks read as the weekday ("Fri")."""
    if is_blank(value) or isinstance(value, date):
        return day.strftime("%a")
    return cell_text(value)


def extract_calendar(matrix: Matrix, layout: PlanLayout = DEFAULT_PLAN_LAYOUT) -> dict[int, CalendarDay]:
    """Map plan-grid column index -> calendar day.

    Columns whose date cell is neither a native date nor a serial number
    are left out; callers treat a missing column as "not a plan day".
    """
    date_row = row_at(matrix, layout.date_row)
    day_row = row_at(matrix, layout.day_row)

    calendar: dict[int, CalendarDay] = {}
    for col in range(layout.plan_start_col, len(date_row)):
        day = coerce_cell_date(date_row[col])
        if day is None:
            continue
        label = day_label(cell_at(day_row, col), day)
        calendar[col] = CalendarDay(date=day, day_label=label, is_holiday=is_holiday_label(label))
    return calendar
