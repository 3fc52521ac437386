"""Workbook builders shared by the tests (no binary fixtures)."""

from __future__ import annotations

import io
from typing import Any

import openpyxl

PLAN_WIDTH = 14


def workbook_bytes(sheets: dict[str, list[list[Any]]]) -> bytes:
    """Create an .xlsx with one sheet per entry; None cells stay empty."""
    wb = openpyxl.Workbook()
    wb.remove(wb.active)
    for name, rows in sheets.items():
        ws = wb.create_sheet(title=name)
        for r, row in enumerate(rows, start=1):
            for c, value in enumerate(row, start=1):
                if value is not None:
                    ws.cell(row=r, column=c, value=value)

    buffer = io.BytesIO()
    wb.save(buffer)
    buffer.seek(0)
    return buffer.read()


def blank_plan(rows: int = 11, width: int = PLAN_WIDTH) -> list[list[Any]]:
    return [[None] * width for _ in range(rows)]


def plan_with_calendar(days: list[tuple[Any, str]], rows: int = 11, width: int = PLAN_WIDTH) -> list[list[Any]]:
    """Blank plan sheet with (date cell, day label) pairs from column K onward."""
    sheet = blank_plan(rows, width)
    for offset, (value, label) in enumerate(days):
        sheet[2][10 + offset] = value
        sheet[3][10 + offset] = label
    return sheet


def set_block(
    sheet: list[list[Any]],
    row: int,
    *,
    context: Any = None,
    current_style: Any = None,
    styles: dict[int, Any] | None = None,
    targets: dict[int, Any] | None = None,
    manpower: dict[int, Any] | None = None,
) -> None:
    """Fill one style/target/manpower row triple starting at ``row``."""
    sheet[row][0] = context
    sheet[row][1] = current_style
    for col, value in (styles or {}).items():
        sheet[row][col] = value
    for col, value in (targets or {}).items():
        sheet[row + 1][col] = value
    for col, value in (manpower or {}).items():
        sheet[row + 2][col] = value


def ob_sheet() -> list[list[Any]]:
    """OB sheet: style metadata, header, two sections and an end-of-line marker."""

    def row(a=None, b=None, smv=None, machine=None, qty=None):
        cells: list[Any] = [None] * 10
        cells[0], cells[1], cells[2], cells[6], cells[9] = a, b, smv, machine, qty
        return cells

    return [
        ["STYLE NO", "S2554MESS", None, None, None, None, None, None, None, None],
        [None] * 10,
        row("SL", "OPERATION", "SMV", "MACHINE", "QTY"),
        row("FRONT"),
        row(1, "Attach pocket", 0.55, "SNLS", 2),
        row(2, "Topstitch pocket", 0.4, "SNLS", 1),
        row("BACK", "Join yoke", 0.6, "OL", 1.5),
        row(3, "Press seam", 0.3, None, 1),
        row("END OF LINE"),
        row(4, "After the end", 0.9, "SNLS", 5),
    ]


def sequence_sheet(entries: list[tuple[str, str]]) -> list[list[Any]]:
    """Bi-hourly sheet with the operation name in B and machine ref in E."""
    rows: list[list[Any]] = [
        ["BI-HOURLY PRODUCTION REPORT", None, None, None, None],
        ["SL", "OPERATION NAME", None, None, "M/C NO"],
    ]
    for i, (name, ref) in enumerate(entries, start=1):
        rows.append([i, name, None, None, ref])
    return rows
