from __future__ import annotations

import logging
from pathlib import Path

from changeoverplan.core.models import StyleEntry
from changeoverplan.data.excel_io import Matrix, WorkbookError, read_upload, read_workbook_bytes
from changeoverplan.plan.calendar import extract_calendar
from changeoverplan.plan.layout import DEFAULT_PLAN_LAYOUT, PlanLayout
from changeoverplan.plan.lines import DEFAULT_LINE_RESOLVER, LineResolver
from changeoverplan.plan.progression import link_style_progression
from changeoverplan.plan.scanner import scan_style_blocks

logger = logging.getLogger(__name__)


def parse_plan_sheets(
    sheets: dict[str, Matrix],
    *,
    layout: PlanLayout = DEFAULT_PLAN_LAYOUT,
    resolver: LineResolver = DEFAULT_LINE_RESOLVER,
) -> list[StyleEntry]:
    """Reconstruct style runs from every plan sheet and link them per line.

    Sheets shorter than the first style row are skipped. Raises
    WorkbookError when no sheet is long enough to hold a plan.
    """
    styles: list[StyleEntry] = []
    scanned = 0
    for sheet_name, matrix in sheets.items():
        if len(matrix) < layout.style_start_row:
            logger.info("Sheet %r skipped: %d rows, plan starts at row %d", sheet_name, len(matrix), layout.style_start_row + 1)
            continue

        calendar = extract_calendar(matrix, layout)
        sheet_styles = scan_style_blocks(
            matrix,
            calendar,
            sheet_name=sheet_name,
            layout=layout,
            resolver=resolver,
        )
        logger.info("Sheet %r: %d plan days, %d style runs", sheet_name, len(calendar), len(sheet_styles))
        styles.extend(sheet_styles)
        scanned += 1

    if scanned == 0:
        raise WorkbookError(f"no sheet reaches the plan rows (need at least {layout.style_start_row} rows)")

    return link_style_progression(styles)


def parse_plan_workbook(
    content: bytes,
    *,
    layout: PlanLayout = DEFAULT_PLAN_LAYOUT,
    resolver: LineResolver = DEFAULT_LINE_RESOLVER,
) -> list[StyleEntry]:
    return parse_plan_sheets(read_workbook_bytes(content), layout=layout, resolver=resolver)


async def parse_plan_file(
    path: str | Path,
    *,
    layout: PlanLayout = DEFAULT_PLAN_LAYOUT,
    resolver: LineResolver = DEFAULT_LINE_RESOLVER,
) -> list[StyleEntry]:
    content = await read_upload(path)
    return parse_plan_workbook(content, layout=layout, resolver=resolver)
