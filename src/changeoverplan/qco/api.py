from __future__ import annotations

import logging
import random
from datetime import datetime
from pathlib import Path

from changeoverplan.core.models import ChangeoverRecord, ParsedOBData
from changeoverplan.data.excel_io import Matrix, read_upload, read_workbook_bytes
from changeoverplan.qco.delta import compare_machines
from changeoverplan.qco.layout import DEFAULT_OB_LAYOUT, OBLayout
from changeoverplan.qco.matcher import match_sequence
from changeoverplan.qco.ob import extract_ob_operations
from changeoverplan.qco.sections import group_sections
from changeoverplan.qco.sequence import extract_sequence
from changeoverplan.settings import DEFAULT_LINE_NUMBER, DEFAULT_MATCH_THRESHOLD

logger = logging.getLogger(__name__)


def find_ob_sheet(sheet_names: list[str]) -> str:
    for name in sheet_names:
        upper = name.upper()
        if "OB" in upper or "MAIN" in upper:
            return name
    return sheet_names[0]


def find_sequence_sheet(sheet_names: list[str]) -> str | None:
    for name in sheet_names:
        upper = name.upper()
        if "BI" in upper or "HOURLY" in upper:
            return name
    return None


def parse_ob_sheets(
    sheets: dict[str, Matrix],
    *,
    filename: str = "",
    layout: OBLayout = DEFAULT_OB_LAYOUT,
    threshold: float = DEFAULT_MATCH_THRESHOLD,
) -> ParsedOBData:
    """Build the per-style OB aggregate from an IE docket workbook.

    The OB sheet supplies operations, machines and manpower; the optional
    bi-hourly sheet supplies the floor order used for the section groups.
    """
    names = list(sheets)
    ob_name = find_ob_sheet(names)
    seq_name = find_sequence_sheet(names)

    ob = extract_ob_operations(sheets[ob_name], layout)
    sequence = extract_sequence(sheets[seq_name], layout) if seq_name else []
    if seq_name is None:
        logger.info("%s: no bi-hourly sheet, keeping OB order", filename or ob_name)

    ordered = match_sequence(ob.operations, sequence, threshold=threshold)
    logger.info(
        "%s: style %s, %d operations, %d sequence rows, manpower %d",
        filename or ob_name,
        ob.style_number,
        len(ob.operations),
        len(sequence),
        ob.manpower,
    )

    return ParsedOBData(
        filename=filename,
        style_number=ob.style_number,
        machine_counts=ob.machine_counts,
        manpower=ob.manpower,
        total_smv=ob.total_smv,
        operations=ob.operations,
        sections=group_sections(ordered),
    )


def parse_ob_workbook(
    content: bytes,
    *,
    filename: str = "",
    layout: OBLayout = DEFAULT_OB_LAYOUT,
    threshold: float = DEFAULT_MATCH_THRESHOLD,
) -> ParsedOBData:
    return parse_ob_sheets(read_workbook_bytes(content), filename=filename, layout=layout, threshold=threshold)


async def parse_ob_file(path: str | Path, *, threshold: float = DEFAULT_MATCH_THRESHOLD) -> ParsedOBData:
    content = await read_upload(path)
    return parse_ob_workbook(content, filename=Path(path).name, threshold=threshold)


def make_qco_number(line_number: str, current_style: str, upcoming_style: str, rng: random.Random | None = None) -> str:
    """<line>-<first 4 of current>-<first 4 of upcoming>-<3 random digits>; not unique."""
    suffix = (rng or random).randrange(1000)
    return f"{line_number}-{current_style[:4]}-{upcoming_style[:4]}-{suffix:03d}"


def build_changeover(
    current: ParsedOBData,
    upcoming: ParsedOBData,
    *,
    line_number: str = DEFAULT_LINE_NUMBER,
    rng: random.Random | None = None,
    timestamp: datetime | None = None,
) -> ChangeoverRecord:
    delta = compare_machines(current.machine_counts, upcoming.machine_counts)
    return ChangeoverRecord(
        qco_number=make_qco_number(line_number, current.style_number, upcoming.style_number, rng),
        line_number=line_number,
        current_style=current,
        upcoming_style=upcoming,
        machine_summary=delta.comparisons,
        total_needed=delta.total_needed,
        total_surplus=delta.total_surplus,
        timestamp=timestamp or datetime.now(),
    )
