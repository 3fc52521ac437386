from __future__ import annotations

import logging
from dataclasses import dataclass, field

from changeoverplan.core.models import MergedOperation
from changeoverplan.data.excel_io import Matrix, cell_at, cell_text, leading_float, round_half_up
from changeoverplan.qco.layout import DEFAULT_OB_LAYOUT, MANUAL, UNCLASSIFIED, UNKNOWN_STYLE, OBLayout
from changeoverplan.qco.similarity import normalize

logger = logging.getLogger(__name__)


@dataclass
class OBSheet:
    """Operations read from the OB sheet plus the aggregates built alongside."""
    style_number: str = UNKNOWN_STYLE
    header_index: int = -1
    operations: list[MergedOperation] = field(default_factory=list)
    machine_counts: dict[str, int] = field(default_factory=dict)
    manpower: int = 0

    @property
    def total_smv(self) -> float:
        return sum(op.smv for op in self.operations)


def find_style_number(matrix: Matrix, layout: OBLayout = DEFAULT_OB_LAYOUT) -> str:
    """Value to the right of the first "STYLE" label in the sheet's top rows."""
    for row in matrix[: layout.header_scan_rows]:
        for idx, value in enumerate(row):
            if "STYLE" not in cell_text(value).upper():
                continue
            style = cell_text(cell_at(row, idx + 1))
            if style:
                return style
    return UNKNOWN_STYLE


def find_header_row(matrix: Matrix, layout: OBLayout = DEFAULT_OB_LAYOUT) -> int:
    """Index of the operations table header, or -1.

    Prefers a row naming "OPERATION"; falls back to one naming "SMV".
    """
    window = matrix[: layout.header_scan_rows]
    for token in ("OPERATION", "SMV"):
        for i, row in enumerate(window):
            if any(token in cell_text(value).upper() for value in row):
                return i
    return -1


def is_section_label(text: str) -> bool:
    """Column-A text that names a section rather than a serial number."""
    return bool(text) and leading_float(text) is None


def _non_negative(value) -> float:
    number = leading_float(cell_text(value))
    return max(0.0, number) if number is not None else 0.0


def extract_ob_operations(matrix: Matrix, layout: OBLayout = DEFAULT_OB_LAYOUT) -> OBSheet:
    """Parse the authoritative operation list of an OB sheet.

    Column A carries running section headers; rows with an operation name
    in column B are operations of the current section. Scanning stops at
    the end-of-line marker. A missing header yields no operations.
    """
    sheet = OBSheet(
        style_number=find_style_number(matrix, layout),
        header_index=find_header_row(matrix, layout),
    )
    if sheet.header_index == -1:
        logger.info("OB sheet has no operation header; no operations read")
        return sheet

    stop_words = {normalize(k) for k in layout.termination_keywords}
    section = UNCLASSIFIED
    manpower = 0.0
    machine_totals: dict[str, float] = {}

    for i in range(sheet.header_index + 1, len(matrix)):
        row = matrix[i]
        if not row:
            continue

        cell_a = cell_text(cell_at(row, layout.section_col))
        name = cell_text(cell_at(row, layout.name_col))

        if normalize(cell_a) in stop_words:
            logger.debug("OB scan stopped at row %d (%s)", i + 1, cell_a)
            break

        if is_section_label(cell_a):
            section = cell_a.upper()
            if not name:
                continue

        if not name:
            continue

        qty = _non_negative(cell_at(row, layout.qty_col))
        machine = cell_text(cell_at(row, layout.machine_col)) or MANUAL
        sheet.operations.append(
            MergedOperation(
                id=f"OB-{i}",
                section=section,
                name=name,
                smv=_non_negative(cell_at(row, layout.smv_col)),
                machine_type=machine,
                quantity=qty,
                sequence_index=i,
                source="OB",
            )
        )

        manpower += qty
        if machine.upper() != MANUAL:
            machine_totals[machine] = machine_totals.get(machine, 0.0) + qty

    sheet.manpower = round_half_up(manpower)
    sheet.machine_counts = {m: round_half_up(q) for m, q in machine_totals.items()}
    return sheet
