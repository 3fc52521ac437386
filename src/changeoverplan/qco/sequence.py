from __future__ import annotations

from changeoverplan.core.models import SequenceEntry
from changeoverplan.data.excel_io import Matrix, cell_at, cell_text
from changeoverplan.qco.layout import DEFAULT_OB_LAYOUT, OBLayout

MIN_NAME_LENGTH = 2


def extract_sequence(matrix: Matrix | None, layout: OBLayout = DEFAULT_OB_LAYOUT) -> list[SequenceEntry]:
    """Read the floor sequence (operation name + machine reference) from a bi-hourly sheet.

    A missing sheet gives an empty sequence. Rows repeating the
    "OPERATION" header are skipped.
    """
    if not matrix:
        return []

    start = 0
    for i, row in enumerate(matrix[: layout.header_scan_rows]):
        if "OPERATION" in cell_text(cell_at(row, layout.seq_name_col)).upper():
            start = i + 1
            break

    entries: list[SequenceEntry] = []
    for i in range(start, len(matrix)):
        row = matrix[i] or []
        name = cell_text(cell_at(row, layout.seq_name_col))
        if len(name) < MIN_NAME_LENGTH or "OPERATION" in name.upper():
            continue
        entries.append(SequenceEntry(name=name, ref=cell_text(cell_at(row, layout.seq_ref_col)), row_index=i))
    return entries
