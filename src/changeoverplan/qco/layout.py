"""Fixed positions of the operation-breakdown workbook (all 0-indexed)."""

from __future__ import annotations

from dataclasses import dataclass

TERMINATION_KEYWORDS = ("EOL-TB", "END OF LINE", "END OF LINE-TB", "EOLTB")


@dataclass(frozen=True)
class OBLayout:
    section_col: int = 0  # Column A: section marker
    name_col: int = 1  # Column B: operation name
    smv_col: int = 2  # Column C: SMV
    machine_col: int = 6  # Column G: machine type
    qty_col: int = 9  # Column J: machine/operator quantity
    header_scan_rows: int = 20
    seq_name_col: int = 1  # Bi-hourly column B: operation name
    seq_ref_col: int = 4  # Bi-hourly column E: floor machine reference
    termination_keywords: tuple[str, ...] = TERMINATION_KEYWORDS


DEFAULT_OB_LAYOUT = OBLayout()

MANUAL = "MANUAL"
UNCLASSIFIED = "UNCLASSIFIED"
UNKNOWN_STYLE = "Unknown"
