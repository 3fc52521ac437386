"""Quick changeover (QCO) package.

Parses operation-breakdown workbooks, reconciles the OB with the floor's
bi-hourly sequence and computes the machine delta between two styles.
"""

from changeoverplan.qco.api import build_changeover, parse_ob_file, parse_ob_sheets, parse_ob_workbook
from changeoverplan.qco.delta import compare_machines
from changeoverplan.qco.layout import DEFAULT_OB_LAYOUT, OBLayout
from changeoverplan.qco.matcher import match_sequence
from changeoverplan.qco.ob import extract_ob_operations
from changeoverplan.qco.sections import group_sections
from changeoverplan.qco.sequence import extract_sequence
from changeoverplan.qco.similarity import similarity

__all__ = [
    "DEFAULT_OB_LAYOUT",
    "OBLayout",
    "build_changeover",
    "compare_machines",
    "extract_ob_operations",
    "extract_sequence",
    "group_sections",
    "match_sequence",
    "parse_ob_file",
    "parse_ob_sheets",
    "parse_ob_workbook",
    "similarity",
]
