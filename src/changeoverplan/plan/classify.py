"""Free-text cell classification for the plan grid.

These are tuned heuristics for one family of factory sheets, not semantic
guarantees: a purely numeric style name reads as a quantity, and a style
name containing "add" or "change" reads as a remark.
"""

from __future__ import annotations

import re

from changeoverplan.core.models import UnitType

REMARK_KEYWORDS = ("add", "between", "need to", "change")
REMARK_MIN_WORDS = 5
QUANTITY_MAX_DIGITS = 5
HOLIDAY_LABEL = "fri"

_DIGITS_RE = re.compile(r"^[0-9]+$")


def is_remark(text: str) -> bool:
    s = text.lower()
    if any(k in s for k in REMARK_KEYWORDS):
        return True
    # Sentence-like text; style codes are hyphenated
    return len(s.split(" ")) >= REMARK_MIN_WORDS and "-" not in s


def is_quantity(text: str) -> bool:
    s = text.lower()
    return "pcs" in s or (bool(_DIGITS_RE.match(s)) and len(s) <= QUANTITY_MAX_DIGITS)


def is_new_style(text: str) -> bool:
    return bool(text) and not is_remark(text) and not is_quantity(text)


def is_holiday_label(day_label: str) -> bool:
    """Friday is the weekly off day on these floors."""
    return HOLIDAY_LABEL in day_label.lower()


def unit_header(text: str) -> UnitType | None:
    """Unit named by a column-A section header, if any."""
    s = text.lower()
    if "main unit" in s:
        return "Main Unit"
    if "sub unit" in s:
        return "Sub Unit"
    return None


def is_total_row(text: str) -> bool:
    return "ttl qty" in text.lower()


def is_supervisor_name(text: str) -> bool:
    s = text.lower()
    return bool(s) and "unit" not in s and "ttl" not in s and "budget" not in s
