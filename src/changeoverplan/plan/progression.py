from __future__ import annotations

from dataclasses import replace
from datetime import date

from changeoverplan.core.models import StyleEntry


def _progression_key(style: StyleEntry) -> tuple[str, bool, date]:
    # Runs without a start date sort first within their line.
    return (style.physical_line, style.start_date is not None, style.start_date or date.min)


def link_style_progression(styles: list[StyleEntry]) -> list[StyleEntry]:
    """Order runs by line and start date and chain them.

    Each run's ``current_running_style`` becomes the name of the run before
    it on the same physical line, replacing whatever the sheet's "current
    style" column said. The first run on a line keeps its scanned value.
    Returns new entries; the input list and its entries are not modified.
    """
    ordered = sorted(styles, key=_progression_key)

    linked: list[StyleEntry] = []
    for i, style in enumerate(ordered):
        prev = ordered[i - 1] if i > 0 else None
        if prev is not None and prev.physical_line == style.physical_line:
            style = replace(style, current_running_style=prev.style_name)
        linked.append(style)
    return linked
