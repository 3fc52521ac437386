"""Fixed positions of the production-plan sheets (all 0-indexed)."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PlanLayout:
    date_row: int = 2  # Row 3: dates (native or serial)
    day_row: int = 3  # Row 4: weekday labels
    plan_start_col: int = 10  # Column K: first plan day
    style_start_row: int = 8  # Row 9: first style/target/manpower block
    style_end_row: int = 114  # Row 115: last style row considered
    row_stride: int = 3  # style, target, manpower
    line_ctx_col: int = 0  # Column A: unit header / supervisor
    current_style_col: int = 1  # Column B: style running today


DEFAULT_PLAN_LAYOUT = PlanLayout()
