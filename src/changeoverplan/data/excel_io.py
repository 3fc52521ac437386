from __future__ import annotations

import asyncio
import io
import math
import re
from datetime import date, datetime, timedelta
from pathlib import Path
from typing import Any

import pandas as pd

Matrix = list[list[Any]]

# Days between the spreadsheet epoch and 1970-01-01, including the phantom
# 1900-02-29 the format counts.
EXCEL_UNIX_EPOCH_OFFSET = 25569
UNIX_EPOCH = date(1970, 1, 1)


class WorkbookError(ValueError):
    """Raised when workbook bytes cannot be turned into sheets."""


async def read_upload(path: str | Path) -> bytes:
    """Read an uploaded file off the event loop."""
    return await asyncio.to_thread(Path(path).read_bytes)


def read_workbook_bytes(content: bytes) -> dict[str, Matrix]:
    """Read .xlsx bytes into one positional matrix per sheet.

    Rows and columns keep their sheet positions (row 0 is sheet row 1,
    column 0 is column A). Empty cells are None; native date cells come
    back as datetime objects and everything else as the stored value.
    """
    if not content:
        raise WorkbookError("workbook content is empty")
    try:
        frames = pd.read_excel(io.BytesIO(content), sheet_name=None, header=None, dtype=object)
    except Exception as exc:
        raise WorkbookError(f"unreadable workbook: {exc}") from exc

    if not frames:
        raise WorkbookError("workbook has no sheets")

    return {str(name): _frame_to_matrix(df) for name, df in frames.items()}


def _frame_to_matrix(df: pd.DataFrame) -> Matrix:
    if df.empty:
        return []
    df = df.astype(object)
    return df.where(pd.notna(df), None).values.tolist()


def row_at(matrix: Matrix, index: int) -> list[Any]:
    """Return the row at ``index`` or an empty row when out of range."""
    if 0 <= index < len(matrix):
        return matrix[index] or []
    return []


def cell_at(row: list[Any], index: int) -> Any:
    if 0 <= index < len(row):
        return row[index]
    return None


def is_blank(value: Any) -> bool:
    if value is None:
        return True
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def cell_text(value: Any) -> str:
    """Trimmed string form of a cell.

    Integral floats render without a trailing ``.0`` so that numeric cells
    read the same way the sheet displays them ("300", not "300.0").
    """
    if is_blank(value):
        return ""
    if isinstance(value, bool):
        return str(value).upper()
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


_LEADING_FLOAT_RE = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")


def leading_float(text: str) -> float | None:
    """Parse the numeric prefix of ``text`` ("12.5 min" -> 12.5).

    Returns None when the text does not start with a number.
    """
    m = _LEADING_FLOAT_RE.match(str(text or "").strip())
    if not m:
        return None
    value = float(m.group(0))
    return value if math.isfinite(value) else None


def coerce_number(value: Any) -> float | None:
    """Coerce a cell to float.

    Numbers pass through; strings must parse completely. Returns None for
    empty and non-numeric values.
    """
    if is_blank(value) or isinstance(value, bool):
        return None

    if isinstance(value, (int, float)):
        return float(value)

    s = str(value).strip()
    if not s or s.lower() == "nan":
        return None

    try:
        number = float(s)
    except ValueError:
        return None
    return number if math.isfinite(number) else None


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def coerce_count(value: Any) -> int:
    """Whole, non-negative count from a target/manpower cell (bad values -> 0)."""
    number = coerce_number(value)
    if number is None:
        return 0
    return max(0, round_half_up(number))


def excel_serial_to_date(serial: float) -> date | None:
    """Convert a spreadsheet serial day number to a calendar date.

    25569 is 1970-01-01; the fractional (time of day) part is dropped.
    Zero or non-finite serials are not dates.
    """
    if not serial or not math.isfinite(serial):
        return None
    days = math.floor(serial - EXCEL_UNIX_EPOCH_OFFSET)
    try:
        return UNIX_EPOCH + timedelta(days=days)
    except OverflowError:
        return None


def coerce_cell_date(value: Any) -> date | None:
    """Native date cell or serial number -> date; anything else -> None."""
    if is_blank(value) or isinstance(value, bool):
        return None

    if isinstance(value, datetime):
        # pandas Timestamp is a datetime subclass
        return value.date()

    if isinstance(value, date):
        return value

    if isinstance(value, (int, float)):
        return excel_serial_to_date(float(value))

    return None
