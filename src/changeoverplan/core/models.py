from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Literal

UnitType = Literal["Main Unit", "Sub Unit"]
Severity = Literal["low", "medium", "high"]
AnomalyKind = Literal[
    "overlap",
    "gap",
    "regression",
    "phantom",
    "missing_date",
    "target_mismatch",
    "holiday_production",
]
OperationSource = Literal["OB", "Merged"]
MachineStatus = Literal["NEED", "SURPLUS", "OK"]


def _iso(value: date | None) -> str | None:
    return value.isoformat() if value is not None else None


# ---------------------------------------------------------------------------
# Pipeline A: production plan
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class CalendarDay:
    date: date
    day_label: str
    is_holiday: bool


@dataclass(frozen=True)
class DailyPlan:
    date: date
    day_label: str
    is_holiday: bool
    target: int
    manpower: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": self.date.isoformat(),
            "dayLabel": self.day_label,
            "isHoliday": self.is_holiday,
            "target": self.target,
            "manpower": self.manpower,
        }


@dataclass(frozen=True)
class Anomaly:
    kind: AnomalyKind
    severity: Severity
    message: str

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, "severity": self.severity, "message": self.message}


@dataclass
class StyleEntry:
    """One contiguous run of a style on one physical line within one sheet.

    Built incrementally by the block scanner; treat as read-only once the
    scanner has emitted it.
    """

    id: str
    style_name: str
    sheet_name: str
    unit: UnitType
    physical_line: str
    supervisor: str
    current_running_style: str
    row_index: int
    col_index: int
    quantity: str | int | float = ""
    total_target: int = 0
    total_manpower: int = 0
    start_date: date | None = None
    end_date: date | None = None
    daily_plans: list[DailyPlan] = field(default_factory=list)
    remarks: list[str] = field(default_factory=list)
    anomalies: list[Anomaly] = field(default_factory=list)

    def add_daily_plan(self, plan: DailyPlan) -> None:
        self.daily_plans.append(plan)
        self.total_target += plan.target
        self.total_manpower += plan.manpower

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "styleName": self.style_name,
            "sheetName": self.sheet_name,
            "unit": self.unit,
            "physicalLine": self.physical_line,
            "supervisor": self.supervisor,
            "currentRunningStyle": self.current_running_style,
            "quantity": self.quantity,
            "totalTarget": self.total_target,
            "totalManpower": self.total_manpower,
            "startDate": _iso(self.start_date),
            "endDate": _iso(self.end_date),
            "dailyPlans": [p.to_dict() for p in self.daily_plans],
            "rowIndex": self.row_index,
            "colIndex": self.col_index,
            "remarks": list(self.remarks),
            "anomalies": [a.to_dict() for a in self.anomalies],
        }


# ---------------------------------------------------------------------------
# Pipeline B: operation breakdown / changeover
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class MergedOperation:
    id: str
    section: str
    name: str
    smv: float
    machine_type: str
    quantity: float
    sequence_index: int
    source: OperationSource = "OB"
    bi_machine_ref: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "section": self.section,
            "name": self.name,
            "smv": self.smv,
            "machineType": self.machine_type,
            "quantity": self.quantity,
            "biMachineRef": self.bi_machine_ref,
            "sequenceIndex": self.sequence_index,
            "source": self.source,
        }


@dataclass(frozen=True)
class SequenceEntry:
    """A row of the bi-hourly sheet: operation name plus floor reference."""
    name: str
    ref: str
    row_index: int


@dataclass(frozen=True)
class SectionGroup:
    section_name: str
    operations: list[MergedOperation]

    def to_dict(self) -> dict[str, Any]:
        return {
            "sectionName": self.section_name,
            "operations": [op.to_dict() for op in self.operations],
        }


@dataclass(frozen=True)
class ParsedOBData:
    filename: str
    style_number: str
    machine_counts: dict[str, int]
    manpower: int
    total_smv: float
    operations: list[MergedOperation]
    sections: list[SectionGroup]

    def to_dict(self) -> dict[str, Any]:
        return {
            "filename": self.filename,
            "styleNumber": self.style_number,
            "machineCounts": dict(self.machine_counts),
            "manpower": self.manpower,
            "totalSMV": self.total_smv,
            "operations": [op.to_dict() for op in self.operations],
            "sections": [s.to_dict() for s in self.sections],
        }


@dataclass(frozen=True)
class MachineComparison:
    machine_type: str
    current_qty: int
    upcoming_qty: int
    diff: int
    status: MachineStatus

    def to_dict(self) -> dict[str, Any]:
        return {
            "machineType": self.machine_type,
            "currentQty": self.current_qty,
            "upcomingQty": self.upcoming_qty,
            "diff": self.diff,
            "status": self.status,
        }


@dataclass(frozen=True)
class MachineDelta:
    comparisons: list[MachineComparison]
    total_needed: int
    total_surplus: int


@dataclass(frozen=True)
class ChangeoverRecord:
    qco_number: str
    line_number: str
    current_style: ParsedOBData
    upcoming_style: ParsedOBData
    machine_summary: list[MachineComparison]
    total_needed: int
    total_surplus: int
    timestamp: datetime

    def to_dict(self) -> dict[str, Any]:
        return {
            "qcoNumber": self.qco_number,
            "lineNumber": self.line_number,
            "currentStyle": self.current_style.to_dict(),
            "upcomingStyle": self.upcoming_style.to_dict(),
            "machineSummary": [m.to_dict() for m in self.machine_summary],
            "totalNeeded": self.total_needed,
            "totalSurplus": self.total_surplus,
            "timestamp": self.timestamp.isoformat(),
        }


@dataclass(frozen=True)
class SaveResult:
    success: bool
    message: str
    id: str | None = None
