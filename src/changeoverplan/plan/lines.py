"""Supervisor name -> physical sewing line lookup."""

from __future__ import annotations

from collections.abc import Mapping

UNASSIGNED = "Unassigned"

# Line code -> supervisor on the floor board. Order matters: partial matches
# resolve to the first line listed.
LINE_SCHEDULES: dict[str, str] = {
    "S-01": "WASANA-1",
    "S-01A": "WASANA-2",
    "S-02": "SOHRAB",
    "S-03": "SOHEL",
    "S-04": "AHMAD",
    "S-05": "OMAR FARUK",
    "S-06": "SUMI",
    "S-07": "NAGENDRA",
    "S-07A": "KAMAL-2",
    "S-08": "BALISTER",
    "S-09": "MONJURUL",
    "S-10": "RAJKUMAR",
    "S-11": "KAMAL-1",
    "S-12": "DARMENDRA",
    "S-13": "SUMON",
    "S-14": "SHARIF",
    "S-15": "MUNSEF",
    "S-16": "RAHAMAN",
    "S-17": "MASUM",
    "S-18": "DIANA",
    "S-19": "ALAMGIR",
    "S-20": "KAZAL",
    "S-21": "DEVRAJ",
    "S-22": "ASHRAFUL",
    "S-23": "RUMA",
    "S-24": "NASIR",
    "S-25": "AKBAR",
    "S-26": "HIMAYAT",
    "S-28": "ROOP NARAYAN",
    "S-29": "SUBA",
    "S-30": "RAJIB",
    "S-31": "AKASH",
    "S-32": "KALU CHARAN",
}


class LineResolver:
    """Resolve free-text supervisor names to line codes.

    Resolution order: exact (case-insensitive) name, then the first
    registry name that contains or is contained in the input, then the
    input itself.
    """

    def __init__(self, schedules: Mapping[str, str]):
        self._supervisor_to_line: dict[str, str] = {}
        for line, supervisor in schedules.items():
            if supervisor:
                self._supervisor_to_line[supervisor.strip().upper()] = line

    def resolve(self, supervisor: str) -> str:
        name = str(supervisor or "").strip()
        if not name:
            return UNASSIGNED
        upper = name.upper()

        line = self._supervisor_to_line.get(upper)
        if line is not None:
            return line

        for key, line in self._supervisor_to_line.items():
            if key in upper or upper in key:
                return line

        return name


DEFAULT_LINE_RESOLVER = LineResolver(LINE_SCHEDULES)


def resolve_line(supervisor: str) -> str:
    return DEFAULT_LINE_RESOLVER.resolve(supervisor)
