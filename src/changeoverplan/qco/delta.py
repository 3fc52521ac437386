from __future__ import annotations

from collections.abc import Mapping

from changeoverplan.core.models import MachineComparison, MachineDelta, MachineStatus


def _status(diff: int) -> MachineStatus:
    if diff > 0:
        return "NEED"
    if diff < 0:
        return "SURPLUS"
    return "OK"


def compare_machines(current: Mapping[str, int], upcoming: Mapping[str, int]) -> MachineDelta:
    """Machines to bring in (NEED) or release (SURPLUS) for a changeover.

    Machine types keep first-seen order: current style first, then types
    only the upcoming style uses.
    """
    comparisons: list[MachineComparison] = []
    total_needed = 0
    total_surplus = 0

    for machine in dict.fromkeys([*current, *upcoming]):
        curr = current.get(machine, 0)
        nxt = upcoming.get(machine, 0)
        diff = nxt - curr
        if diff > 0:
            total_needed += diff
        elif diff < 0:
            total_surplus += abs(diff)
        comparisons.append(
            MachineComparison(
                machine_type=machine,
                current_qty=curr,
                upcoming_qty=nxt,
                diff=diff,
                status=_status(diff),
            )
        )

    return MachineDelta(comparisons=comparisons, total_needed=total_needed, total_surplus=total_surplus)
