from __future__ import annotations

from itertools import groupby

from changeoverplan.core.models import MergedOperation, SectionGroup


def group_sections(operations: list[MergedOperation]) -> list[SectionGroup]:
    """Split an ordered operation list wherever the section label changes.

    A section that reappears later (two "BACK" blocks) gets its own group.
    """
    return [
        SectionGroup(section_name=section, operations=list(ops))
        for section, ops in groupby(operations, key=lambda op: op.section)
    ]
