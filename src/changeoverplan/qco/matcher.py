from __future__ import annotations

import logging
from dataclasses import replace

from changeoverplan.core.models import MergedOperation, SequenceEntry
from changeoverplan.qco.similarity import similarity
from changeoverplan.settings import DEFAULT_MATCH_THRESHOLD

logger = logging.getLogger(__name__)

# Unmatched OB operations are numbered from here so they sort after every match.
ORPHAN_SEQUENCE_OFFSET = 9999


def match_sequence(
    ob_operations: list[MergedOperation],
    sequence: list[SequenceEntry],
    *,
    threshold: float = DEFAULT_MATCH_THRESHOLD,
) -> list[MergedOperation]:
    """Reorder OB operations into floor sequence order.

    Each sequence entry claims the most similar OB operation not yet
    claimed (earliest OB row wins ties) when the score reaches
    ``threshold``. Entries with no good match are dropped: the OB owns
    SMV and machine data. OB operations never claimed follow in OB order.
    """
    available: dict[str, MergedOperation] = {op.id: op for op in ob_operations}
    ordered: list[MergedOperation] = []
    dropped = 0

    for position, entry in enumerate(sequence):
        best: MergedOperation | None = None
        best_score = 0.0
        for op in available.values():
            score = similarity(entry.name, op.name)
            if score > best_score:
                best, best_score = op, score

        if best is None or best_score < threshold:
            dropped += 1
            continue

        del available[best.id]
        ordered.append(
            replace(best, bi_machine_ref=entry.ref, sequence_index=position, source="Merged")
        )

    for i, op in enumerate(available.values()):
        ordered.append(replace(op, sequence_index=ORPHAN_SEQUENCE_OFFSET + i, source="OB"))

    logger.debug(
        "Sequence match: %d matched, %d sequence rows dropped, %d OB-only",
        len(ordered) - len(available),
        dropped,
        len(available),
    )
    return ordered
