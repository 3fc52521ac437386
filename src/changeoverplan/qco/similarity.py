from __future__ import annotations

import re
from collections import Counter

_WS_RE = re.compile(r"\s+")


def normalize(text: str) -> str:
    return _WS_RE.sub(" ", str(text or "").lower().strip())


def bigrams(text: str) -> Counter[str]:
    return Counter(text[i : i + 2] for i in range(len(text) - 1))


def similarity(s1: str, s2: str) -> float:
    """Dice coefficient over character bigrams, ignoring case and whitespace.

    Tolerates the abbreviations and misspellings that show up between the
    OB and the bi-hourly sheet ("Attch lbl" vs "Attach label").
    """
    a = _WS_RE.sub("", normalize(s1))
    b = _WS_RE.sub("", normalize(s2))

    if not a and not b:
        return 1.0
    if not a or not b:
        return 0.0
    if a == b:
        return 1.0

    denominator = (len(a) - 1) + (len(b) - 1)
    if denominator == 0:
        return 0.0
    shared = sum((bigrams(a) & bigrams(b)).values())
    return 2 * shared / denominator
