"""Levenshtein edit distance and normalized 0-100 similarity."""

from __future__ import annotations

import math

from lexicompare.constants import MAX_SIMILARITY
from lexicompare.errors import InvalidInput


def percent(part: float, whole: float) -> int:
    """``part / whole`` as a percentage, rounding halves up."""
    return math.floor(part / whole * MAX_SIMILARITY + 0.5)


def require_text(*values: object) -> None:
    """Fail fast on non-string input; never coerce."""
    for value in values:
        if not isinstance(value, str):
            raise InvalidInput(
                f"expected str, got {type(value).__name__}"
            )


def edit_distance(a: str, b: str) -> int:
    """Minimum single-character insertions, deletions and substitutions.

    Standard O(len(a)·len(b)) recurrence, keeping only two rows.
    """
    require_text(a, b)
    if a == b:
        return 0
    if not a:
        return len(b)
    if not b:
        return len(a)

    previous = list(range(len(b) + 1))
    for i, ca in enumerate(a, start=1):
        current = [i]
        for j, cb in enumerate(b, start=1):
            cost = 0 if ca == cb else 1
            current.append(
                min(
                    previous[j] + 1,  # deletion
                    current[j - 1] + 1,  # insertion
                    previous[j - 1] + cost,  # substitution
                )
            )
        previous = current
    return previous[-1]


def similarity(a: str, b: str) -> int:
    """Similarity of two strings as an integer percentage.

    ``(maxlen - distance) / maxlen * 100`` rounded half up. Two empty strings
    are identical (100); exactly one empty string scores 0. Case and
    whitespace are compared as-is.
    """
    require_text(a, b)
    max_len = max(len(a), len(b))
    if max_len == 0:
        return MAX_SIMILARITY
    if not a or not b:
        return 0
    distance = edit_distance(a, b)
    return percent(max_len - distance, max_len)
