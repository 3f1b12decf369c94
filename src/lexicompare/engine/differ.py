"""Word-level diff by greedy two-pointer alignment.

Words are consumed left to right; on a mismatch the differ looks at
most one word ahead on either side. Reordered or repeated words can
produce a longer edit script than the minimal one.
"""

from __future__ import annotations

from lexicompare.constants import (
    CONTEXT_ELLIPSIS,
    DEFAULT_CONTEXT_RADIUS,
    WORD_MODIFICATION_MAX_DISTANCE,
    DifferenceKind,
    Severity,
)
from lexicompare.engine.severity import classify_word_severity
from lexicompare.engine.similarity import edit_distance, require_text
from lexicompare.engine.value_objects import TextDifference


def context_window(
    text: str, position: int, radius: int = DEFAULT_CONTEXT_RADIUS
) -> str:
    """Up to ``radius`` chars either side of ``position``, marked with
    ``...`` where the window was cut."""
    start = max(0, position - radius)
    end = min(len(text), position + radius)
    snippet = text[start:end]
    if start > 0:
        snippet = CONTEXT_ELLIPSIS + snippet
    if end < len(text):
        snippet = snippet + CONTEXT_ELLIPSIS
    return snippet


def diff_words(
    original: str,
    modified: str,
    *,
    context_radius: int = DEFAULT_CONTEXT_RADIUS,
) -> list[TextDifference]:
    """Addition/Deletion/Modification operations turning ``original``
    into ``modified``, in emission order.

    ``position`` is a character offset into ``original`` that advances
    by word length + 1 as original words are consumed.
    """
    require_text(original, modified)
    if original == modified:
        return []

    old_words = original.split()
    new_words = modified.split()
    differences: list[TextDifference] = []
    i = j = 0
    position = 0

    def emit(
        kind: DifferenceKind,
        severity: Severity,
        *,
        before: str | None = None,
        after: str | None = None,
    ) -> None:
        # Context comes from whichever text holds the changed content.
        source = modified if kind == DifferenceKind.ADDITION else original
        changed = after if kind == DifferenceKind.ADDITION else before
        differences.append(
            TextDifference(
                kind=kind,
                before=before,
                after=after,
                position=position,
                length=len(changed or ""),
                context=context_window(source, position, context_radius),
                severity=severity,
            )
        )

    while i < len(old_words) or j < len(new_words):
        if i >= len(old_words):
            emit(
                DifferenceKind.ADDITION,
                Severity.LOW,
                after=" ".join(new_words[j:]),
            )
            break

        if j >= len(new_words):
            emit(
                DifferenceKind.DELETION,
                Severity.LOW,
                before=" ".join(old_words[i:]),
            )
            break

        old_word = old_words[i]
        new_word = new_words[j]

        if old_word == new_word:
            position += len(old_word) + 1
            i += 1
            j += 1
            continue

        if edit_distance(old_word, new_word) <= WORD_MODIFICATION_MAX_DISTANCE:
            emit(
                DifferenceKind.MODIFICATION,
                classify_word_severity(old_word, new_word),
                before=old_word,
                after=new_word,
            )
            position += len(old_word) + 1
            i += 1
            j += 1
        elif i + 1 < len(old_words) and old_words[i + 1] == new_word:
            emit(DifferenceKind.DELETION, Severity.MEDIUM, before=old_word)
            position += len(old_word) + 1
            i += 1
        elif j + 1 < len(new_words) and new_words[j + 1] == old_word:
            emit(DifferenceKind.ADDITION, Severity.MEDIUM, after=new_word)
            j += 1
        else:
            emit(
                DifferenceKind.MODIFICATION,
                Severity.HIGH,
                before=old_word,
                after=new_word,
            )
            position += len(old_word) + 1
            i += 1
            j += 1

    return differences
