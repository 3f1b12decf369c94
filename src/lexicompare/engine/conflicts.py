"""Sentence-level contradiction and numeric discrepancy detection.

Every sentence of one text is compared against every sentence of the
other, so cost grows with the product of the sentence counts. Callers
bound the input size before getting here.
"""

from __future__ import annotations

from lexicompare.constants import (
    CONTRADICTION_DESCRIPTION,
    CONTRADICTION_MIN_SIMILARITY,
    DISCREPANCY_DESCRIPTION,
    DISCREPANCY_MIN_SIMILARITY,
    NEGATION_PATTERN,
    NUMBER_PATTERN,
    SENTENCE_SPLIT_PATTERN,
    ConflictKind,
    Severity,
)
from lexicompare.engine.similarity import require_text, similarity
from lexicompare.engine.value_objects import DetectedConflict, SourceRef


def split_sentences(text: str) -> list[str]:
    """Split on runs of ``.``, ``!`` and ``?``; trimmed, empties dropped."""
    return [
        s.strip()
        for s in SENTENCE_SPLIT_PATTERN.split(text)
        if s.strip()
    ]


def has_negation(sentence: str) -> bool:
    return NEGATION_PATTERN.search(sentence) is not None


def strip_negation(sentence: str) -> str:
    """Lower-cased sentence with negation tokens removed."""
    return NEGATION_PATTERN.sub("", sentence.lower()).strip()


def first_number(sentence: str) -> str | None:
    match = NUMBER_PATTERN.search(sentence)
    return match.group() if match else None


def _sentence_ref(ref: SourceRef, sentence: str) -> SourceRef:
    return SourceRef(
        type=ref.type, id=ref.id, text=sentence, citation=ref.citation
    )


def compare_sentences(
    sentence_a: str,
    sentence_b: str,
    ref_a: SourceRef,
    ref_b: SourceRef,
) -> list[DetectedConflict]:
    """Conflicts raised by one sentence pair: none, one or both kinds."""
    found: list[DetectedConflict] = []
    negated_a = has_negation(sentence_a)
    negated_b = has_negation(sentence_b)
    number_a = first_number(sentence_a)
    number_b = first_number(sentence_b)

    contradiction_possible = negated_a != negated_b
    discrepancy_possible = (
        number_a is not None
        and number_b is not None
        and number_a != number_b
    )
    if not (contradiction_possible or discrepancy_possible):
        return found

    score = similarity(strip_negation(sentence_a), strip_negation(sentence_b))

    if contradiction_possible and score > CONTRADICTION_MIN_SIMILARITY:
        found.append(
            DetectedConflict(
                kind=ConflictKind.CONFLICT,
                severity=Severity.CRITICAL,
                description=CONTRADICTION_DESCRIPTION,
                source_a=_sentence_ref(ref_a, sentence_a),
                source_b=_sentence_ref(ref_b, sentence_b),
                confidence=score,
            )
        )
    if discrepancy_possible and score > DISCREPANCY_MIN_SIMILARITY:
        found.append(
            DetectedConflict(
                kind=ConflictKind.DISCREPANCY,
                severity=Severity.HIGH,
                description=DISCREPANCY_DESCRIPTION,
                source_a=_sentence_ref(ref_a, sentence_a),
                source_b=_sentence_ref(ref_b, sentence_b),
                confidence=score,
            )
        )
    return found


def detect_conflicts(
    text_a: str,
    text_b: str,
    ref_a: SourceRef,
    ref_b: SourceRef,
) -> list[DetectedConflict]:
    """All contradictions and numeric discrepancies between two texts.

    Pairs are visited A-major, B-minor; each conflict carries the
    trimmed sentences that triggered it.
    """
    require_text(text_a, text_b)
    conflicts: list[DetectedConflict] = []
    sentences_b = split_sentences(text_b)
    for sentence_a in split_sentences(text_a):
        for sentence_b in sentences_b:
            conflicts.extend(
                compare_sentences(sentence_a, sentence_b, ref_a, ref_b)
            )
    return conflicts
