"""Pure assembly of a ComparisonResult from two resolved sources."""

from __future__ import annotations

from collections import Counter

from lexicompare.constants import (
    DEFAULT_CONTEXT_RADIUS,
    ComparisonKind,
    Severity,
    at_least,
)
from lexicompare.engine.conflicts import detect_conflicts
from lexicompare.engine.differ import diff_words
from lexicompare.engine.similarity import similarity
from lexicompare.engine.value_objects import ComparisonResult, SourceRef


def build_comparison(
    source_a: SourceRef,
    source_b: SourceRef,
    *,
    matter_id: int,
    comparison_kind: ComparisonKind = ComparisonKind.DOCUMENT_VERSION,
    detect: bool = False,
    min_severity: Severity | None = None,
    context_radius: int = DEFAULT_CONTEXT_RADIUS,
) -> ComparisonResult:
    """Similarity, word diff and (optionally) conflicts for two sources.

    Deterministic: the same snapshots always produce an equal result.
    ``min_severity`` drops conflicts below the threshold before they are
    counted.
    """
    score = similarity(source_a.text, source_b.text)
    differences = diff_words(
        source_a.text, source_b.text, context_radius=context_radius
    )

    conflicts = (
        detect_conflicts(source_a.text, source_b.text, source_a, source_b)
        if detect
        else []
    )
    if min_severity is not None:
        conflicts = [
            c for c in conflicts if at_least(c.severity, min_severity)
        ]

    # info-tier conflicts are not tallied in any counter.
    counts = Counter(c.severity for c in conflicts)
    return ComparisonResult(
        matter_id=matter_id,
        comparison_kind=comparison_kind,
        source_a=source_a,
        source_b=source_b,
        similarity_score=score,
        differences=tuple(differences),
        conflicts=tuple(conflicts),
        critical_conflicts=counts[Severity.CRITICAL],
        high_conflicts=counts[Severity.HIGH],
        medium_conflicts=counts[Severity.MEDIUM],
        low_conflicts=counts[Severity.LOW],
    )
