"""Lexical comparison and conflict-detection engine.

Pure, synchronous functions over explicit inputs; no I/O, no shared state.
"""

from lexicompare.engine.clauses import diff_clause_sets
from lexicompare.engine.comparison import build_comparison
from lexicompare.engine.conflicts import detect_conflicts, split_sentences
from lexicompare.engine.differ import diff_words
from lexicompare.engine.severity import classify_word_severity, clause_risk
from lexicompare.engine.similarity import edit_distance, similarity
from lexicompare.engine.value_objects import (
    Clause,
    ClauseChange,
    ClauseComparison,
    ComparisonResult,
    DetectedConflict,
    ResolvedSource,
    SourceRef,
    TextDifference,
)

__all__ = [
    "Clause",
    "ClauseChange",
    "ClauseComparison",
    "ComparisonResult",
    "DetectedConflict",
    "ResolvedSource",
    "SourceRef",
    "TextDifference",
    "build_comparison",
    "classify_word_severity",
    "clause_risk",
    "detect_conflicts",
    "diff_clause_sets",
    "diff_words",
    "edit_distance",
    "similarity",
    "split_sentences",
]
