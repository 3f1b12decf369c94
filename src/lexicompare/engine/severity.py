"""Severity tiers for word edits and clause-level changes."""

from __future__ import annotations

from lexicompare.constants import (
    CLAUSE_MAJOR_CHANGE_SIMILARITY,
    CRITICAL_CLAUSE_CATEGORIES,
    HIGH_RISK_CLAUSE_CATEGORIES,
    NEGATION_WORDS,
    PURE_NUMBER_PATTERN,
    TYPO_MAX_DISTANCE,
    ClauseChangeKind,
    Severity,
)
from lexicompare.engine.similarity import edit_distance


def is_negation_word(word: str) -> bool:
    return word.lower() in NEGATION_WORDS


def classify_word_severity(word_a: str, word_b: str) -> Severity:
    """Severity of replacing ``word_a`` with ``word_b``.

    A negation on either side flips meaning (critical); a changed
    number is high; a near-typo (≤ 2 edits ignoring case) is low.
    """
    if is_negation_word(word_a) or is_negation_word(word_b):
        return Severity.CRITICAL
    if (
        PURE_NUMBER_PATTERN.match(word_a)
        and PURE_NUMBER_PATTERN.match(word_b)
        and word_a != word_b
    ):
        return Severity.HIGH
    if edit_distance(word_a.lower(), word_b.lower()) <= TYPO_MAX_DISTANCE:
        return Severity.LOW
    return Severity.MEDIUM


def _normalize(label: str) -> str:
    return label.lower().replace("-", " ").replace("_", " ").strip()


def category_tier(category: str, section_name: str = "") -> Severity | None:
    """Risk tier of a clause category, or None for unlisted categories.

    Matches the normalized category, and falls back to a substring
    match on the section heading.
    """
    labels = [_normalize(category), _normalize(section_name)]
    for tier, names in (
        (Severity.CRITICAL, CRITICAL_CLAUSE_CATEGORIES),
        (Severity.HIGH, HIGH_RISK_CLAUSE_CATEGORIES),
    ):
        if any(name in label for name in names for label in labels if label):
            return tier
    return None


def clause_risk(
    category: str,
    change_kind: ClauseChangeKind,
    similarity: int | None = None,
    section_name: str = "",
) -> Severity:
    """Risk level of a clause change weighted by its category."""
    tier = category_tier(category, section_name)

    if change_kind == ClauseChangeKind.REMOVED:
        return tier or Severity.LOW

    if change_kind == ClauseChangeKind.MODIFIED:
        if similarity is None or similarity >= CLAUSE_MAJOR_CHANGE_SIMILARITY:
            return Severity.LOW
        return tier or Severity.MEDIUM

    # Added clauses rank one tier below removals.
    if tier == Severity.CRITICAL:
        return Severity.HIGH
    if tier == Severity.HIGH:
        return Severity.MEDIUM
    return Severity.LOW
