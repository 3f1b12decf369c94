"""Shared constants: single source of truth for cross-module values.

All magic strings and numbers that appear in 2+ files belong here.
StrEnum members are str-compatible, so downstream code (JSON, SQL,
API payloads) works unchanged.
"""

from __future__ import annotations

import re
from enum import StrEnum

# ── String Enums ─────────────────────────────────────────


class Severity(StrEnum):
    """Severity tiers for differences, conflicts and clause risk."""

    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    INFO = "info"


_SEVERITY_ORDER: dict[str, int] = {
    Severity.CRITICAL: 4,
    Severity.HIGH: 3,
    Severity.MEDIUM: 2,
    Severity.LOW: 1,
    Severity.INFO: 0,
}


def severity_rank(severity: str) -> int:
    """Numeric rank of a severity tier (critical is highest)."""
    return _SEVERITY_ORDER[Severity(severity)]


def at_least(severity: str, threshold: str) -> bool:
    """Return True if ``severity`` is as severe as ``threshold`` or more."""
    return severity_rank(severity) >= severity_rank(threshold)


class DifferenceKind(StrEnum):
    """Word-level edit operations emitted by the differ."""

    ADDITION = "addition"
    DELETION = "deletion"
    MODIFICATION = "modification"


class ConflictKind(StrEnum):
    """Sentence-level findings emitted by the conflict detector."""

    CONFLICT = "conflict"
    DISCREPANCY = "discrepancy"


class ClauseChangeKind(StrEnum):
    """Clause-level change types between two clause sets."""

    ADDED = "added"
    REMOVED = "removed"
    MODIFIED = "modified"


class ComparisonKind(StrEnum):
    """What pair of sources a comparison reconciles."""

    DOCUMENT_VERSION = "document_version"
    DEPOSITION_CONFLICT = "deposition_conflict"
    STATEMENT_CONFLICT = "statement_conflict"
    EXTRACTION_DIFF = "extraction_diff"
    EXHIBIT_CROSS_CHECK = "exhibit_cross_check"


class SourceType(StrEnum):
    """Kinds of resolvable text sources."""

    EXTRACTION = "extraction"
    DEPOSITION = "deposition"
    CITATION = "citation"
    TIMELINE_EVENT = "timeline_event"
    DOCUMENT = "document"


class ContractComparisonType(StrEnum):
    """Lifecycle stage pair for contract version comparisons."""

    VERSION_TO_VERSION = "version_to_version"
    TEMPLATE_TO_DRAFT = "template_to_draft"
    DRAFT_TO_EXECUTED = "draft_to_executed"


class ChangeReviewStatus(StrEnum):
    """Reviewer decision on a single clause change."""

    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    REQUIRES_REVIEW = "requires_review"


REVIEWABLE_STATUSES = frozenset({
    ChangeReviewStatus.PENDING,
    ChangeReviewStatus.REQUIRES_REVIEW,
})

# ── Similarity / Diff Thresholds ─────────────────────────

MAX_SIMILARITY = 100
WORD_MODIFICATION_MAX_DISTANCE = 3  # ≤ this: edit, > this: realign
TYPO_MAX_DISTANCE = 2  # ≤ this: low-severity typo
DEFAULT_CONTEXT_RADIUS = 50
CONTEXT_ELLIPSIS = "..."

# ── Conflict Detection ───────────────────────────────────

CONTRADICTION_MIN_SIMILARITY = 70  # strictly greater than
DISCREPANCY_MIN_SIMILARITY = 60  # strictly greater than

NEGATION_PATTERN = re.compile(
    r"\b(not|no|never|neither|wasn't|weren't|didn't|don't|doesn't"
    r"|isn't|aren't)\b",
    re.IGNORECASE,
)
SENTENCE_SPLIT_PATTERN = re.compile(r"[.!?]+")
NUMBER_PATTERN = re.compile(r"\d+")
PURE_NUMBER_PATTERN = re.compile(r"^\d+$")

# Single-word negations used by the word severity classifier.
NEGATION_WORDS = frozenset({
    "not", "no", "never", "neither", "none", "nothing",
    "wasn't", "weren't", "didn't", "don't", "doesn't",
    "isn't", "aren't",
})

CONTRADICTION_DESCRIPTION = (
    "Direct contradiction detected — one statement negates the other"
)
DISCREPANCY_DESCRIPTION = (
    "Numeric discrepancy detected — different numbers in similar contexts"
)

# ── Clause Risk Taxonomy ─────────────────────────────────

CRITICAL_CLAUSE_CATEGORIES = (
    "liability",
    "indemnification",
    "termination",
    "force majeure",
    "dispute resolution",
)
HIGH_RISK_CLAUSE_CATEGORIES = (
    "warranties",
    "representations",
    "ip ownership",
    "confidentiality",
    "payment terms",
)
CLAUSE_MAJOR_CHANGE_SIMILARITY = 50  # below this: major rewrite

# ── Auth Exempt Paths ────────────────────────────────────

AUTH_EXEMPT_PATHS = frozenset({
    "/api/health",
    "/api/docs",
    "/api/redoc",
    "/api/openapi.json",
})

AUTH_EXEMPT_PREFIXES = ("/api/health",)

# ── ID Generation ───────────────────────────────────────

ID_HEX_LENGTH = 12

# ── Misc ─────────────────────────────────────────────────

ERROR_TRUNCATION_CHARS = 200
SOURCE_RETRY_INITIAL_WAIT = 0.1
SOURCE_RETRY_MAX_WAIT = 2.0
