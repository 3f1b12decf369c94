"""Frozen, identity-less domain types produced by the comparison engine.

These are the vocabulary of the system. Every entity is created in one
piece by a single comparison call; the only post-creation transition is
conflict resolution, which returns a new instance instead of mutating.

Each type serializes to a plain dict (``to_dict``) and back
(``from_dict``). Tagged unions use the ``kind`` key.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any

from lexicompare.constants import (
    ClauseChangeKind,
    ComparisonKind,
    ConflictKind,
    DifferenceKind,
    Severity,
)
from lexicompare.errors import AlreadyResolved


@dataclass(frozen=True)
class SourceRef:
    """Opaque source identifier plus the text snapshot that was compared."""

    type: str
    id: int
    text: str
    citation: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "id": self.id,
            "text": self.text,
            "citation": self.citation,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SourceRef:
        return cls(
            type=data["type"],
            id=int(data["id"]),
            text=data["text"],
            citation=data.get("citation"),
        )


@dataclass(frozen=True)
class ResolvedSource:
    """What the source resolution collaborator hands back."""

    text: str
    citation: str | None = None


@dataclass(frozen=True)
class TextDifference:
    """A single word-level edit between two texts."""

    kind: DifferenceKind
    position: int
    length: int
    context: str
    severity: Severity
    before: str | None = None
    after: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind.value,
            "before": self.before,
            "after": self.after,
            "position": self.position,
            "length": self.length,
            "context": self.context,
            "severity": self.severity.value,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TextDifference:
        return cls(
            kind=DifferenceKind(data["kind"]),
            before=data.get("before"),
            after=data.get("after"),
            position=int(data["position"]),
            length=int(data["length"]),
            context=data["context"],
            severity=Severity(data["severity"]),
        )


@dataclass(frozen=True)
class DetectedConflict:
    """A contradiction or discrepancy between two sentences."""

    kind: ConflictKind
    severity: Severity
    description: str
    source_a: SourceRef
    source_b: SourceRef
    confidence: int
    resolved: bool = False
    resolution_notes: str | None = None
    resolved_by: int | None = None
    resolved_at: datetime | None = None

    def resolve(
        self, notes: str, resolved_by: int, resolved_at: datetime
    ) -> DetectedConflict:
        """Return the resolved copy; a conflict resolves exactly once."""
        if self.resolved:
            raise AlreadyResolved("Conflict is already resolved")
        return replace(
            self,
            resolved=True,
            resolution_notes=notes,
            resolved_by=resolved_by,
            resolved_at=resolved_at,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind.value,
            "severity": self.severity.value,
            "description": self.description,
            "source_a": self.source_a.to_dict(),
            "source_b": self.source_b.to_dict(),
            "confidence": self.confidence,
            "resolved": self.resolved,
            "resolution_notes": self.resolution_notes,
            "resolved_by": self.resolved_by,
            "resolved_at": (
                self.resolved_at.isoformat()
                if self.resolved_at
                else None
            ),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> DetectedConflict:
        resolved_at = data.get("resolved_at")
        return cls(
            kind=ConflictKind(data["kind"]),
            severity=Severity(data["severity"]),
            description=data["description"],
            source_a=SourceRef.from_dict(data["source_a"]),
            source_b=SourceRef.from_dict(data["source_b"]),
            confidence=int(data["confidence"]),
            resolved=bool(data.get("resolved", False)),
            resolution_notes=data.get("resolution_notes"),
            resolved_by=data.get("resolved_by"),
            resolved_at=(
                datetime.fromisoformat(resolved_at)
                if resolved_at
                else None
            ),
        )


@dataclass(frozen=True)
class ComparisonResult:
    """Full report of one source-to-source comparison."""

    matter_id: int
    comparison_kind: ComparisonKind
    source_a: SourceRef
    source_b: SourceRef
    similarity_score: int
    differences: tuple[TextDifference, ...] = ()
    conflicts: tuple[DetectedConflict, ...] = ()
    critical_conflicts: int = 0
    high_conflicts: int = 0
    medium_conflicts: int = 0
    low_conflicts: int = 0

    @property
    def total_differences(self) -> int:
        return len(self.differences)

    def to_dict(self) -> dict[str, Any]:
        return {
            "matter_id": self.matter_id,
            "comparison_kind": self.comparison_kind.value,
            "source_a": self.source_a.to_dict(),
            "source_b": self.source_b.to_dict(),
            "differences": [d.to_dict() for d in self.differences],
            "conflicts": [c.to_dict() for c in self.conflicts],
            "similarity_score": self.similarity_score,
            "total_differences": self.total_differences,
            "critical_conflicts": self.critical_conflicts,
            "high_conflicts": self.high_conflicts,
            "medium_conflicts": self.medium_conflicts,
            "low_conflicts": self.low_conflicts,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ComparisonResult:
        return cls(
            matter_id=int(data["matter_id"]),
            comparison_kind=ComparisonKind(data["comparison_kind"]),
            source_a=SourceRef.from_dict(data["source_a"]),
            source_b=SourceRef.from_dict(data["source_b"]),
            similarity_score=int(data["similarity_score"]),
            differences=tuple(
                TextDifference.from_dict(d)
                for d in data.get("differences", [])
            ),
            conflicts=tuple(
                DetectedConflict.from_dict(c)
                for c in data.get("conflicts", [])
            ),
            critical_conflicts=int(data.get("critical_conflicts", 0)),
            high_conflicts=int(data.get("high_conflicts", 0)),
            medium_conflicts=int(data.get("medium_conflicts", 0)),
            low_conflicts=int(data.get("low_conflicts", 0)),
        )


@dataclass(frozen=True)
class Clause:
    """One clause of a contract version, keyed by its stable id."""

    id: str
    section_name: str
    category: str
    text: str
    order: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "section_name": self.section_name,
            "category": self.category,
            "text": self.text,
            "order": self.order,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Clause:
        return cls(
            id=str(data["id"]),
            section_name=data.get("section_name", ""),
            category=data.get("category", ""),
            text=data["text"],
            order=int(data.get("order", 0)),
        )


@dataclass(frozen=True)
class ClauseChange:
    """A clause added, removed or rewritten between two versions."""

    kind: ClauseChangeKind
    clause_id: str
    section_name: str
    category: str
    order: int
    risk_level: Severity
    risk_reason: str
    old_text: str | None = None
    new_text: str | None = None
    similarity: int | None = None
    diff: tuple[TextDifference, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind.value,
            "clause_id": self.clause_id,
            "section_name": self.section_name,
            "category": self.category,
            "order": self.order,
            "old_text": self.old_text,
            "new_text": self.new_text,
            "similarity": self.similarity,
            "diff": [d.to_dict() for d in self.diff],
            "risk_level": self.risk_level.value,
            "risk_reason": self.risk_reason,
        }


@dataclass(frozen=True)
class ClauseComparison:
    """Aggregate outcome of comparing two clause sets."""

    similarity_score: int
    changes: tuple[ClauseChange, ...] = field(default_factory=tuple)

    def _count(self, kind: ClauseChangeKind) -> int:
        return sum(1 for c in self.changes if c.kind == kind)

    @property
    def additions(self) -> int:
        return self._count(ClauseChangeKind.ADDED)

    @property
    def deletions(self) -> int:
        return self._count(ClauseChangeKind.REMOVED)

    @property
    def modifications(self) -> int:
        return self._count(ClauseChangeKind.MODIFIED)

    @property
    def total_changes(self) -> int:
        return len(self.changes)

    @property
    def high_risk_changes(self) -> int:
        return sum(
            1
            for c in self.changes
            if c.risk_level in (Severity.CRITICAL, Severity.HIGH)
        )

    @property
    def medium_risk_changes(self) -> int:
        return sum(
            1 for c in self.changes if c.risk_level == Severity.MEDIUM
        )

    @property
    def low_risk_changes(self) -> int:
        return sum(
            1
            for c in self.changes
            if c.risk_level in (Severity.LOW, Severity.INFO)
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "similarity_score": self.similarity_score,
            "total_changes": self.total_changes,
            "additions": self.additions,
            "deletions": self.deletions,
            "modifications": self.modifications,
            "high_risk_changes": self.high_risk_changes,
            "medium_risk_changes": self.medium_risk_changes,
            "low_risk_changes": self.low_risk_changes,
            "changes": [c.to_dict() for c in self.changes],
        }
