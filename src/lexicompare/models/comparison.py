"""Comparison ORM models: a saved ComparisonResult and its child rows."""

from __future__ import annotations

import uuid
from datetime import UTC, datetime
from typing import Any

from sqlalchemy import (
    Boolean,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from lexicompare.constants import (
    ComparisonKind,
    ConflictKind,
    DifferenceKind,
    Severity,
)
from lexicompare.engine.value_objects import (
    ComparisonResult,
    DetectedConflict,
    SourceRef,
    TextDifference,
)
from lexicompare.models.base import Base


class Comparison(Base):
    __tablename__ = "comparisons"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    matter_id: Mapped[int] = mapped_column(Integer, index=True)
    comparison_kind: Mapped[str] = mapped_column(String(50))
    source_a_type: Mapped[str] = mapped_column(String(50))
    source_a_id: Mapped[int] = mapped_column(Integer)
    source_a_text: Mapped[str] = mapped_column(Text)
    source_a_citation: Mapped[str | None] = mapped_column(
        String(300), nullable=True
    )
    source_b_type: Mapped[str] = mapped_column(String(50))
    source_b_id: Mapped[int] = mapped_column(Integer)
    source_b_text: Mapped[str] = mapped_column(Text)
    source_b_citation: Mapped[str | None] = mapped_column(
        String(300), nullable=True
    )
    similarity_score: Mapped[int] = mapped_column(Integer)
    total_differences: Mapped[int] = mapped_column(Integer, default=0)
    critical_conflicts: Mapped[int] = mapped_column(Integer, default=0)
    high_conflicts: Mapped[int] = mapped_column(Integer, default=0)
    medium_conflicts: Mapped[int] = mapped_column(Integer, default=0)
    low_conflicts: Mapped[int] = mapped_column(Integer, default=0)
    created_by: Mapped[int] = mapped_column(Integer)
    created_at: Mapped[datetime] = mapped_column(
        default=lambda: datetime.now(UTC),
        server_default=func.now(),
    )

    differences: Mapped[list[ComparisonDifference]] = relationship(
        back_populates="comparison",
        cascade="all, delete-orphan",
        order_by="ComparisonDifference.ordinal",
        lazy="selectin",
    )
    conflicts: Mapped[list[ComparisonConflict]] = relationship(
        back_populates="comparison",
        cascade="all, delete-orphan",
        order_by="ComparisonConflict.ordinal",
        lazy="selectin",
    )

    @classmethod
    def from_result(
        cls, result: ComparisonResult, created_by: int
    ) -> Comparison:
        return cls(
            id=str(uuid.uuid4()),
            matter_id=result.matter_id,
            comparison_kind=result.comparison_kind.value,
            source_a_type=result.source_a.type,
            source_a_id=result.source_a.id,
            source_a_text=result.source_a.text,
            source_a_citation=result.source_a.citation,
            source_b_type=result.source_b.type,
            source_b_id=result.source_b.id,
            source_b_text=result.source_b.text,
            source_b_citation=result.source_b.citation,
            similarity_score=result.similarity_score,
            total_differences=result.total_differences,
            critical_conflicts=result.critical_conflicts,
            high_conflicts=result.high_conflicts,
            medium_conflicts=result.medium_conflicts,
            low_conflicts=result.low_conflicts,
            created_by=created_by,
            created_at=datetime.now(UTC),
            differences=[
                ComparisonDifference.from_difference(n, d)
                for n, d in enumerate(result.differences)
            ],
            conflicts=[
                ComparisonConflict.from_conflict(n, c)
                for n, c in enumerate(result.conflicts)
            ],
        )

    def to_result(self) -> ComparisonResult:
        return ComparisonResult(
            matter_id=self.matter_id,
            comparison_kind=ComparisonKind(self.comparison_kind),
            source_a=SourceRef(
                type=self.source_a_type,
                id=self.source_a_id,
                text=self.source_a_text,
                citation=self.source_a_citation,
            ),
            source_b=SourceRef(
                type=self.source_b_type,
                id=self.source_b_id,
                text=self.source_b_text,
                citation=self.source_b_citation,
            ),
            similarity_score=self.similarity_score,
            differences=tuple(d.to_difference() for d in self.differences),
            conflicts=tuple(
                c.to_conflict(self) for c in self.conflicts
            ),
            critical_conflicts=self.critical_conflicts,
            high_conflicts=self.high_conflicts,
            medium_conflicts=self.medium_conflicts,
            low_conflicts=self.low_conflicts,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            **self.to_result().to_dict(),
            "created_by": self.created_by,
            "created_at": self.created_at.isoformat(),
        }


class ComparisonDifference(Base):
    __tablename__ = "comparison_differences"

    pk: Mapped[int] = mapped_column(Integer, primary_key=True)
    comparison_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("comparisons.id", ondelete="CASCADE")
    )
    ordinal: Mapped[int] = mapped_column(Integer)
    kind: Mapped[str] = mapped_column(String(20))
    before_text: Mapped[str | None] = mapped_column(Text, nullable=True)
    after_text: Mapped[str | None] = mapped_column(Text, nullable=True)
    position: Mapped[int] = mapped_column(Integer)
    length: Mapped[int] = mapped_column(Integer)
    context: Mapped[str] = mapped_column(Text, default="")
    severity: Mapped[str] = mapped_column(String(20))

    comparison: Mapped[Comparison] = relationship(
        back_populates="differences"
    )

    __table_args__ = (
        UniqueConstraint(
            "comparison_id", "ordinal", name="uq_difference_ordinal"
        ),
    )

    @classmethod
    def from_difference(
        cls, ordinal: int, diff: TextDifference
    ) -> ComparisonDifference:
        return cls(
            ordinal=ordinal,
            kind=diff.kind.value,
            before_text=diff.before,
            after_text=diff.after,
            position=diff.position,
            length=diff.length,
            context=diff.context,
            severity=diff.severity.value,
        )

    def to_difference(self) -> TextDifference:
        return TextDifference(
            kind=DifferenceKind(self.kind),
            before=self.before_text,
            after=self.after_text,
            position=self.position,
            length=self.length,
            context=self.context,
            severity=Severity(self.severity),
        )


class ComparisonConflict(Base):
    __tablename__ = "comparison_conflicts"

    pk: Mapped[int] = mapped_column(Integer, primary_key=True)
    comparison_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("comparisons.id", ondelete="CASCADE")
    )
    ordinal: Mapped[int] = mapped_column(Integer)
    kind: Mapped[str] = mapped_column(String(20))
    severity: Mapped[str] = mapped_column(String(20))
    description: Mapped[str] = mapped_column(Text)
    sentence_a: Mapped[str] = mapped_column(Text)
    sentence_b: Mapped[str] = mapped_column(Text)
    confidence: Mapped[int] = mapped_column(Integer)
    resolved: Mapped[bool] = mapped_column(Boolean, default=False)
    resolution_notes: Mapped[str | None] = mapped_column(
        Text, nullable=True
    )
    resolved_by: Mapped[int | None] = mapped_column(nullable=True)
    resolved_at: Mapped[datetime | None] = mapped_column(nullable=True)

    comparison: Mapped[Comparison] = relationship(
        back_populates="conflicts"
    )

    __table_args__ = (
        UniqueConstraint(
            "comparison_id", "ordinal", name="uq_conflict_ordinal"
        ),
    )

    @classmethod
    def from_conflict(
        cls, ordinal: int, conflict: DetectedConflict
    ) -> ComparisonConflict:
        return cls(
            ordinal=ordinal,
            kind=conflict.kind.value,
            severity=conflict.severity.value,
            description=conflict.description,
            sentence_a=conflict.source_a.text,
            sentence_b=conflict.source_b.text,
            confidence=conflict.confidence,
            resolved=conflict.resolved,
            resolution_notes=conflict.resolution_notes,
            resolved_by=conflict.resolved_by,
            resolved_at=conflict.resolved_at,
        )

    def to_conflict(self, parent: Comparison) -> DetectedConflict:
        return DetectedConflict(
            kind=ConflictKind(self.kind),
            severity=Severity(self.severity),
            description=self.description,
            source_a=SourceRef(
                type=parent.source_a_type,
                id=parent.source_a_id,
                text=self.sentence_a,
                citation=parent.source_a_citation,
            ),
            source_b=SourceRef(
                type=parent.source_b_type,
                id=parent.source_b_id,
                text=self.sentence_b,
                citation=parent.source_b_citation,
            ),
            confidence=self.confidence,
            resolved=self.resolved,
            resolution_notes=self.resolution_notes,
            resolved_by=self.resolved_by,
            resolved_at=self.resolved_at,
        )
