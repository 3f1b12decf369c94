"""Contract version and clause comparison ORM models."""

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
    ChangeReviewStatus,
    ClauseChangeKind,
    Severity,
)
from lexicompare.engine.differ import diff_words
from lexicompare.engine.value_objects import (
    Clause,
    ClauseChange,
    TextDifference,
)
from lexicompare.models.base import Base


class ContractVersion(Base):
    __tablename__ = "contract_versions"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    document_id: Mapped[str] = mapped_column(String(100), index=True)
    version_number: Mapped[int] = mapped_column(Integer)
    version_label: Mapped[str] = mapped_column(String(200))
    is_current: Mapped[bool] = mapped_column(Boolean, default=True)
    change_summary: Mapped[str | None] = mapped_column(
        Text, nullable=True
    )
    created_by: Mapped[int] = mapped_column(Integer)
    created_at: Mapped[datetime] = mapped_column(
        default=lambda: datetime.now(UTC),
        server_default=func.now(),
    )

    clauses: Mapped[list[VersionClause]] = relationship(
        back_populates="version",
        cascade="all, delete-orphan",
        order_by="VersionClause.clause_order",
        lazy="selectin",
    )

    __table_args__ = (
        UniqueConstraint(
            "document_id", "version_number", name="uq_document_version"
        ),
    )

    def to_clauses(self) -> list[Clause]:
        return [c.to_clause() for c in self.clauses]

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "document_id": self.document_id,
            "version_number": self.version_number,
            "version_label": self.version_label,
            "is_current": self.is_current,
            "change_summary": self.change_summary,
            "total_clauses": len(self.clauses),
            "clauses": [c.to_clause().to_dict() for c in self.clauses],
            "created_by": self.created_by,
            "created_at": self.created_at.isoformat(),
        }


class VersionClause(Base):
    __tablename__ = "version_clauses"

    pk: Mapped[int] = mapped_column(Integer, primary_key=True)
    version_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("contract_versions.id", ondelete="CASCADE")
    )
    clause_id: Mapped[str] = mapped_column(String(100))
    section_name: Mapped[str] = mapped_column(String(300), default="")
    category: Mapped[str] = mapped_column(String(100), default="")
    text: Mapped[str] = mapped_column(Text)
    clause_order: Mapped[int] = mapped_column(Integer, default=0)

    version: Mapped[ContractVersion] = relationship(
        back_populates="clauses"
    )

    __table_args__ = (
        UniqueConstraint(
            "version_id", "clause_id", name="uq_version_clause"
        ),
    )

    @classmethod
    def from_clause(cls, clause: Clause) -> VersionClause:
        return cls(
            clause_id=clause.id,
            section_name=clause.section_name,
            category=clause.category,
            text=clause.text,
            clause_order=clause.order,
        )

    def to_clause(self) -> Clause:
        return Clause(
            id=self.clause_id,
            section_name=self.section_name,
            category=self.category,
            text=self.text,
            order=self.clause_order,
        )


class ContractComparison(Base):
    __tablename__ = "contract_comparisons"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    document_id: Mapped[str] = mapped_column(String(100), index=True)
    version_a_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("contract_versions.id", ondelete="CASCADE")
    )
    version_b_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("contract_versions.id", ondelete="CASCADE")
    )
    comparison_type: Mapped[str] = mapped_column(String(50))
    similarity_score: Mapped[int] = mapped_column(Integer)
    total_changes: Mapped[int] = mapped_column(Integer, default=0)
    additions: Mapped[int] = mapped_column(Integer, default=0)
    deletions: Mapped[int] = mapped_column(Integer, default=0)
    modifications: Mapped[int] = mapped_column(Integer, default=0)
    high_risk_changes: Mapped[int] = mapped_column(Integer, default=0)
    medium_risk_changes: Mapped[int] = mapped_column(Integer, default=0)
    low_risk_changes: Mapped[int] = mapped_column(Integer, default=0)
    created_by: Mapped[int] = mapped_column(Integer)
    created_at: Mapped[datetime] = mapped_column(
        default=lambda: datetime.now(UTC),
        server_default=func.now(),
    )

    changes: Mapped[list[ClauseChangeRecord]] = relationship(
        back_populates="comparison",
        cascade="all, delete-orphan",
        order_by="ClauseChangeRecord.ordinal",
        lazy="selectin",
    )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "document_id": self.document_id,
            "version_a_id": self.version_a_id,
            "version_b_id": self.version_b_id,
            "comparison_type": self.comparison_type,
            "similarity_score": self.similarity_score,
            "total_changes": self.total_changes,
            "additions": self.additions,
            "deletions": self.deletions,
            "modifications": self.modifications,
            "high_risk_changes": self.high_risk_changes,
            "medium_risk_changes": self.medium_risk_changes,
            "low_risk_changes": self.low_risk_changes,
            "changes": [c.to_dict() for c in self.changes],
            "created_by": self.created_by,
            "created_at": self.created_at.isoformat(),
        }


class ClauseChangeRecord(Base):
    __tablename__ = "clause_changes"

    pk: Mapped[int] = mapped_column(Integer, primary_key=True)
    comparison_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("contract_comparisons.id", ondelete="CASCADE"),
    )
    ordinal: Mapped[int] = mapped_column(Integer)
    change_kind: Mapped[str] = mapped_column(String(20))
    clause_id: Mapped[str] = mapped_column(String(100))
    section_name: Mapped[str] = mapped_column(String(300), default="")
    category: Mapped[str] = mapped_column(String(100), default="")
    clause_order: Mapped[int] = mapped_column(Integer, default=0)
    old_text: Mapped[str | None] = mapped_column(Text, nullable=True)
    new_text: Mapped[str | None] = mapped_column(Text, nullable=True)
    similarity: Mapped[int | None] = mapped_column(nullable=True)
    risk_level: Mapped[str] = mapped_column(String(20))
    risk_reason: Mapped[str] = mapped_column(Text)
    status: Mapped[str] = mapped_column(
        String(30), default=ChangeReviewStatus.PENDING
    )
    review_notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    reviewed_by: Mapped[int | None] = mapped_column(nullable=True)
    reviewed_at: Mapped[datetime | None] = mapped_column(nullable=True)

    comparison: Mapped[ContractComparison] = relationship(
        back_populates="changes"
    )

    __table_args__ = (
        UniqueConstraint(
            "comparison_id", "ordinal", name="uq_clause_change_ordinal"
        ),
    )

    @classmethod
    def from_change(
        cls, ordinal: int, change: ClauseChange
    ) -> ClauseChangeRecord:
        return cls(
            ordinal=ordinal,
            change_kind=change.kind.value,
            clause_id=change.clause_id,
            section_name=change.section_name,
            category=change.category,
            clause_order=change.order,
            old_text=change.old_text,
            new_text=change.new_text,
            similarity=change.similarity,
            risk_level=change.risk_level.value,
            risk_reason=change.risk_reason,
            status=ChangeReviewStatus.PENDING,
        )

    def to_change(self) -> ClauseChange:
        """Rebuild the domain change; the word diff is recomputed."""
        diff: tuple[TextDifference, ...] = ()
        if self.old_text is not None and self.new_text is not None:
            diff = tuple(diff_words(self.old_text, self.new_text))
        return ClauseChange(
            kind=ClauseChangeKind(self.change_kind),
            clause_id=self.clause_id,
            section_name=self.section_name,
            category=self.category,
            order=self.clause_order,
            old_text=self.old_text,
            new_text=self.new_text,
            similarity=self.similarity,
            diff=diff,
            risk_level=Severity(self.risk_level),
            risk_reason=self.risk_reason,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "ordinal": self.ordinal,
            **self.to_change().to_dict(),
            "status": self.status,
            "review_notes": self.review_notes,
            "reviewed_by": self.reviewed_by,
            "reviewed_at": (
                self.reviewed_at.isoformat() if self.reviewed_at else None
            ),
        }
