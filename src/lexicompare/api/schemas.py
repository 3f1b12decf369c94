"""Request/response schemas for the HTTP API."""

from typing import Any

from pydantic import BaseModel, Field

from lexicompare.constants import (
    ChangeReviewStatus,
    ComparisonKind,
    ContractComparisonType,
    Severity,
    SourceType,
)


class APIResponse(BaseModel):
    """Standard response envelope for all API endpoints."""

    success: bool
    data: Any | None = None
    error: str | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)


class SourceUpsert(BaseModel):
    """Request body for POST /api/sources."""

    source_type: SourceType
    source_id: int = Field(ge=0)
    text: str
    matter_id: int | None = None
    citation: str | None = Field(default=None, max_length=300)
    page_number: int | None = Field(default=None, ge=0)
    line_start: int | None = Field(default=None, ge=0)
    event_date: str | None = Field(default=None, max_length=40)


class TextCompareRequest(BaseModel):
    """Request body for POST /api/compare/text (ad hoc, not persisted)."""

    text_a: str
    text_b: str
    matter_id: int = 0
    comparison_kind: ComparisonKind = ComparisonKind.DOCUMENT_VERSION
    detect_conflicts: bool = False
    min_severity: Severity | None = None


class ComparisonCreate(BaseModel):
    """Request body for POST /api/comparisons."""

    matter_id: int
    source_a_type: str = Field(min_length=1, max_length=50)
    source_a_id: int
    source_b_type: str = Field(min_length=1, max_length=50)
    source_b_id: int
    comparison_kind: ComparisonKind = ComparisonKind.DOCUMENT_VERSION
    detect_conflicts: bool = False
    min_severity: Severity | None = None
    save: bool = True
    created_by: int = 0


class ConflictResolve(BaseModel):
    """Request body for POST /api/comparisons/{id}/conflicts/{index}/resolve."""

    notes: str = Field(min_length=1, max_length=10_000)
    actor_id: int


class ClauseIn(BaseModel):
    """One clause in a contract version snapshot."""

    id: str = Field(min_length=1, max_length=100)
    section_name: str = ""
    category: str = ""
    text: str
    order: int = 0


class VersionCreate(BaseModel):
    """Request body for POST /api/contracts/{document_id}/versions."""

    clauses: list[ClauseIn]
    created_by: int
    version_label: str | None = Field(default=None, max_length=200)
    change_summary: str | None = None


class ContractCompareRequest(BaseModel):
    """Request body for POST /api/contracts/{document_id}/comparisons."""

    version_a_id: str
    version_b_id: str
    created_by: int
    comparison_type: ContractComparisonType = (
        ContractComparisonType.VERSION_TO_VERSION
    )


class ChangeReview(BaseModel):
    """Request body for POST .../changes/{ordinal}/review."""

    status: ChangeReviewStatus
    reviewer_id: int
    notes: str | None = None
