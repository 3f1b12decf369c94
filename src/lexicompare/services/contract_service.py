"""Contract version management and clause-level version comparison."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import UTC, datetime

from lexicompare.config import Settings
from lexicompare.constants import (
    REVIEWABLE_STATUSES,
    ChangeReviewStatus,
    ContractComparisonType,
)
from lexicompare.engine.clauses import diff_clause_sets
from lexicompare.engine.value_objects import Clause
from lexicompare.errors import (
    AlreadyReviewed,
    ChangeNotFound,
    ComparisonNotFound,
    VersionNotFound,
)
from lexicompare.models.contract import (
    ClauseChangeRecord,
    ContractComparison,
    ContractVersion,
    VersionClause,
)
from lexicompare.repositories.protocols import ContractRepository

logger = logging.getLogger(__name__)


class ContractService:
    def __init__(
        self,
        repo: ContractRepository,
        settings: Settings | None = None,
    ) -> None:
        self._repo = repo
        self._settings = settings or Settings()

    async def create_version(
        self,
        document_id: str,
        clauses: Sequence[Clause],
        created_by: int,
        label: str | None = None,
        change_summary: str | None = None,
    ) -> ContractVersion:
        """Store a new clause snapshot as the document's current version."""
        number = await self._repo.next_version_number(document_id)
        version = ContractVersion(
            document_id=document_id,
            version_number=number,
            version_label=label or f"Version {number}",
            change_summary=change_summary,
            created_by=created_by,
            clauses=[VersionClause.from_clause(c) for c in clauses],
        )
        version = await self._repo.create_version(version)
        logger.info(
            "event=version_created document_id=%s version=%d clauses=%d",
            document_id,
            number,
            len(clauses),
        )
        return version

    async def list_versions(self, document_id: str) -> list[ContractVersion]:
        return await self._repo.list_versions(document_id)

    async def get_version(self, version_id: str) -> ContractVersion:
        version = await self._repo.get_version(version_id)
        if version is None:
            raise VersionNotFound(version_id)
        return version

    async def compare_versions(
        self,
        document_id: str,
        version_a_id: str,
        version_b_id: str,
        created_by: int,
        comparison_type: ContractComparisonType = (
            ContractComparisonType.VERSION_TO_VERSION
        ),
    ) -> ContractComparison:
        """Diff two versions of one document and persist the changes.

        Every recorded change starts in the pending review state.
        """
        version_a = await self._version_of(document_id, version_a_id)
        version_b = await self._version_of(document_id, version_b_id)

        result = diff_clause_sets(
            version_a.to_clauses(),
            version_b.to_clauses(),
            context_radius=self._settings.context_radius,
        )
        comparison = ContractComparison(
            document_id=document_id,
            version_a_id=version_a.id,
            version_b_id=version_b.id,
            comparison_type=comparison_type.value,
            similarity_score=result.similarity_score,
            total_changes=result.total_changes,
            additions=result.additions,
            deletions=result.deletions,
            modifications=result.modifications,
            high_risk_changes=result.high_risk_changes,
            medium_risk_changes=result.medium_risk_changes,
            low_risk_changes=result.low_risk_changes,
            created_by=created_by,
            changes=[
                ClauseChangeRecord.from_change(n, change)
                for n, change in enumerate(result.changes)
            ],
        )
        comparison = await self._repo.create_comparison(comparison)
        logger.info(
            "event=versions_compared document_id=%s comparison_id=%s"
            " changes=%d high_risk=%d",
            document_id,
            comparison.id,
            result.total_changes,
            result.high_risk_changes,
        )
        return comparison

    async def get_comparison(self, comparison_id: str) -> ContractComparison:
        comparison = await self._repo.get_comparison(comparison_id)
        if comparison is None:
            raise ComparisonNotFound(comparison_id)
        return comparison

    async def list_comparisons(
        self, document_id: str
    ) -> list[ContractComparison]:
        return await self._repo.list_comparisons(document_id)

    async def review_change(
        self,
        comparison_id: str,
        ordinal: int,
        status: ChangeReviewStatus,
        reviewer_id: int,
        notes: str | None = None,
    ) -> ClauseChangeRecord:
        """Record a review decision on one clause change.

        Allowed only while the change is pending or flagged for review;
        a change with a final decision raises AlreadyReviewed.
        """
        await self.get_comparison(comparison_id)
        change = await self._repo.get_change(comparison_id, ordinal)
        if change is None:
            raise ChangeNotFound(comparison_id, ordinal)

        won = await self._repo.try_review_change(
            comparison_id,
            ordinal,
            {s.value for s in REVIEWABLE_STATUSES},
            status.value,
            notes,
            reviewer_id,
            datetime.now(UTC),
        )
        if not won:
            raise AlreadyReviewed(
                f"Change {ordinal} already reviewed as {change.status}"
            )
        logger.info(
            "event=change_reviewed comparison_id=%s ordinal=%d status=%s",
            comparison_id,
            ordinal,
            status.value,
        )
        return change

    async def _version_of(
        self, document_id: str, version_id: str
    ) -> ContractVersion:
        version = await self._repo.get_version(version_id)
        if version is None or version.document_id != document_id:
            raise VersionNotFound(version_id)
        return version
