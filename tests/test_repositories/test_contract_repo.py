"""Tests for SqlContractRepository versions, comparisons and reviews."""

from datetime import UTC, datetime

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from lexicompare.constants import ChangeReviewStatus
from lexicompare.engine.clauses import diff_clause_sets
from lexicompare.engine.value_objects import Clause
from lexicompare.models.contract import (
    ClauseChangeRecord,
    ContractComparison,
    ContractVersion,
    VersionClause,
)
from lexicompare.repositories.contract_repo import SqlContractRepository

CLAUSE = Clause(
    id="c1",
    section_name="Indemnity",
    category="indemnification",
    text="Supplier shall indemnify Buyer.",
)


@pytest.fixture
def repo(session: AsyncSession) -> SqlContractRepository:
    return SqlContractRepository(session)


def _version(document_id: str, number: int) -> ContractVersion:
    return ContractVersion(
        document_id=document_id,
        version_number=number,
        version_label=f"Version {number}",
        created_by=1,
        clauses=[VersionClause.from_clause(CLAUSE)],
    )


async def test_version_numbers_increment(
    repo: SqlContractRepository, session: AsyncSession,
) -> None:
    assert await repo.next_version_number("doc-1") == 1
    await repo.create_version(_version("doc-1", 1))
    await session.commit()
    assert await repo.next_version_number("doc-1") == 2
    assert await repo.next_version_number("doc-2") == 1


async def test_only_latest_version_is_current(
    repo: SqlContractRepository, session: AsyncSession,
) -> None:
    v1 = await repo.create_version(_version("doc-1", 1))
    v2 = await repo.create_version(_version("doc-1", 2))
    await session.commit()

    versions = await repo.list_versions("doc-1")
    assert [v.version_number for v in versions] == [2, 1]
    current = {v.id: v.is_current for v in versions}
    assert current == {v2.id: True, v1.id: False}


async def test_version_clauses_roundtrip(
    repo: SqlContractRepository, session: AsyncSession,
) -> None:
    created = await repo.create_version(_version("doc-1", 1))
    await session.commit()

    fetched = await repo.get_version(created.id)
    assert fetched is not None
    assert fetched.to_clauses() == [CLAUSE]


async def test_review_change_cas(
    repo: SqlContractRepository, session: AsyncSession,
) -> None:
    v1 = await repo.create_version(_version("doc-1", 1))
    v2 = await repo.create_version(
        ContractVersion(
            document_id="doc-1",
            version_number=2,
            version_label="Version 2",
            created_by=1,
            clauses=[],
        )
    )
    result = diff_clause_sets(v1.to_clauses(), v2.to_clauses())
    comparison = await repo.create_comparison(
        ContractComparison(
            document_id="doc-1",
            version_a_id=v1.id,
            version_b_id=v2.id,
            comparison_type="version_to_version",
            similarity_score=result.similarity_score,
            total_changes=result.total_changes,
            deletions=result.deletions,
            high_risk_changes=result.high_risk_changes,
            created_by=1,
            changes=[
                ClauseChangeRecord.from_change(n, c)
                for n, c in enumerate(result.changes)
            ],
        )
    )
    await session.commit()

    reviewable = {
        ChangeReviewStatus.PENDING.value,
        ChangeReviewStatus.REQUIRES_REVIEW.value,
    }
    now = datetime.now(UTC)
    first = await repo.try_review_change(
        comparison.id, 0, reviewable, "accepted", "fine", 5, now
    )
    second = await repo.try_review_change(
        comparison.id, 0, reviewable, "rejected", None, 6, now
    )
    await session.commit()

    assert first is True
    assert second is False
    change = await repo.get_change(comparison.id, 0)
    assert change is not None
    assert change.status == "accepted"
    assert change.reviewed_by == 5

    listed = await repo.list_comparisons("doc-1")
    assert [c.id for c in listed] == [comparison.id]
