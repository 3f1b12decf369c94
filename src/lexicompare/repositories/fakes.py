"""In-memory fake repositories for testing.

Dict-backed implementations of the repository protocols.
No SQLAlchemy session and no I/O, so unit tests run instantly.
"""

from __future__ import annotations

import uuid
from datetime import UTC, datetime

from lexicompare.engine.value_objects import ResolvedSource
from lexicompare.models.comparison import Comparison, ComparisonConflict
from lexicompare.models.contract import (
    ClauseChangeRecord,
    ContractComparison,
    ContractVersion,
)
from lexicompare.models.source import SourceText


class FakeSourceRepository:
    """Dict-backed SourceRepository for testing."""

    def __init__(self) -> None:
        self._store: dict[tuple[str, int], SourceText] = {}
        self.fetch_calls = 0

    async def get(
        self, source_type: str, source_id: int
    ) -> SourceText | None:
        return self._store.get((source_type, source_id))

    async def fetch_source(
        self, source_type: str, source_id: int
    ) -> ResolvedSource | None:
        self.fetch_calls += 1
        row = self._store.get((source_type, source_id))
        if row is None:
            return None
        return ResolvedSource(text=row.text, citation=row.effective_citation)

    async def upsert(self, source: SourceText) -> SourceText:
        if source.created_at is None:
            source.created_at = datetime.now(UTC)
        self._store[(source.source_type, source.source_id)] = source
        return source

    async def list_by_matter(self, matter_id: int) -> list[SourceText]:
        return [
            s for s in self._store.values() if s.matter_id == matter_id
        ]

    def add(
        self,
        source_type: str,
        source_id: int,
        text: str,
        *,
        matter_id: int | None = None,
        citation: str | None = None,
    ) -> SourceText:
        """Synchronous seeding helper for tests."""
        row = SourceText(
            source_type=source_type,
            source_id=source_id,
            matter_id=matter_id,
            text=text,
            citation=citation,
            created_at=datetime.now(UTC),
        )
        self._store[(source_type, source_id)] = row
        return row


class FakeComparisonRepository:
    """Dict-backed ComparisonRepository for testing."""

    def __init__(self) -> None:
        self._store: dict[str, Comparison] = {}

    async def create(self, comparison: Comparison) -> Comparison:
        if not comparison.id:
            comparison.id = str(uuid.uuid4())
        if comparison.created_at is None:
            comparison.created_at = datetime.now(UTC)
        self._store[comparison.id] = comparison
        return comparison

    async def get_by_id(self, comparison_id: str) -> Comparison | None:
        return self._store.get(comparison_id)

    async def list_by_matter(self, matter_id: int) -> list[Comparison]:
        return sorted(
            (c for c in self._store.values() if c.matter_id == matter_id),
            key=lambda c: c.created_at,
            reverse=True,
        )

    async def get_conflict(
        self, comparison_id: str, ordinal: int
    ) -> ComparisonConflict | None:
        comparison = self._store.get(comparison_id)
        if comparison is None:
            return None
        for conflict in comparison.conflicts:
            if conflict.ordinal == ordinal:
                return conflict
        return None

    async def try_resolve_conflict(
        self,
        comparison_id: str,
        ordinal: int,
        notes: str,
        actor_id: int,
        resolved_at: datetime,
    ) -> bool:
        """CAS: resolve only if currently unresolved."""
        conflict = await self.get_conflict(comparison_id, ordinal)
        if conflict is None or conflict.resolved:
            return False
        conflict.resolved = True
        conflict.resolution_notes = notes
        conflict.resolved_by = actor_id
        conflict.resolved_at = resolved_at
        return True


class FakeContractRepository:
    """Dict-backed ContractRepository for testing."""

    def __init__(self) -> None:
        self._versions: dict[str, ContractVersion] = {}
        self._comparisons: dict[str, ContractComparison] = {}

    async def next_version_number(self, document_id: str) -> int:
        numbers = [
            v.version_number
            for v in self._versions.values()
            if v.document_id == document_id
        ]
        return max(numbers, default=0) + 1

    async def create_version(
        self, version: ContractVersion
    ) -> ContractVersion:
        for existing in self._versions.values():
            if existing.document_id == version.document_id:
                existing.is_current = False
        if not version.id:
            version.id = str(uuid.uuid4())
        if version.created_at is None:
            version.created_at = datetime.now(UTC)
        version.is_current = True
        self._versions[version.id] = version
        return version

    async def get_version(
        self, version_id: str
    ) -> ContractVersion | None:
        return self._versions.get(version_id)

    async def list_versions(
        self, document_id: str
    ) -> list[ContractVersion]:
        return sorted(
            (
                v
                for v in self._versions.values()
                if v.document_id == document_id
            ),
            key=lambda v: v.version_number,
            reverse=True,
        )

    async def create_comparison(
        self, comparison: ContractComparison
    ) -> ContractComparison:
        if not comparison.id:
            comparison.id = str(uuid.uuid4())
        if comparison.created_at is None:
            comparison.created_at = datetime.now(UTC)
        self._comparisons[comparison.id] = comparison
        return comparison

    async def get_comparison(
        self, comparison_id: str
    ) -> ContractComparison | None:
        return self._comparisons.get(comparison_id)

    async def list_comparisons(
        self, document_id: str
    ) -> list[ContractComparison]:
        return sorted(
            (
                c
                for c in self._comparisons.values()
                if c.document_id == document_id
            ),
            key=lambda c: c.created_at,
            reverse=True,
        )

    async def get_change(
        self, comparison_id: str, ordinal: int
    ) -> ClauseChangeRecord | None:
        comparison = self._comparisons.get(comparison_id)
        if comparison is None:
            return None
        for change in comparison.changes:
            if change.ordinal == ordinal:
                return change
        return None

    async def try_review_change(
        self,
        comparison_id: str,
        ordinal: int,
        expected: set[str],
        status: str,
        notes: str | None,
        reviewer_id: int,
        reviewed_at: datetime,
    ) -> bool:
        """CAS: set status only if current status is in expected set."""
        change = await self.get_change(comparison_id, ordinal)
        if change is None or change.status not in expected:
            return False
        change.status = status
        change.review_notes = notes
        change.reviewed_by = reviewer_id
        change.reviewed_at = reviewed_at
        return True


# ── Service fakes ─────────────────────────────────────


class FakeDataService:
    """Test double for DataService that always reports healthy."""

    async def check_connection(self) -> bool:
        return True

    def check_log_dir(self) -> bool:
        return True
