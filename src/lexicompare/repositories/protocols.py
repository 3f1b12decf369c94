"""Protocol-based repository interfaces.

SQL implementations satisfy these protocols structurally (no inheritance).
Test doubles can be plain classes or mocks matching the same signature.
"""

from datetime import datetime
from typing import Protocol

from lexicompare.engine.value_objects import ResolvedSource
from lexicompare.models.comparison import Comparison, ComparisonConflict
from lexicompare.models.contract import (
    ClauseChangeRecord,
    ContractComparison,
    ContractVersion,
)
from lexicompare.models.source import SourceText


class SourceResolver(Protocol):
    """Supplies the literal text behind a (type, id) source descriptor."""

    async def fetch_source(
        self, source_type: str, source_id: int
    ) -> ResolvedSource | None: ...


class SourceRepository(SourceResolver, Protocol):
    async def get(
        self, source_type: str, source_id: int
    ) -> SourceText | None: ...
    async def upsert(self, source: SourceText) -> SourceText: ...
    async def list_by_matter(self, matter_id: int) -> list[SourceText]: ...


class ComparisonRepository(Protocol):
    async def create(self, comparison: Comparison) -> Comparison: ...
    async def get_by_id(self, comparison_id: str) -> Comparison | None: ...
    async def list_by_matter(self, matter_id: int) -> list[Comparison]: ...
    async def get_conflict(
        self, comparison_id: str, ordinal: int
    ) -> ComparisonConflict | None: ...
    async def try_resolve_conflict(
        self,
        comparison_id: str,
        ordinal: int,
        notes: str,
        actor_id: int,
        resolved_at: datetime,
    ) -> bool: ...


class ContractRepository(Protocol):
    async def next_version_number(self, document_id: str) -> int: ...
    async def create_version(
        self, version: ContractVersion
    ) -> ContractVersion: ...
    async def get_version(
        self, version_id: str
    ) -> ContractVersion | None: ...
    async def list_versions(
        self, document_id: str
    ) -> list[ContractVersion]: ...
    async def create_comparison(
        self, comparison: ContractComparison
    ) -> ContractComparison: ...
    async def get_comparison(
        self, comparison_id: str
    ) -> ContractComparison | None: ...
    async def list_comparisons(
        self, document_id: str
    ) -> list[ContractComparison]: ...
    async def get_change(
        self, comparison_id: str, ordinal: int
    ) -> ClauseChangeRecord | None: ...
    async def try_review_change(
        self,
        comparison_id: str,
        ordinal: int,
        expected: set[str],
        status: str,
        notes: str | None,
        reviewer_id: int,
        reviewed_at: datetime,
    ) -> bool: ...
