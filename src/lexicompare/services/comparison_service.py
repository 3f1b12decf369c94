"""Source comparison orchestration: resolve, compare, persist, resolve conflicts."""

from __future__ import annotations

import asyncio
import logging
import time
import uuid
from dataclasses import dataclass
from datetime import UTC, datetime
from functools import partial

from lexicompare.config import Settings
from lexicompare.constants import ComparisonKind, Severity
from lexicompare.engine.comparison import build_comparison
from lexicompare.engine.value_objects import ComparisonResult, SourceRef
from lexicompare.errors import (
    AlreadyResolved,
    ComparisonNotFound,
    ComparisonTimeout,
    ConflictNotFound,
    SourceNotFound,
)
from lexicompare.logger import ComparisonLogger
from lexicompare.models.comparison import Comparison
from lexicompare.repositories.protocols import (
    ComparisonRepository,
    SourceResolver,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ComparisonOptions:
    """Input contract for comparing two stored sources."""

    matter_id: int
    source_a_type: str
    source_a_id: int
    source_b_type: str
    source_b_id: int
    comparison_kind: ComparisonKind = ComparisonKind.DOCUMENT_VERSION
    detect_conflicts: bool = False
    min_severity: Severity | None = None


class ComparisonService:
    def __init__(
        self,
        sources: SourceResolver | None = None,
        repo: ComparisonRepository | None = None,
        settings: Settings | None = None,
        audit: ComparisonLogger | None = None,
    ) -> None:
        self._sources = sources
        self._repo = repo
        self._settings = settings or Settings()
        self._audit = audit

    async def compare(self, options: ComparisonOptions) -> ComparisonResult:
        """Resolve both sources and compare their current text.

        Raises SourceNotFound when either descriptor resolves to nothing.
        """
        ref_a = await self._resolve(options.source_a_type, options.source_a_id)
        ref_b = await self._resolve(options.source_b_type, options.source_b_id)
        return await self.compare_refs(
            ref_a,
            ref_b,
            matter_id=options.matter_id,
            comparison_kind=options.comparison_kind,
            detect=options.detect_conflicts,
            min_severity=options.min_severity,
        )

    async def compare_refs(
        self,
        ref_a: SourceRef,
        ref_b: SourceRef,
        *,
        matter_id: int,
        comparison_kind: ComparisonKind = ComparisonKind.DOCUMENT_VERSION,
        detect: bool = False,
        min_severity: Severity | None = None,
    ) -> ComparisonResult:
        """Compare two already-resolved snapshots off the event loop.

        The timeout is a response deadline only. A worker thread that
        overruns it is abandoned, not cancelled, and keeps its executor
        slot until the computation returns.
        """
        request_id = uuid.uuid4().hex[:12]
        ref_a = self._cap(ref_a)
        ref_b = self._cap(ref_b)

        job = partial(
            build_comparison,
            ref_a,
            ref_b,
            matter_id=matter_id,
            comparison_kind=comparison_kind,
            detect=detect,
            min_severity=min_severity,
            context_radius=self._settings.context_radius,
        )
        timeout = self._settings.comparison_timeout_seconds or None

        start = time.monotonic()
        try:
            result = await asyncio.wait_for(
                asyncio.to_thread(job), timeout=timeout
            )
        except TimeoutError as exc:
            logger.warning(
                "event=comparison_timeout request_id=%s timeout=%s",
                request_id,
                timeout,
            )
            if self._audit:
                self._audit.log_error(
                    request_id, "comparison", f"timed out after {timeout}s"
                )
            raise ComparisonTimeout(
                f"Comparison exceeded {timeout}s"
            ) from exc
        duration_ms = round((time.monotonic() - start) * 1000, 2)

        logger.info(
            "event=comparison_complete request_id=%s similarity=%d"
            " differences=%d conflicts=%d duration_ms=%.2f",
            request_id,
            result.similarity_score,
            result.total_differences,
            len(result.conflicts),
            duration_ms,
        )
        if self._audit:
            self._audit.log_comparison(
                request_id=request_id,
                source_a=f"{ref_a.type}#{ref_a.id}",
                source_b=f"{ref_b.type}#{ref_b.id}",
                similarity_score=result.similarity_score,
                differences=result.total_differences,
                conflicts=len(result.conflicts),
                duration_ms=duration_ms,
            )
        return result

    async def save(self, result: ComparisonResult, actor_id: int) -> str:
        """Persist a result with its differences and conflicts; return its id."""
        comparison = await self._require_repo().create(
            Comparison.from_result(result, created_by=actor_id)
        )
        logger.info(
            "event=comparison_saved id=%s matter_id=%d",
            comparison.id,
            result.matter_id,
        )
        return comparison.id

    async def get(self, comparison_id: str) -> Comparison:
        comparison = await self._require_repo().get_by_id(comparison_id)
        if comparison is None:
            raise ComparisonNotFound(comparison_id)
        return comparison

    async def list_for_matter(self, matter_id: int) -> list[Comparison]:
        return await self._require_repo().list_by_matter(matter_id)

    async def resolve_conflict(
        self,
        comparison_id: str,
        conflict_index: int,
        notes: str,
        actor_id: int,
    ) -> Comparison:
        """Mark one stored conflict resolved.

        Compare-and-set on the unresolved state: of two concurrent
        resolutions exactly one wins, the other gets AlreadyResolved.
        """
        repo = self._require_repo()
        comparison = await self.get(comparison_id)
        conflict = await repo.get_conflict(comparison_id, conflict_index)
        if conflict is None:
            raise ConflictNotFound(comparison_id, conflict_index)
        if conflict.resolved:
            raise AlreadyResolved(
                f"Conflict {conflict_index} is already resolved"
            )

        won = await repo.try_resolve_conflict(
            comparison_id,
            conflict_index,
            notes,
            actor_id,
            datetime.now(UTC),
        )
        if not won:
            raise AlreadyResolved(
                f"Conflict {conflict_index} is already resolved"
            )

        logger.info(
            "event=conflict_resolved comparison_id=%s index=%d actor=%d",
            comparison_id,
            conflict_index,
            actor_id,
        )
        if self._audit:
            self._audit.log_resolution(comparison_id, conflict_index, actor_id)
        return comparison

    async def _resolve(self, source_type: str, source_id: int) -> SourceRef:
        if self._sources is None:
            raise RuntimeError("ComparisonService has no source resolver")
        resolved = await self._sources.fetch_source(source_type, source_id)
        if resolved is None:
            raise SourceNotFound(source_type, source_id)
        return SourceRef(
            type=source_type,
            id=source_id,
            text=resolved.text,
            citation=resolved.citation,
        )

    def _cap(self, ref: SourceRef) -> SourceRef:
        limit = self._settings.max_source_chars
        if not limit or len(ref.text) <= limit:
            return ref
        logger.warning(
            "event=source_truncated type=%s id=%d chars=%d limit=%d",
            ref.type,
            ref.id,
            len(ref.text),
            limit,
        )
        return SourceRef(
            type=ref.type,
            id=ref.id,
            text=ref.text[:limit],
            citation=ref.citation,
        )

    def _require_repo(self) -> ComparisonRepository:
        if self._repo is None:
            raise RuntimeError("ComparisonService has no repository")
        return self._repo
