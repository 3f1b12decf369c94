"""SQL implementation of SourceRepository."""

from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from tenacity import (
    AsyncRetrying,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential_jitter,
)

from lexicompare.constants import (
    SOURCE_RETRY_INITIAL_WAIT,
    SOURCE_RETRY_MAX_WAIT,
)
from lexicompare.engine.value_objects import ResolvedSource
from lexicompare.models.source import SourceText
from lexicompare.resilience.errors import is_retryable

logger = logging.getLogger(__name__)


class SqlSourceRepository:
    def __init__(
        self, session: AsyncSession, *, max_attempts: int = 3
    ) -> None:
        self._session = session
        self._max_attempts = max_attempts

    async def get(
        self, source_type: str, source_id: int
    ) -> SourceText | None:
        result = await self._session.execute(
            select(SourceText).where(
                SourceText.source_type == source_type,
                SourceText.source_id == source_id,
            )
        )
        return result.scalar_one_or_none()

    async def fetch_source(
        self, source_type: str, source_id: int
    ) -> ResolvedSource | None:
        """Resolve a source, retrying transient database faults.

        A missing row is an answer, not a fault: it is never retried.
        """
        row: SourceText | None = None
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(self._max_attempts),
            wait=wait_exponential_jitter(
                initial=SOURCE_RETRY_INITIAL_WAIT,
                max=SOURCE_RETRY_MAX_WAIT,
                jitter=SOURCE_RETRY_INITIAL_WAIT,
            ),
            retry=retry_if_exception(is_retryable),
            reraise=True,
        ):
            with attempt:
                if attempt.retry_state.attempt_number > 1:
                    logger.warning(
                        "event=source_fetch_retry type=%s id=%d attempt=%d",
                        source_type,
                        source_id,
                        attempt.retry_state.attempt_number,
                    )
                row = await self.get(source_type, source_id)
        if row is None:
            return None
        return ResolvedSource(text=row.text, citation=row.effective_citation)

    async def upsert(self, source: SourceText) -> SourceText:
        existing = await self.get(source.source_type, source.source_id)
        if existing:
            existing.text = source.text
            existing.matter_id = source.matter_id
            existing.citation = source.citation
            existing.page_number = source.page_number
            existing.line_start = source.line_start
            existing.event_date = source.event_date
            await self._session.flush()
            return existing
        self._session.add(source)
        await self._session.flush()
        return source

    async def list_by_matter(self, matter_id: int) -> list[SourceText]:
        result = await self._session.execute(
            select(SourceText)
            .where(SourceText.matter_id == matter_id)
            .order_by(SourceText.source_type, SourceText.source_id)
        )
        return list(result.scalars().all())
