"""Tests for SqlSourceRepository, including retry on transient faults."""

from unittest.mock import AsyncMock

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from lexicompare.constants import SourceType
from lexicompare.models.source import SourceText
from lexicompare.repositories.source_repo import SqlSourceRepository


@pytest.fixture
def repo(session: AsyncSession) -> SqlSourceRepository:
    return SqlSourceRepository(session, max_attempts=3)


async def test_upsert_and_get(
    repo: SqlSourceRepository, session: AsyncSession,
) -> None:
    await repo.upsert(
        SourceText(
            source_type=SourceType.EXTRACTION,
            source_id=1,
            matter_id=9,
            text="Payment of $500 is due monthly.",
        )
    )
    await session.commit()

    fetched = await repo.get(SourceType.EXTRACTION, 1)
    assert fetched is not None
    assert fetched.text == "Payment of $500 is due monthly."
    assert fetched.matter_id == 9


async def test_upsert_replaces_text(
    repo: SqlSourceRepository, session: AsyncSession,
) -> None:
    await repo.upsert(
        SourceText(source_type="document", source_id=2, text="v1")
    )
    await repo.upsert(
        SourceText(source_type="document", source_id=2, text="v2")
    )
    await session.commit()

    fetched = await repo.get("document", 2)
    assert fetched is not None
    assert fetched.text == "v2"


async def test_fetch_source_derives_citation(
    repo: SqlSourceRepository,
) -> None:
    await repo.upsert(
        SourceText(
            source_type=SourceType.CITATION,
            source_id=3,
            text="I never saw the document.",
            page_number=12,
            line_start=4,
        )
    )
    await repo.upsert(
        SourceText(
            source_type=SourceType.TIMELINE_EVENT,
            source_id=4,
            text="Contract signed.",
            event_date="2024-03-01",
        )
    )

    citation = await repo.fetch_source(SourceType.CITATION, 3)
    event = await repo.fetch_source(SourceType.TIMELINE_EVENT, 4)
    assert citation is not None
    assert citation.citation == "Page 12, Line 4"
    assert event is not None
    assert event.citation == "Event on 2024-03-01"


async def test_fetch_missing_returns_none(
    repo: SqlSourceRepository,
) -> None:
    assert await repo.fetch_source("extraction", 999) is None


async def test_list_by_matter(
    repo: SqlSourceRepository, session: AsyncSession,
) -> None:
    await repo.upsert(
        SourceText(source_type="extraction", source_id=1, matter_id=5, text="a")
    )
    await repo.upsert(
        SourceText(source_type="extraction", source_id=2, matter_id=5, text="b")
    )
    await repo.upsert(
        SourceText(source_type="extraction", source_id=3, matter_id=6, text="c")
    )
    await session.commit()

    rows = await repo.list_by_matter(5)
    assert [r.source_id for r in rows] == [1, 2]


def _locked() -> OperationalError:
    return OperationalError(
        "SELECT", {}, Exception("database is locked")
    )


async def test_fetch_retries_transient_error(
    repo: SqlSourceRepository,
) -> None:
    row = SourceText(source_type="extraction", source_id=1, text="body")
    repo.get = AsyncMock(side_effect=[_locked(), row])  # type: ignore[method-assign]

    resolved = await repo.fetch_source("extraction", 1)
    assert resolved is not None
    assert resolved.text == "body"
    assert repo.get.await_count == 2


async def test_fetch_gives_up_after_max_attempts(
    repo: SqlSourceRepository,
) -> None:
    repo.get = AsyncMock(side_effect=_locked())  # type: ignore[method-assign]

    with pytest.raises(OperationalError):
        await repo.fetch_source("extraction", 1)
    assert repo.get.await_count == 3


async def test_fetch_does_not_retry_client_errors(
    repo: SqlSourceRepository,
) -> None:
    repo.get = AsyncMock(side_effect=ValueError("bad id"))  # type: ignore[method-assign]

    with pytest.raises(ValueError):
        await repo.fetch_source("extraction", 1)
    assert repo.get.await_count == 1
