"""Shared test fixtures: in-memory SQLite, async session, fake-backed app."""

from pathlib import Path

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    create_async_engine,
)

from lexicompare.api.dependencies import (
    Repos,
    get_data_service,
    get_repos,
)
from lexicompare.config import Settings
from lexicompare.logger import ComparisonLogger
from lexicompare.main import app
from lexicompare.models.base import Base
from lexicompare.repositories.fakes import (
    FakeComparisonRepository,
    FakeContractRepository,
    FakeDataService,
    FakeSourceRepository,
)


def setup_test_app(
    tmp_path: Path,
    *,
    settings: Settings | None = None,
) -> Repos:
    """Common app-state setup for API test fixtures.

    Sets up fake repos, settings, the audit logger and dependency
    overrides. Each test file's fixture calls this then seeds its own
    data through the returned repos.
    """
    fake_repos = Repos(
        source=FakeSourceRepository(),
        comparison=FakeComparisonRepository(),
        contract=FakeContractRepository(),
    )

    app.state.settings = settings or Settings(
        database_url="sqlite:///:memory:", api_key=""
    )
    app.state.logger = ComparisonLogger(
        log_dir=Path(tmp_path / "logs"), level="WARNING"
    )

    app.dependency_overrides[get_repos] = lambda: fake_repos
    app.dependency_overrides[get_data_service] = (
        lambda: FakeDataService()
    )

    return fake_repos


@pytest_asyncio.fixture
async def engine():
    """In-memory engine with the full schema, one per test."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def session(engine):
    """Function-scoped session with connection-level rollback.

    Wraps each test in a connection-level transaction so that
    even ``session.commit()`` calls inside tests are rolled
    back at teardown, keeping the shared engine clean.
    """
    async with engine.connect() as connection:
        transaction = await connection.begin()
        session = AsyncSession(
            bind=connection,
            expire_on_commit=False,
        )
        yield session
        await session.close()
        await transaction.rollback()
