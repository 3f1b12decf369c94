"""FastAPI dependency injection for repository and service access."""

from __future__ import annotations

from collections.abc import AsyncIterator
from dataclasses import dataclass
from typing import TYPE_CHECKING

from fastapi import Depends, Request

from lexicompare.repositories.protocols import (
    ComparisonRepository,
    ContractRepository,
    SourceRepository,
)

if TYPE_CHECKING:
    from lexicompare.services.comparison_service import ComparisonService
    from lexicompare.services.contract_service import ContractService
    from lexicompare.services.data_service import DataService


@dataclass
class Repos:
    """Repository container resolved per-request via Depends.

    Routes receive this instead of touching session_factory.
    """

    source: SourceRepository
    comparison: ComparisonRepository
    contract: ContractRepository


async def get_repos(
    request: Request,
) -> AsyncIterator[Repos]:
    """Generator dep: session lives for entire request, commits at exit."""
    from lexicompare.repositories.comparison_repo import (
        SqlComparisonRepository,
    )
    from lexicompare.repositories.contract_repo import (
        SqlContractRepository,
    )
    from lexicompare.repositories.source_repo import SqlSourceRepository

    settings = request.app.state.settings
    session_factory = request.app.state.session_factory
    async with session_factory() as session:
        yield Repos(
            source=SqlSourceRepository(
                session, max_attempts=settings.source_fetch_retries
            ),
            comparison=SqlComparisonRepository(session),
            contract=SqlContractRepository(session),
        )
        await session.commit()


def get_comparison_service(
    request: Request,
    repos: Repos = Depends(get_repos),
) -> ComparisonService:
    from lexicompare.services.comparison_service import ComparisonService

    return ComparisonService(
        sources=repos.source,
        repo=repos.comparison,
        settings=request.app.state.settings,
        audit=request.app.state.logger,
    )


def get_contract_service(
    request: Request,
    repos: Repos = Depends(get_repos),
) -> ContractService:
    from lexicompare.services.contract_service import ContractService

    return ContractService(
        repos.contract, settings=request.app.state.settings
    )


def get_data_service(request: Request) -> DataService:
    """Get DataService from app.state."""
    return request.app.state.data_service  # type: ignore[no-any-return]
