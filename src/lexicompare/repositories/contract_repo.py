"""SQL implementation of ContractRepository."""

from datetime import datetime

from sqlalchemy import func, select
from sqlalchemy import update as sa_update
from sqlalchemy.ext.asyncio import AsyncSession

from lexicompare.models.contract import (
    ClauseChangeRecord,
    ContractComparison,
    ContractVersion,
)


class SqlContractRepository:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def next_version_number(self, document_id: str) -> int:
        result = await self._session.execute(
            select(func.max(ContractVersion.version_number)).where(
                ContractVersion.document_id == document_id
            )
        )
        current = result.scalar_one_or_none()
        return (current or 0) + 1

    async def create_version(
        self, version: ContractVersion
    ) -> ContractVersion:
        """Insert a version and make it the only current one."""
        await self._session.execute(
            sa_update(ContractVersion)
            .where(ContractVersion.document_id == version.document_id)
            .values(is_current=False)
        )
        version.is_current = True
        self._session.add(version)
        await self._session.flush()
        return version

    async def get_version(
        self, version_id: str
    ) -> ContractVersion | None:
        result = await self._session.execute(
            select(ContractVersion).where(ContractVersion.id == version_id)
        )
        return result.scalar_one_or_none()

    async def list_versions(
        self, document_id: str
    ) -> list[ContractVersion]:
        result = await self._session.execute(
            select(ContractVersion)
            .where(ContractVersion.document_id == document_id)
            .order_by(ContractVersion.version_number.desc())
        )
        return list(result.scalars().all())

    async def create_comparison(
        self, comparison: ContractComparison
    ) -> ContractComparison:
        self._session.add(comparison)
        await self._session.flush()
        return comparison

    async def get_comparison(
        self, comparison_id: str
    ) -> ContractComparison | None:
        result = await self._session.execute(
            select(ContractComparison).where(
                ContractComparison.id == comparison_id
            )
        )
        return result.scalar_one_or_none()

    async def list_comparisons(
        self, document_id: str
    ) -> list[ContractComparison]:
        result = await self._session.execute(
            select(ContractComparison)
            .where(ContractComparison.document_id == document_id)
            .order_by(ContractComparison.created_at.desc())
        )
        return list(result.scalars().all())

    async def get_change(
        self, comparison_id: str, ordinal: int
    ) -> ClauseChangeRecord | None:
        result = await self._session.execute(
            select(ClauseChangeRecord).where(
                ClauseChangeRecord.comparison_id == comparison_id,
                ClauseChangeRecord.ordinal == ordinal,
            )
        )
        return result.scalar_one_or_none()

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
        """Atomically set review status only if current is in expected."""
        result = await self._session.execute(
            sa_update(ClauseChangeRecord)
            .where(
                ClauseChangeRecord.comparison_id == comparison_id,
                ClauseChangeRecord.ordinal == ordinal,
                ClauseChangeRecord.status.in_(expected),
            )
            .values(
                status=status,
                review_notes=notes,
                reviewed_by=reviewer_id,
                reviewed_at=reviewed_at,
            )
            .execution_options(synchronize_session="fetch")
        )
        await self._session.flush()
        rowcount: int = getattr(result, "rowcount", 0) or 0
        return rowcount > 0
