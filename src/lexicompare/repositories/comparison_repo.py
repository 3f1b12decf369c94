"""SQL implementation of ComparisonRepository."""

from datetime import datetime

from sqlalchemy import select
from sqlalchemy import update as sa_update
from sqlalchemy.ext.asyncio import AsyncSession

from lexicompare.models.comparison import Comparison, ComparisonConflict


class SqlComparisonRepository:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, comparison: Comparison) -> Comparison:
        self._session.add(comparison)
        await self._session.flush()
        return comparison

    async def get_by_id(self, comparison_id: str) -> Comparison | None:
        result = await self._session.execute(
            select(Comparison).where(Comparison.id == comparison_id)
        )
        return result.scalar_one_or_none()

    async def list_by_matter(self, matter_id: int) -> list[Comparison]:
        result = await self._session.execute(
            select(Comparison)
            .where(Comparison.matter_id == matter_id)
            .order_by(Comparison.created_at.desc())
        )
        return list(result.scalars().all())

    async def get_conflict(
        self, comparison_id: str, ordinal: int
    ) -> ComparisonConflict | None:
        result = await self._session.execute(
            select(ComparisonConflict).where(
                ComparisonConflict.comparison_id == comparison_id,
                ComparisonConflict.ordinal == ordinal,
            )
        )
        return result.scalar_one_or_none()

    async def try_resolve_conflict(
        self,
        comparison_id: str,
        ordinal: int,
        notes: str,
        actor_id: int,
        resolved_at: datetime,
    ) -> bool:
        """Atomically resolve only if the conflict is still unresolved."""
        result = await self._session.execute(
            sa_update(ComparisonConflict)
            .where(
                ComparisonConflict.comparison_id == comparison_id,
                ComparisonConflict.ordinal == ordinal,
                ComparisonConflict.resolved.is_(False),
            )
            .values(
                resolved=True,
                resolution_notes=notes,
                resolved_by=actor_id,
                resolved_at=resolved_at,
            )
            .execution_options(synchronize_session="fetch")
        )
        await self._session.flush()
        rowcount: int = getattr(result, "rowcount", 0) or 0
        return rowcount > 0
