"""DB connectivity and component health checks."""

import logging
import os

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from lexicompare.config import Settings

logger = logging.getLogger(__name__)


class DataService:
    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        settings: Settings,
    ) -> None:
        self._session_factory = session_factory
        self._settings = settings

    async def check_connection(self) -> bool:
        try:
            async with self._session_factory() as session:
                await session.execute(text("SELECT 1"))
            return True
        except (SQLAlchemyError, OSError) as exc:
            logger.warning("event=db_check_failed error=%s", exc)
            return False

    def check_log_dir(self) -> bool:
        log_dir = self._settings.log_dir
        return log_dir.is_dir() and os.access(log_dir, os.W_OK)
