# apps/api_server/dependencies/database.py

from typing import AsyncGenerator
from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from apps.api_server.services.saved_screens import SavedScreenService
from apps.api_server.services.universe_store import ScreenerCacheRepository
from packages.database.session import get_db_session


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """One session per request; committed when the handler returns cleanly."""
    async with get_db_session() as session:
        yield session


def get_cache_repository(
    session: AsyncSession = Depends(get_session),
) -> ScreenerCacheRepository:
    return ScreenerCacheRepository(session)


def get_saved_screen_service(
    session: AsyncSession = Depends(get_session),
) -> SavedScreenService:
    return SavedScreenService(session)
