# packages/database/session.py

from contextlib import asynccontextmanager
from typing import Any, Dict
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession
from sqlalchemy.ext.asyncio.engine import AsyncEngine
from sqlalchemy.orm import sessionmaker

from packages.quant_lib.config import settings
from packages.database.models import Base


def _engine_options() -> Dict[str, Any]:
    options: Dict[str, Any] = {"echo": settings.db.echo}
    if settings.db.is_postgres:
        # QueuePool tuning only applies to a real server
        options.update(
            pool_size=settings.db.pool_size,
            max_overflow=settings.db.max_overflow,
            pool_pre_ping=True,
        )
    return options


# One engine per process; nothing connects until the first query
engine: AsyncEngine = create_async_engine(settings.db.URL, **_engine_options())

AsyncSessionFactory = sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


@asynccontextmanager
async def get_db_session():
    """Unit of work: commits on a clean exit, rolls back on any exception."""
    session = AsyncSessionFactory()
    try:
        yield session
        await session.commit()
    except Exception:
        await session.rollback()
        raise
    finally:
        await session.close()


async def create_tables(bind: AsyncEngine = engine) -> None:
    """
    Creates screener_cache and saved_screens if missing.
    Dev and test convenience; deployed schemas come from Alembic.
    """
    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def dispose_engine() -> None:
    await engine.dispose()
