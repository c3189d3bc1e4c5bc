"""Async SQLAlchemy engine and the request-scoped session."""
import logging
from collections.abc import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from core.config import Settings, get_settings

logger = logging.getLogger(__name__)


def engine_options(settings: Settings) -> dict:
    """
    Keyword arguments for create_async_engine.

    Pool sizing only applies to server databases; a local SQLite file (allowed in
    DEV_MODE) uses SQLAlchemy's default pool for aiosqlite.
    """
    if settings.database_url.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False}}
    return {
        "pool_pre_ping": True,
        "pool_size": settings.db_pool_size,
        "max_overflow": settings.db_max_overflow,
    }


settings = get_settings()

engine = create_async_engine(settings.database_url, echo=False, **engine_options(settings))

async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def get_async_session() -> AsyncGenerator[AsyncSession]:
    """
    Yield the session for one request.

    Services only flush; the request's changes are committed together here once
    the route returns. Any exception rolls all of them back, so a folder is
    never left half-updated.
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            logger.debug("request_session_rolled_back")
            await session.rollback()
            raise
