from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.crm.config import Settings
from app.crm.context import CustomerContext
from app.crm.models import Base

logger = logging.getLogger(__name__)


def _is_memory_sqlite(db_url: str) -> bool:
    if not db_url.startswith("sqlite"):
        return False
    # `sqlite+aiosqlite://` with no path is also an in-memory database
    return ":memory:" in db_url or db_url.endswith("://")


def init_engine(db_url: str, *, echo: bool = False) -> AsyncEngine:
    is_postgres = db_url.startswith("postgres")
    engine_kwargs: dict[str, object] = {"echo": echo}
    if is_postgres:
        engine_kwargs.update(
            {
                "pool_pre_ping": True,
                "pool_recycle": 1800,
                "pool_size": 5,
                "max_overflow": 10,
                "pool_timeout": 30,
            }
        )
    elif _is_memory_sqlite(db_url):
        # An in-memory database lives as long as its connection; keep exactly one.
        engine_kwargs.update(
            {
                "poolclass": StaticPool,
                "connect_args": {"check_same_thread": False},
            }
        )
    engine = create_async_engine(db_url, **engine_kwargs)
    logger.info("DB engine created (dialect=%s)", engine.dialect.name)
    return engine


def engine_from_settings(settings: Settings) -> AsyncEngine:
    return init_engine(settings.database_url, echo=settings.database_echo)


def make_sessionmaker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        autoflush=False,
        expire_on_commit=False,
    )


async def create_schema(engine: AsyncEngine) -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def drop_schema(engine: AsyncEngine) -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@asynccontextmanager
async def session_scope(sm: async_sessionmaker[AsyncSession]) -> AsyncIterator[CustomerContext]:
    """
    Yields a persistence context over a fresh session.
    Writes are committed by the context itself; anything left pending is rolled back on error.
    """
    s: AsyncSession = sm()
    try:
        yield CustomerContext(s)
    except Exception:
        await s.rollback()
        raise
    finally:
        await s.close()
