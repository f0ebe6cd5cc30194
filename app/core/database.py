"""
Database access for stored portfolio analyses.

engine / async_session_factory  — built once from DATABASE_URL
session_scope()                 — one unit of work: commit, or roll back on error
get_db()                        — FastAPI dependency over session_scope()
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from app.core.config import DATABASE_ECHO, DATABASE_POOL_SIZE, DATABASE_URL

logger = logging.getLogger(__name__)


def engine_options(url: str) -> dict:
    # SQLite uses a static / null pool without sizing knobs
    if url.startswith("sqlite"):
        return {}
    return {
        "pool_size": DATABASE_POOL_SIZE,
        "max_overflow": DATABASE_POOL_SIZE,
        "pool_pre_ping": True,
    }


engine = create_async_engine(DATABASE_URL, echo=DATABASE_ECHO, **engine_options(DATABASE_URL))

async_session_factory = async_sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False
)


class Base(DeclarativeBase):
    pass


@asynccontextmanager
async def session_scope(
    factory: Optional[async_sessionmaker] = None,
) -> AsyncIterator[AsyncSession]:
    """Yield a session that commits on success and rolls back on any error."""
    async with (factory or async_session_factory)() as session:
        try:
            yield session
            await session.commit()
        except Exception as e:
            logger.warning("Rolling back database session: %s", e)
            await session.rollback()
            raise


async def get_db() -> AsyncIterator[AsyncSession]:
    async with session_scope() as session:
        yield session
