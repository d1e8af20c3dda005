"""Process-wide async engine plus the transaction helper built on it.

The API server and the ``rental-seed`` CLI share this module.  Both open
their units of work through :func:`transaction`, which owns commit and
rollback; repositories only flush.  Call ``dispose_engine()`` on shutdown.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from rental_db.config import get_async_url, get_pool_options

logger = logging.getLogger(__name__)

_engine: AsyncEngine | None = None
_session_factory: async_sessionmaker[AsyncSession] | None = None


def get_engine() -> AsyncEngine:
    global _engine
    if _engine is None:
        options = get_pool_options()
        _engine = create_async_engine(get_async_url(), pool_pre_ping=True, **options)
        logger.info("Database engine created (%s)", options)
    return _engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    global _session_factory
    if _session_factory is None:
        _session_factory = async_sessionmaker(get_engine(), expire_on_commit=False)
    return _session_factory


@asynccontextmanager
async def transaction() -> AsyncIterator[AsyncSession]:
    """One session, committed when the block exits cleanly.

    Any exception rolls the session back and propagates.
    """
    async with get_session_factory()() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def dispose_engine() -> None:
    global _engine, _session_factory
    if _engine is None:
        return
    await _engine.dispose()
    logger.info("Database engine disposed")
    _engine = None
    _session_factory = None
