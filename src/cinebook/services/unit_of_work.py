"""Scoped transaction wrapper for all mutating operations."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import AsyncSession

logger = logging.getLogger(__name__)


@asynccontextmanager
async def unit_of_work(session: AsyncSession) -> AsyncIterator[AsyncSession]:
    """
    Run a block of storage operations as one all-or-nothing transaction.

    Commits when the block exits normally. On any exception the session is
    rolled back and the original exception is re-raised; a failing rollback
    is logged but never replaces it.

    Usage:
        async with unit_of_work(db):
            db.add(booking)
            await db.flush()
    """
    try:
        yield session
        await session.commit()
    except BaseException:
        try:
            await session.rollback()
        except Exception:
            logger.error("Rollback failed", exc_info=True)
        raise
