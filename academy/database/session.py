"""Sessions for request handlers, startup tasks and scripts."""

import logging
from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from academy.database.engine import engine


logger = logging.getLogger(__name__)

# Services read attributes of committed rows when building responses
async_session_maker = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """Yield one session per request.

    Services commit their own writes. Anything left uncommitted when the
    request fails is rolled back before the error reaches the handlers.
    """
    async with async_session_maker() as session:
        try:
            yield session
        except Exception:
            if session.in_transaction():
                logger.debug("Rolling back request session")
                await session.rollback()
            raise


DbSession = Annotated[AsyncSession, Depends(get_db_session)]
