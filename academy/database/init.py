"""Schema creation at startup."""

import logging

from sqlalchemy.ext.asyncio import AsyncEngine

# Model modules must be imported for their tables to exist on Base.metadata
from academy.activity.models import *  # noqa: F403
from academy.behavior.models import *  # noqa: F403
from academy.courses.models import *  # noqa: F403
from academy.personalisation.models import *  # noqa: F403
from academy.user.models import *  # noqa: F403

from .base import Base


logger = logging.getLogger(__name__)


async def init_database(db_engine: AsyncEngine) -> None:
    """Create any missing tables for the registered models."""
    async with db_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info(f"Database schema ready ({len(Base.metadata.tables)} tables)")
