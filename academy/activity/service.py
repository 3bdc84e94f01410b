"""Business logic for unit views and course progress."""

import logging
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from academy.activity.models import ViewEvent
from academy.activity.schemas import CourseProgressResponse, ViewLogResponse, ViewLogStatus
from academy.analytics.progress import course_progress
from academy.courses.service import list_units
from academy.database.upsert import insert_for


logger = logging.getLogger(__name__)


class ActivityService:
    """Service for unit view events of one user."""

    def __init__(self, session: AsyncSession, user_id: int) -> None:
        self.session = session
        self.user_id = user_id

    async def log_view(self, course_id: UUID, unit_id: UUID) -> ViewLogResponse:
        """Record the first view of a unit; later calls report it as already logged."""
        stmt = (
            insert_for(self.session, ViewEvent)
            .values(user_id=self.user_id, course_id=course_id, unit_id=unit_id)
            .on_conflict_do_nothing(index_elements=["user_id", "unit_id"])
            .returning(ViewEvent.id)
        )
        result = await self.session.execute(stmt)
        inserted = result.scalar_one_or_none()
        await self.session.commit()

        if inserted is None:
            return ViewLogResponse(
                status=ViewLogStatus.EXISTS,
                message="This unit has already been logged as viewed for this user.",
            )

        logger.info(f"User {self.user_id} viewed unit {unit_id}")
        return ViewLogResponse(status=ViewLogStatus.LOGGED, message="Unit view has been logged successfully.")

    async def is_logged(self, unit_id: UUID) -> bool:
        result = await self.session.execute(
            select(ViewEvent.id).where(ViewEvent.user_id == self.user_id, ViewEvent.unit_id == unit_id)
        )
        return result.first() is not None

    async def viewed_unit_ids(self, course_id: UUID) -> list[UUID]:
        """Units of a course the user has viewed, in first-view order."""
        result = await self.session.execute(
            select(ViewEvent.unit_id)
            .where(ViewEvent.user_id == self.user_id, ViewEvent.course_id == course_id)
            .order_by(ViewEvent.viewed_at, ViewEvent.id)
        )
        return list(result.scalars().all())

    async def get_progress(self, course_id: UUID) -> CourseProgressResponse:
        """Percentage of the course's units the user has viewed."""
        unit_ids = [unit.id for unit in await list_units(self.session, course_id)]
        viewed = set(await self.viewed_unit_ids(course_id)).intersection(unit_ids)
        return CourseProgressResponse(
            course_id=course_id,
            total_units=len(unit_ids),
            viewed_units=len(viewed),
            progress_percentage=course_progress(unit_ids, viewed),
        )
