"""Read access to course content.

This is the content collaborator the analytics modules depend on: it supplies
a course's units in display order, each tagged with whether it has a video.
"""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from academy.courses.models import Course, Unit
from academy.exceptions import ResourceNotFoundError


async def list_courses(session: AsyncSession) -> list[Course]:
    """Return all courses, oldest first."""
    result = await session.execute(select(Course).order_by(Course.created_at, Course.id))
    return list(result.scalars().all())


async def get_course(session: AsyncSession, course_id: UUID) -> Course:
    """Return a course or raise ResourceNotFoundError."""
    course = await session.get(Course, course_id)
    if course is None:
        raise ResourceNotFoundError("Course", str(course_id))
    return course


async def list_units(session: AsyncSession, course_id: UUID | None = None) -> list[Unit]:
    """Return units in display order, optionally restricted to one course."""
    stmt = select(Unit).order_by(Unit.course_id, Unit.position, Unit.created_at)
    if course_id is not None:
        stmt = select(Unit).where(Unit.course_id == course_id).order_by(Unit.position, Unit.created_at)
    result = await session.execute(stmt)
    return list(result.scalars().all())
