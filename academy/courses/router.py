"""Course and unit content endpoints (public)."""

from uuid import UUID

from fastapi import APIRouter

from academy.courses import service
from academy.courses.schemas import CourseResponse, UnitResponse
from academy.database.session import DbSession


router = APIRouter(prefix="/api/v1", tags=["courses"])


@router.get("/courses")
async def list_courses(session: DbSession) -> list[CourseResponse]:
    """List all courses."""
    return [CourseResponse.model_validate(course) for course in await service.list_courses(session)]


@router.get("/courses/{course_id}")
async def get_course(course_id: UUID, session: DbSession) -> CourseResponse:
    """Get a single course."""
    return CourseResponse.model_validate(await service.get_course(session, course_id))


@router.get("/units")
async def list_all_units(session: DbSession) -> list[UnitResponse]:
    """List every unit of every course."""
    return [UnitResponse.model_validate(unit) for unit in await service.list_units(session)]


@router.get("/units/{course_id}")
async def list_course_units(course_id: UUID, session: DbSession) -> list[UnitResponse]:
    """List the units of one course in display order."""
    return [UnitResponse.model_validate(unit) for unit in await service.list_units(session, course_id)]
