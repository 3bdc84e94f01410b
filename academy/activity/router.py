"""Unit view and course progress endpoints."""

from uuid import UUID

from fastapi import APIRouter

from academy.activity.schemas import (
    AlreadyLoggedResponse,
    CourseProgressResponse,
    ViewedUnitsResponse,
    ViewLogRequest,
    ViewLogResponse,
)
from academy.activity.service import ActivityService
from academy.auth import CurrentAuth


router = APIRouter(prefix="/api/v1/user-activity", tags=["user-activity"])


@router.post("")
async def log_view(data: ViewLogRequest, auth: CurrentAuth) -> ViewLogResponse:
    """Log that the current user opened a unit."""
    return await ActivityService(auth.session, auth.user_id).log_view(data.course_id, data.unit_id)


@router.get("/units/{unit_id}")
async def check_view(unit_id: UUID, auth: CurrentAuth) -> AlreadyLoggedResponse:
    """Check whether the current user already viewed a unit."""
    return AlreadyLoggedResponse(already_logged=await ActivityService(auth.session, auth.user_id).is_logged(unit_id))


@router.get("/courses/{course_id}")
async def viewed_units(course_id: UUID, auth: CurrentAuth) -> ViewedUnitsResponse:
    """List the units of a course the current user has viewed."""
    return ViewedUnitsResponse(
        viewed_units=await ActivityService(auth.session, auth.user_id).viewed_unit_ids(course_id)
    )


@router.get("/courses/{course_id}/progress")
async def get_progress(course_id: UUID, auth: CurrentAuth) -> CourseProgressResponse:
    """Get the current user's progress through a course."""
    return await ActivityService(auth.session, auth.user_id).get_progress(course_id)
