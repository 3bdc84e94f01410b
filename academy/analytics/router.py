"""Data visualisation endpoints backing the analytics dashboards."""

from uuid import UUID

from fastapi import APIRouter

from academy.analytics.schemas import CourseAnalyticsResponse, CourseRecordsResponse, GeneralAnalyticsResponse
from academy.analytics.service import AnalyticsService
from academy.auth import CurrentAuth
from academy.behavior.models import ScrollRecord, TimeSpentRecord
from academy.behavior.schemas import ScrollPercentageResponse, TimeSpentResponse


router = APIRouter(prefix="/api/v1/data-visualisation", tags=["data-visualisation"])


@router.get("/analytics/scroll")
async def get_scroll_records(auth: CurrentAuth) -> list[ScrollPercentageResponse]:
    """All scroll records of the current user across courses."""
    return [ScrollPercentageResponse.model_validate(row) for row in await auth.query_owned(ScrollRecord)]


@router.get("/analytics/time-spent")
async def get_time_spent_records(auth: CurrentAuth) -> list[TimeSpentResponse]:
    """All time spent records of the current user across courses."""
    return [TimeSpentResponse.model_validate(row) for row in await auth.query_owned(TimeSpentRecord)]


@router.get("/analytics/courses/{course_id}")
async def get_course_records(course_id: UUID, auth: CurrentAuth) -> CourseRecordsResponse:
    """Raw view, time and scroll records of the current user in one course."""
    return await AnalyticsService(auth.session, auth.user_id).course_records(course_id)


@router.get("/aggregates")
async def get_general_aggregates(auth: CurrentAuth) -> GeneralAnalyticsResponse:
    """Per-course averages for every course."""
    return await AnalyticsService(auth.session, auth.user_id).general_analytics()


@router.get("/aggregates/{course_id}")
async def get_course_aggregates(course_id: UUID, auth: CurrentAuth) -> CourseAnalyticsResponse:
    """Averages, personalised feedback and progress for one course."""
    return await AnalyticsService(auth.session, auth.user_id).course_analytics(course_id)
