"""Schemas for the data visualisation API."""

from uuid import UUID

from pydantic import BaseModel, ConfigDict

from academy.activity.schemas import CourseProgressResponse
from academy.behavior.schemas import ScrollPercentageResponse, TimeSpentResponse


class ViewEventResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    user_id: int
    course_id: UUID
    unit_id: UUID


class CourseAggregatesSchema(BaseModel):
    """Average time (seconds) and scroll depth (percent), split by video units."""

    time_video: float
    time_non_video: float
    scroll_video: float
    scroll_non_video: float


class CourseAnalyticsResponse(BaseModel):
    """Aggregates for one course with a feedback sentence per statistic."""

    course_id: UUID
    course_title: str
    aggregates: CourseAggregatesSchema
    feedback: dict[str, str]
    progress: CourseProgressResponse


class CourseAggregatesEntry(BaseModel):
    course_id: UUID
    course_title: str
    aggregates: CourseAggregatesSchema


class GeneralAnalyticsResponse(BaseModel):
    """Aggregates for every course."""

    courses: list[CourseAggregatesEntry]


class CourseRecordsResponse(BaseModel):
    """Raw behaviour rows of one user in one course."""

    activities: list[ViewEventResponse]
    time_spent: list[TimeSpentResponse]
    scroll_percentages: list[ScrollPercentageResponse]
