"""Schemas for the user activity API."""

from enum import StrEnum
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class ViewLogStatus(StrEnum):
    LOGGED = "Activity Logged"
    EXISTS = "Activity Exists"


class ViewLogRequest(BaseModel):
    """A unit the current user has opened."""

    model_config = ConfigDict(populate_by_name=True)

    course_id: UUID = Field(..., alias="courseId")
    unit_id: UUID = Field(..., alias="unitId")


class ViewLogResponse(BaseModel):
    status: ViewLogStatus
    message: str


class AlreadyLoggedResponse(BaseModel):
    already_logged: bool


class ViewedUnitsResponse(BaseModel):
    viewed_units: list[UUID]


class CourseProgressResponse(BaseModel):
    """Schema for course progress response."""

    course_id: UUID
    total_units: int
    viewed_units: int
    progress_percentage: int
