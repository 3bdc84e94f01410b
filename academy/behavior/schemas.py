"""Schemas for the user behaviour API."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class UnitKey(BaseModel):
    """Identifies a unit within a course."""

    model_config = ConfigDict(populate_by_name=True)

    course_id: UUID = Field(..., alias="courseId")
    unit_id: UUID = Field(..., alias="unitId")


class TimeSpentLog(UnitKey):
    """Seconds spent on a unit during one visit."""

    video_included: bool = Field(False, alias="videoIncluded")
    time_spent: int = Field(..., ge=0, alias="timeSpent", description="Seconds spent during this visit")


class ScrollPercentageLog(UnitKey):
    """Deepest scroll reached on a unit during one visit."""

    video_included: bool = Field(False, alias="videoIncluded")
    scroll_percentage: float = Field(..., ge=0, le=100, alias="scrollPercentage")


class TimeSpentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    course_id: UUID
    unit_id: UUID
    video_included: bool
    time_spent: int
    date: datetime | None = None


class ScrollPercentageResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    course_id: UUID
    unit_id: UUID
    video_included: bool
    scroll_percentage: float
    date: datetime | None = None


class ConsolidationResponse(BaseModel):
    """Outcome of collapsing a unit's scroll records to the deepest one."""

    found: bool
    kept_id: int | None = None
    kept_scroll_percentage: float | None = None
    deleted_count: int = 0
    message: str
