from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class CourseResponse(BaseModel):
    """Course summary."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    title: str
    description: str
    created_at: datetime | None = None


class UnitResponse(BaseModel):
    """Full unit content as rendered by the course page."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    course_id: UUID
    position: int
    title: str
    description: str
    video_url: str | None = None
    has_video: bool
    title_first_part: str
    content_first_part: str
    title_second_part: str
    content_second_part: str
    title_third_part: str
    content_third_part: str
