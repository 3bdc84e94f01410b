"""Unit view events."""

from datetime import UTC, datetime
from uuid import UUID

from sqlalchemy import DateTime, Integer, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from academy.database.base import Base


__all__ = ["ViewEvent"]


class ViewEvent(Base):
    """First view of a unit by a user; repeat visits add no rows."""

    __tablename__ = "user_activities"
    __table_args__ = (UniqueConstraint("user_id", "unit_id", name="uq_user_activity_unit"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    course_id: Mapped[UUID] = mapped_column(Uuid, nullable=False, index=True)
    unit_id: Mapped[UUID] = mapped_column(Uuid, nullable=False)
    viewed_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(UTC))
