"""Behaviour records: cumulative time spent and scroll depth per unit."""

from datetime import UTC, datetime
from uuid import UUID

from sqlalchemy import Boolean, CheckConstraint, DateTime, Float, Index, Integer, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from academy.database.base import Base


__all__ = ["ScrollRecord", "TimeSpentRecord"]


class TimeSpentRecord(Base):
    """Seconds a user spent on a unit, accumulated across visits."""

    __tablename__ = "user_time_spent"
    __table_args__ = (
        UniqueConstraint("user_id", "course_id", "unit_id", name="uq_time_spent_user_course_unit"),
        CheckConstraint("time_spent >= 0", name="time_spent_non_negative"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    course_id: Mapped[UUID] = mapped_column(Uuid, nullable=False, index=True)
    unit_id: Mapped[UUID] = mapped_column(Uuid, nullable=False)
    video_included: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    time_spent: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    date: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(UTC))


class ScrollRecord(Base):
    """Deepest scroll reached on a unit.

    Each log call appends a row; consolidation later keeps only the deepest row
    per (user, course, unit).
    """

    __tablename__ = "user_scroll_percentages"
    __table_args__ = (
        Index("ix_scroll_user_course_unit", "user_id", "course_id", "unit_id"),
        CheckConstraint("scroll_percentage >= 0 AND scroll_percentage <= 100", name="scroll_percentage_range"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(Integer, nullable=False)
    course_id: Mapped[UUID] = mapped_column(Uuid, nullable=False, index=True)
    unit_id: Mapped[UUID] = mapped_column(Uuid, nullable=False)
    scroll_percentage: Mapped[float] = mapped_column(Float, nullable=False)
    video_included: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    date: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(UTC))
