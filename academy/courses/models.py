"""Course content models."""

from datetime import UTC, datetime
from uuid import UUID, uuid4

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from academy.database.base import Base


__all__ = ["Course", "Unit"]


class Course(Base):
    """A course made of ordered units."""

    __tablename__ = "courses"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(UTC))

    units: Mapped[list["Unit"]] = relationship(
        back_populates="course",
        cascade="all, delete-orphan",
        order_by="Unit.position",
    )


class Unit(Base):
    """A single piece of course content, optionally with an embedded video."""

    __tablename__ = "units"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    course_id: Mapped[UUID] = mapped_column(
        Uuid, ForeignKey("courses.id", ondelete="CASCADE"), nullable=False, index=True
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    video_url: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    title_first_part: Mapped[str] = mapped_column(String(255), nullable=False)
    content_first_part: Mapped[str] = mapped_column(Text, nullable=False)
    title_second_part: Mapped[str] = mapped_column(String(255), nullable=False)
    content_second_part: Mapped[str] = mapped_column(Text, nullable=False)
    title_third_part: Mapped[str] = mapped_column(String(255), nullable=False)
    content_third_part: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(UTC))

    course: Mapped[Course] = relationship(back_populates="units")

    @property
    def has_video(self) -> bool:
        """Whether the unit embeds a video."""
        return bool(self.video_url)
