"""Feedback template reference data."""

from sqlalchemy import JSON, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from academy.database.base import Base


__all__ = ["PersonalisedText"]


class PersonalisedText(Base):
    """A feedback template row.

    ``average`` holds the inclusive ``[min, max]`` range as a JSON list so rows
    with a malformed range can still be stored and reported.
    """

    __tablename__ = "personalised_texts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    type: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    average: Mapped[list] = mapped_column(JSON, nullable=False)
    first_part_text: Mapped[str] = mapped_column(Text, nullable=False)
    second_part_text: Mapped[str] = mapped_column(Text, nullable=False)
