from __future__ import annotations

import uuid

from sqlalchemy import Column, DateTime, Enum, Index, Text, Uuid
from sqlalchemy.sql import func

from models.base import Base
from models.enums import DAY_LABELS, YEAR_LABELS


YEAR_OF_STUDY = Enum(*YEAR_LABELS, name="year_of_study", native_enum=False, create_constraint=True, length=32)
DAY_OF_WEEK = Enum(*DAY_LABELS, name="day_of_week", native_enum=False, create_constraint=True, length=16)


class TimetableEntry(Base):
    __tablename__ = "timetable_entries"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    program_of_study = Column(Text, nullable=False)
    year_of_study = Column(YEAR_OF_STUDY, nullable=False)
    course_code = Column(Text, nullable=False)
    course_name = Column(Text, nullable=False)
    venue = Column(Text, nullable=False)
    day = Column(DAY_OF_WEEK, nullable=False)
    # Zero-padded 24h "HH:MM"; lexical order == chronological order.
    time = Column(Text, nullable=False)

    __table_args__ = (
        Index("ix_timetable_entries_program_year", "program_of_study", "year_of_study"),
    )

    def __repr__(self) -> str:
        return f"<TimetableEntry {self.course_code} {self.day} {self.time}>"
