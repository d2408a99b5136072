from __future__ import annotations

import re
import uuid
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from models.enums import DayOfWeek, YearOfStudy


_TIME_RE = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


def _required_text(v: str) -> str:
    v = (v or "").strip()
    if not v:
        raise ValueError("must not be blank")
    return v


class TimetableEntryBase(BaseModel):
    program_of_study: str = Field(min_length=1)
    year_of_study: YearOfStudy
    course_code: str = Field(min_length=1)
    course_name: str = Field(min_length=1)
    venue: str = Field(min_length=1)
    day: DayOfWeek
    time: str = Field(min_length=1)


class TimetableEntryCreate(TimetableEntryBase):
    """Payload for creating an entry or replacing every field of an existing one."""

    @field_validator("program_of_study", "course_name", "venue")
    @classmethod
    def _strip_text(cls, v: str) -> str:
        return _required_text(v)

    @field_validator("course_code")
    @classmethod
    def _normalize_course_code(cls, v: str) -> str:
        return _required_text(v).upper()

    @field_validator("time")
    @classmethod
    def _normalize_time(cls, v: str) -> str:
        v = _required_text(v)
        if not _TIME_RE.match(v):
            raise ValueError("time must be zero-padded 24-hour HH:MM")
        return v


class TimetableEntryOut(TimetableEntryBase):
    id: uuid.UUID
    created_at: datetime

    class Config:
        from_attributes = True


class FilterOptionsOut(BaseModel):
    programs: list[str]
    years: list[YearOfStudy]


class DayScheduleOut(BaseModel):
    day: DayOfWeek
    entries: list[TimetableEntryOut]


class TimetableViewOut(BaseModel):
    status: Literal["NO_FILTER_SELECTED", "NO_MATCHING_ENTRIES", "OK"]
    program: str | None = None
    year: YearOfStudy | None = None
    days: list[DayScheduleOut] = Field(default_factory=list)
