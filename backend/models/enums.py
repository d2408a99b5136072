from __future__ import annotations

from enum import Enum


class YearOfStudy(str, Enum):
    FIRST = "First Year"
    SECOND = "Second Year"
    THIRD = "Third Year"
    FOURTH = "Fourth Year"
    MASTERS = "Masters"
    PHD = "PhD"


class DayOfWeek(str, Enum):
    MONDAY = "Monday"
    TUESDAY = "Tuesday"
    WEDNESDAY = "Wednesday"
    THURSDAY = "Thursday"
    FRIDAY = "Friday"
    SATURDAY = "Saturday"
    SUNDAY = "Sunday"


# Canonical orders. Sorting looks positions up here instead of comparing labels.
YEAR_ORDER: tuple[YearOfStudy, ...] = tuple(YearOfStudy)
DAY_ORDER: tuple[DayOfWeek, ...] = tuple(DayOfWeek)

YEAR_LABELS: tuple[str, ...] = tuple(y.value for y in YEAR_ORDER)
DAY_LABELS: tuple[str, ...] = tuple(d.value for d in DAY_ORDER)
