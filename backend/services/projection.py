"""Pure projections of a timetable entry snapshot.

Nothing here touches the database or keeps state between calls: callers pass
the full entry list plus the selected (program, year) filter pair and get a
fresh result back. Entries only need the attributes of ``TimetableEntry``
(ORM rows and ``TimetableEntryOut`` both work).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Sequence

from models.enums import DAY_ORDER, YEAR_ORDER, DayOfWeek, YearOfStudy


STATUS_NO_FILTER_SELECTED = "NO_FILTER_SELECTED"
STATUS_NO_MATCHING_ENTRIES = "NO_MATCHING_ENTRIES"
STATUS_OK = "OK"


@dataclass(frozen=True)
class FilterOptions:
    programs: list[str]
    years: list[YearOfStudy]


@dataclass(frozen=True)
class TimetableProjection:
    program: str | None
    year: YearOfStudy | None
    entries: list[Any] = field(default_factory=list)
    by_day: dict[DayOfWeek, list[Any]] = field(default_factory=dict)

    @property
    def filters_selected(self) -> bool:
        return bool(self.program) and self.year is not None

    @property
    def status(self) -> str:
        if not self.filters_selected:
            return STATUS_NO_FILTER_SELECTED
        if not self.entries:
            return STATUS_NO_MATCHING_ENTRIES
        return STATUS_OK

    def iter_days(self) -> Iterable[tuple[DayOfWeek, list[Any]]]:
        for day in ordered_days():
            bucket = self.by_day.get(day)
            if bucket:
                yield day, bucket


def _year_rank(year: YearOfStudy) -> int:
    return YEAR_ORDER.index(year)


def coerce_year(value: Any) -> YearOfStudy | None:
    """Map a raw selection ("" / None / label / enum) onto ``YearOfStudy``.

    Blank means "not selected". Unknown labels raise ``ValueError``.
    """

    if value is None or isinstance(value, YearOfStudy):
        return value
    value = str(value).strip()
    if not value:
        return None
    return YearOfStudy(value)


def ordered_days() -> tuple[DayOfWeek, ...]:
    return DAY_ORDER


def distinct_filter_options(entries: Sequence[Any]) -> FilterOptions:
    programs = sorted({e.program_of_study for e in entries})
    years = sorted({YearOfStudy(e.year_of_study) for e in entries}, key=_year_rank)
    return FilterOptions(programs=programs, years=years)


def filter_entries(entries: Sequence[Any], program: str | None, year: YearOfStudy | str | None) -> list[Any]:
    # Both filters are required; an incomplete selection is an empty view, not "show all".
    if not program or not year:
        return []
    year = YearOfStudy(year)
    return [e for e in entries if e.program_of_study == program and e.year_of_study == year]


def group_by_day(entries: Sequence[Any]) -> dict[DayOfWeek, list[Any]]:
    buckets: dict[DayOfWeek, list[Any]] = {}
    for e in entries:
        buckets.setdefault(DayOfWeek(e.day), []).append(e)

    # Built by walking the canonical week so iteration order never depends on input order.
    # sorted() is stable: equal times keep their input order.
    grouped: dict[DayOfWeek, list[Any]] = {}
    for day in ordered_days():
        bucket = buckets.get(day)
        if bucket:
            grouped[day] = sorted(bucket, key=lambda e: e.time)
    return grouped


def project_timetable(entries: Sequence[Any], program: str | None, year: YearOfStudy | str | None) -> TimetableProjection:
    program = (program or "").strip() or None
    year = coerce_year(year)
    selected = filter_entries(entries, program, year)
    return TimetableProjection(program=program, year=year, entries=selected, by_day=group_by_day(selected))
