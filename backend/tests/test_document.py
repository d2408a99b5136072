"""Tests for the printable HTML timetable document and its print hand-off."""
from __future__ import annotations

import re
from datetime import datetime, timezone

import pytest

from conftest import make_entry
from models.enums import DayOfWeek, YearOfStudy
from services.document import (
    NoTimetableDataError,
    PresentationUnavailableError,
    export_filename,
    print_timetable,
    render_timetable_document,
)
from services.projection import group_by_day, ordered_days


GENERATED_AT = datetime(2026, 10, 19, 14, 30, tzinfo=timezone.utc)


class RecordingSurface:
    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.presented: list[tuple[str, str]] = []

    def present(self, document: str, *, filename: str) -> None:
        if self.fail:
            raise PresentationUnavailableError("popup blocked")
        self.presented.append((document, filename))


def _sample_grouped():
    return group_by_day(
        [
            make_entry(code="CS102", name="Data Structures", venue="Lab 2", day="Friday", time="14:00"),
            make_entry(code="CS101", name="Intro to Programming", venue="Hall A", day="Monday", time="09:00"),
            make_entry(code="MA101", name="Calculus", venue="Room 5", day="Monday", time="08:00"),
        ]
    )


def _render(grouped=None, **kwargs) -> str:
    return render_timetable_document(
        _sample_grouped() if grouped is None else grouped,
        ordered_days(),
        program=kwargs.pop("program", "Computer Science"),
        year=kwargs.pop("year", YearOfStudy.FIRST),
        generated_at=GENERATED_AT,
        **kwargs,
    )


def _sections(document: str) -> dict[str, str]:
    return dict(re.findall(r'<section class="day" data-day="([^"]+)">(.*?)</section>', document, flags=re.S))


def test_header_block() -> None:
    document = _render()

    assert document.startswith("<!DOCTYPE html>")
    assert "<h1>Class Timetable</h1>" in document
    assert "Program: Computer Science" in document
    assert "Year of Study: First Year" in document
    assert "Generated on: 2026-10-19" in document
    assert "<title>Timetable_Computer_Science_First_Year</title>" in document


def test_sections_follow_calendar_order_and_skip_empty_days() -> None:
    sections = _sections(_render())

    assert list(sections) == ["Monday", "Friday"]


def test_every_entry_rendered_once_under_its_day() -> None:
    grouped = _sample_grouped()
    sections = _sections(_render(grouped))

    for day, bucket in grouped.items():
        body = sections[day.value]
        for entry in bucket:
            assert body.count(f"{entry.course_name} ({entry.course_code})") == 1
            assert body.count(f"Time: {entry.time} | Venue: {entry.venue}") == 1
    assert sum(body.count('class="course"') for body in sections.values()) == 3


def test_entries_keep_projection_order() -> None:
    monday = _sections(_render())["Monday"]
    assert monday.index("Calculus") < monday.index("Intro to Programming")


def test_rendering_is_deterministic() -> None:
    assert _render() == _render()


def test_markup_is_escaped() -> None:
    grouped = group_by_day([make_entry(name="R&D <Lab>", day="Tuesday")])
    document = _render(grouped, program="A&B")

    assert "R&amp;D &lt;Lab&gt;" in document
    assert "Program: A&amp;B" in document


def test_auto_print_trigger_can_be_disabled() -> None:
    assert "window.print()" in _render()
    assert "window.print()" not in _render(auto_print=False)


def test_custom_title() -> None:
    assert "<h1>Semester Plan</h1>" in _render(title="Semester Plan")


def test_empty_projection_signals_no_data() -> None:
    with pytest.raises(NoTimetableDataError):
        _render(grouped={})
    with pytest.raises(NoTimetableDataError):
        _render(grouped={DayOfWeek.MONDAY: []})


def test_print_timetable_hands_complete_document_to_surface() -> None:
    surface = RecordingSurface()

    document = print_timetable(
        _sample_grouped(),
        ordered_days(),
        program="Computer Science",
        year="First Year",
        generated_at=GENERATED_AT,
        surface=surface,
    )

    assert surface.presented == [(document, "Timetable_Computer_Science_First_Year.html")]
    assert document.rstrip().endswith("</html>")


def test_print_timetable_without_entries_presents_nothing() -> None:
    surface = RecordingSurface()

    with pytest.raises(NoTimetableDataError):
        print_timetable(
            {},
            ordered_days(),
            program="Computer Science",
            year="First Year",
            generated_at=GENERATED_AT,
            surface=surface,
        )
    assert surface.presented == []


def test_print_timetable_reports_unavailable_surface() -> None:
    with pytest.raises(PresentationUnavailableError):
        print_timetable(
            _sample_grouped(),
            ordered_days(),
            program="Computer Science",
            year="First Year",
            generated_at=GENERATED_AT,
            surface=RecordingSurface(fail=True),
        )


@pytest.mark.parametrize(
    "program, year, extension, expected",
    [
        ("Computer Science", YearOfStudy.FIRST, None, "Timetable_Computer_Science_First_Year"),
        ("CS", "PhD", "pdf", "Timetable_CS_PhD.pdf"),
        ("  Civil  Eng. ", "Masters", "html", "Timetable_Civil_Eng._Masters.html"),
        ("Arts/Design", "Second Year", None, "Timetable_ArtsDesign_Second_Year"),
        ("Génie Civil", "First Year", None, "Timetable_Génie_Civil_First_Year"),
        ("物理", YearOfStudy.PHD, "html", "Timetable_物理_PhD.html"),
        ("A:B*?\"<>|\\C", "Masters", None, "Timetable_ABC_Masters"),
    ],
)
def test_export_filename(program, year, extension, expected) -> None:
    assert export_filename(program, year, extension) == expected


def test_export_filename_keeps_programs_apart() -> None:
    assert export_filename("Génie Civil", "First Year") != export_filename("Gnie Civil", "First Year")
