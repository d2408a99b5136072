from __future__ import annotations

import io
from datetime import datetime
from typing import Any, Mapping, Sequence
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.platypus import HRFlowable, KeepTogether, Paragraph, SimpleDocTemplate, Spacer

from models.enums import DayOfWeek, YearOfStudy
from services.document import DEFAULT_TITLE, NoTimetableDataError, count_entries, export_filename


def _styles() -> dict[str, ParagraphStyle]:
    base = getSampleStyleSheet()
    return {
        "title": ParagraphStyle(
            "TimetableTitle",
            parent=base["Title"],
            fontSize=20,
            leading=24,
            alignment=0,
            textColor=colors.HexColor("#4F46E5"),
            spaceAfter=4 * mm,
        ),
        "meta": ParagraphStyle("TimetableMeta", parent=base["Normal"], fontSize=12, leading=16),
        "day": ParagraphStyle(
            "TimetableDay",
            parent=base["Heading2"],
            fontSize=16,
            leading=20,
            textColor=colors.HexColor("#374151"),
            spaceBefore=6 * mm,
            spaceAfter=1 * mm,
        ),
        "course": ParagraphStyle("TimetableCourse", parent=base["Normal"], fontSize=12, leading=15),
        "detail": ParagraphStyle(
            "TimetableDetail",
            parent=base["Normal"],
            fontSize=11,
            leading=14,
            textColor=colors.HexColor("#6B7280"),
            spaceAfter=3 * mm,
        ),
    }


def render_timetable_pdf(
    grouped: Mapping[DayOfWeek, Sequence[Any]],
    days: Sequence[DayOfWeek],
    *,
    program: str,
    year: YearOfStudy | str,
    generated_at: datetime,
    title: str = DEFAULT_TITLE,
) -> bytes:
    """PDF rendition of the printable timetable.

    Same layout rules as the HTML document; ``invariant=1`` keeps the output
    byte-stable for identical input and timestamp.
    """

    if count_entries(grouped) == 0:
        raise NoTimetableDataError("No timetable entries to render")

    year_label = year.value if isinstance(year, YearOfStudy) else str(year)
    styles = _styles()
    buffer = io.BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=A4,
        leftMargin=20 * mm,
        rightMargin=20 * mm,
        topMargin=20 * mm,
        bottomMargin=20 * mm,
        title=export_filename(program, year),
        author=title,
        invariant=1,
    )

    story: list[Any] = [
        Paragraph(escape(title), styles["title"]),
        Paragraph(f"Program: {escape(program)}", styles["meta"]),
        Paragraph(f"Year of Study: {escape(year_label)}", styles["meta"]),
        Paragraph(f"Generated on: {generated_at.strftime('%Y-%m-%d')}", styles["meta"]),
        Spacer(1, 6 * mm),
    ]

    for day in days:
        bucket = grouped.get(day)
        if not bucket:
            continue
        story.append(Paragraph(escape(DayOfWeek(day).value), styles["day"]))
        story.append(HRFlowable(width="100%", thickness=0.5, color=colors.HexColor("#374151"), spaceAfter=3 * mm))
        for entry in bucket:
            story.append(
                KeepTogether(
                    [
                        Paragraph(f"{escape(entry.course_name)} ({escape(entry.course_code)})", styles["course"]),
                        Paragraph(f"Time: {escape(entry.time)} | Venue: {escape(entry.venue)}", styles["detail"]),
                    ]
                )
            )

    doc.build(story)
    return buffer.getvalue()
