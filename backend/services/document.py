"""Printable timetable document.

The document is one self-contained HTML page (inline styles, no external
assets): a header block followed by one section per scheduled day. Rendering
is deterministic for a given projection and timestamp.
"""

from __future__ import annotations

import re
from datetime import datetime
from html import escape
from typing import TYPE_CHECKING, Any, Mapping, Sequence

from models.enums import DayOfWeek, YearOfStudy

if TYPE_CHECKING:
    from services.print_surface import PrintSurface


DEFAULT_TITLE = "Class Timetable"


class DocumentError(RuntimeError):
    """Base class for printable document failures."""


class NoTimetableDataError(DocumentError):
    """Raised when there is nothing to render (empty projection)."""


class PresentationUnavailableError(DocumentError):
    """Raised when the host cannot open a print/export surface."""


_STYLE = """
body { font-family: Helvetica, Arial, sans-serif; color: #111827; margin: 24px; }
h1 { color: #4f46e5; font-size: 24px; margin: 0 0 8px 0; }
.meta { margin: 2px 0; font-size: 13px; }
.day { margin-top: 20px; page-break-inside: avoid; }
.day h2 { color: #374151; font-size: 18px; border-bottom: 1px solid #374151; padding-bottom: 4px; }
.course { margin: 8px 0 12px 0; }
.course-name { margin: 0; font-weight: bold; }
.course-detail { margin: 2px 0 0 0; color: #6b7280; font-size: 13px; }
@media print { body { margin: 0; } }
""".strip()

_AUTO_PRINT = '<script>window.addEventListener("load", function () { window.print(); });</script>'

# Path separators, characters reserved on common filesystems, and control characters.
_UNSAFE_FILENAME_CHARS = re.compile(r"[/\\:*?\"<>|\x00-\x1f\x7f]")


def _label(value: Any) -> str:
    return value.value if isinstance(value, (DayOfWeek, YearOfStudy)) else str(value)


def export_filename(program: str, year: YearOfStudy | str, extension: str | None = None) -> str:
    """``Timetable_<program>_<year>`` with whitespace runs turned into ``_``.

    Unicode letters are kept; only path separators, reserved and control
    characters are dropped.
    """

    parts = ["Timetable", str(program).strip(), _label(year).strip()]
    stem = "_".join(re.sub(r"\s+", "_", p) for p in parts)
    stem = _UNSAFE_FILENAME_CHARS.sub("", stem)
    return f"{stem}.{extension}" if extension else stem


def count_entries(grouped: Mapping[DayOfWeek, Sequence[Any]]) -> int:
    return sum(len(bucket) for bucket in grouped.values())


def _render_entry(entry: Any) -> list[str]:
    return [
        '<div class="course">',
        f'<p class="course-name">{escape(entry.course_name)} ({escape(entry.course_code)})</p>',
        f'<p class="course-detail">Time: {escape(entry.time)} | Venue: {escape(entry.venue)}</p>',
        "</div>",
    ]


def render_timetable_document(
    grouped: Mapping[DayOfWeek, Sequence[Any]],
    days: Sequence[DayOfWeek],
    *,
    program: str,
    year: YearOfStudy | str,
    generated_at: datetime,
    title: str = DEFAULT_TITLE,
    auto_print: bool = True,
) -> str:
    """Render a grouped projection as a standalone HTML document.

    ``grouped`` is the day -> entries mapping from ``group_by_day`` and ``days``
    the display order; buckets are rendered as given (already time-sorted).

    Raises ``NoTimetableDataError`` when ``grouped`` holds no entries.
    """

    if count_entries(grouped) == 0:
        raise NoTimetableDataError("No timetable entries to render")

    year_label = _label(year)
    lines = [
        "<!DOCTYPE html>",
        '<html lang="en">',
        "<head>",
        '<meta charset="utf-8">',
        f"<title>{escape(export_filename(program, year))}</title>",
        f"<style>\n{_STYLE}\n</style>",
        "</head>",
        "<body>",
        '<header class="timetable-header">',
        f"<h1>{escape(title)}</h1>",
        f'<p class="meta">Program: {escape(program)}</p>',
        f'<p class="meta">Year of Study: {escape(year_label)}</p>',
        f'<p class="meta">Generated on: {generated_at.strftime("%Y-%m-%d")}</p>',
        "</header>",
    ]

    for day in days:
        bucket = grouped.get(day)
        if not bucket:
            continue
        day_label = _label(day)
        lines.append(f'<section class="day" data-day="{escape(day_label)}">')
        lines.append(f"<h2>{escape(day_label)}</h2>")
        for entry in bucket:
            lines.extend(_render_entry(entry))
        lines.append("</section>")

    if auto_print:
        lines.append(_AUTO_PRINT)
    lines.extend(["</body>", "</html>"])
    return "\n".join(lines) + "\n"


def print_timetable(
    grouped: Mapping[DayOfWeek, Sequence[Any]],
    days: Sequence[DayOfWeek],
    *,
    program: str,
    year: YearOfStudy | str,
    generated_at: datetime,
    surface: PrintSurface,
    title: str = DEFAULT_TITLE,
) -> str:
    """Build the full document, then hand it to ``surface`` to print or save.

    The surface is fire-and-forget: its outcome is not awaited. Returns the
    document. ``NoTimetableDataError`` is raised before anything is presented;
    ``PresentationUnavailableError`` from the surface reaches the caller.
    """

    document = render_timetable_document(
        grouped,
        days,
        program=program,
        year=year,
        generated_at=generated_at,
        title=title,
    )
    surface.present(document, filename=export_filename(program, year, "html"))
    return document
