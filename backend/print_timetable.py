from __future__ import annotations

"""Open the printable timetable for one program/year in the system browser.

Usage:
    python print_timetable.py --program "Computer Science" --year "First Year"
    python print_timetable.py --program "Computer Science" --year "First Year" --format pdf
"""

import argparse
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path

from sqlalchemy import select

from core.config import settings
from core.database import DatabaseUnavailableError, SessionLocal, validate_db_connection
from core.logging import setup_logging
from models.enums import YEAR_LABELS
from models.timetable_entry import TimetableEntry
from services.document import DocumentError, export_filename, print_timetable
from services.pdf_export import render_timetable_pdf
from services.print_surface import BrowserPrintSurface
from services.projection import STATUS_NO_FILTER_SELECTED, STATUS_NO_MATCHING_ENTRIES, ordered_days, project_timetable


logger = logging.getLogger("print_timetable")


def _fetch_entries() -> list[TimetableEntry]:
    with SessionLocal() as db:
        validate_db_connection(db)
        q = select(TimetableEntry).order_by(TimetableEntry.day.asc(), TimetableEntry.time.asc())
        return list(db.execute(q).scalars().all())


def _save_pdf(projection, generated_at: datetime, export_dir: Path) -> Path:
    pdf = render_timetable_pdf(
        projection.by_day,
        ordered_days(),
        program=projection.program,
        year=projection.year,
        generated_at=generated_at,
        title=settings.document_title,
    )
    export_dir.mkdir(parents=True, exist_ok=True)
    path = export_dir / export_filename(projection.program, projection.year, "pdf")
    path.write_bytes(pdf)
    return path


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Print or export a class timetable")
    parser.add_argument("--program", default="", help="Program of study, e.g. 'Computer Science'")
    parser.add_argument("--year", default="", choices=("",) + YEAR_LABELS, help="Year of study")
    parser.add_argument("--format", choices=("html", "pdf"), default="html")
    parser.add_argument("--export-dir", type=Path, default=None, help="Where documents are written")
    args = parser.parse_args(argv)

    setup_logging(environment=settings.environment, log_dir=settings.log_dir)
    export_dir = args.export_dir or settings.export_dir

    try:
        entries = _fetch_entries()
    except DatabaseUnavailableError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1

    projection = project_timetable(entries, args.program, args.year)
    if projection.status == STATUS_NO_FILTER_SELECTED:
        print("ERROR: select both --program and --year", file=sys.stderr)
        return 1
    if projection.status == STATUS_NO_MATCHING_ENTRIES:
        print("ERROR: no timetable entries found for the selected criteria", file=sys.stderr)
        return 1

    generated_at = datetime.now(timezone.utc)
    try:
        if args.format == "pdf":
            path = _save_pdf(projection, generated_at, export_dir)
            print(f"OK: saved {path}")
            return 0

        print_timetable(
            projection.by_day,
            ordered_days(),
            program=projection.program,
            year=projection.year,
            generated_at=generated_at,
            surface=BrowserPrintSurface(export_dir),
            title=settings.document_title,
        )
    except DocumentError as exc:
        logger.warning("Print failed: %s", exc)
        print(f"ERROR: {exc}. Allow pop-ups / a browser and retry.", file=sys.stderr)
        return 1
    except OSError as exc:
        print(f"ERROR: could not write export: {exc}", file=sys.stderr)
        return 1

    print(f"OK: opened {export_filename(projection.program, projection.year, 'html')}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
