from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import Literal
from urllib.parse import quote

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import Response
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from core.config import settings
from core.database import get_db
from models.timetable_entry import TimetableEntry
from schemas.timetable import (
    DayScheduleOut,
    FilterOptionsOut,
    TimetableEntryCreate,
    TimetableEntryOut,
    TimetableViewOut,
)
from services.document import NoTimetableDataError, export_filename, render_timetable_document
from services.pdf_export import render_timetable_pdf
from services.projection import (
    STATUS_OK,
    TimetableProjection,
    distinct_filter_options,
    ordered_days,
    project_timetable,
)


logger = logging.getLogger(__name__)


router = APIRouter()


def _load_entries(db: Session) -> list[TimetableEntry]:
    # Store-side ordering is advisory; projections re-sort by time within a day.
    q = select(TimetableEntry).order_by(TimetableEntry.day.asc(), TimetableEntry.time.asc())
    return list(db.execute(q).scalars().all())


def _project(db: Session, program: str | None, year: str | None) -> TimetableProjection:
    try:
        return project_timetable(_load_entries(db), program, year)
    except ValueError:
        raise HTTPException(status_code=422, detail="INVALID_YEAR_OF_STUDY")


def _get_entry_or_404(db: Session, entry_id: uuid.UUID) -> TimetableEntry:
    entry = db.get(TimetableEntry, entry_id)
    if entry is None:
        raise HTTPException(status_code=404, detail="ENTRY_NOT_FOUND")
    return entry


def _payload_to_columns(payload: TimetableEntryCreate) -> dict:
    data = payload.model_dump()
    data["year_of_study"] = payload.year_of_study.value
    data["day"] = payload.day.value
    return data


def _content_disposition(filename: str) -> str:
    # Latin-1 only header: ASCII fallback plus the RFC 5987 UTF-8 form for non-ASCII names.
    fallback = filename.encode("ascii", "replace").decode("ascii").replace("?", "_").replace('"', "")
    return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{quote(filename, safe='')}"


@router.get("/entries", response_model=list[TimetableEntryOut])
def list_entries(db: Session = Depends(get_db)) -> list[TimetableEntryOut]:
    return _load_entries(db)


@router.post("/entries", response_model=TimetableEntryOut, status_code=201)
def create_entry(
    payload: TimetableEntryCreate,
    db: Session = Depends(get_db),
) -> TimetableEntryOut:
    entry = TimetableEntry(**_payload_to_columns(payload))
    db.add(entry)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.warning("Rejected timetable entry insert (course_code=%s)", payload.course_code, exc_info=True)
        raise HTTPException(status_code=409, detail="CONFLICT")
    db.refresh(entry)
    logger.info("Created timetable entry id=%s (%s %s %s)", entry.id, entry.course_code, entry.day, entry.time)
    return entry


@router.put("/entries/{entry_id}", response_model=TimetableEntryOut)
def replace_entry(
    entry_id: uuid.UUID,
    payload: TimetableEntryCreate,
    db: Session = Depends(get_db),
) -> TimetableEntryOut:
    entry = _get_entry_or_404(db, entry_id)

    for k, v in _payload_to_columns(payload).items():
        setattr(entry, k, v)

    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=409, detail="CONFLICT")
    db.refresh(entry)
    logger.info("Replaced timetable entry id=%s", entry.id)
    return entry


@router.delete("/entries/{entry_id}")
def delete_entry(
    entry_id: uuid.UUID,
    db: Session = Depends(get_db),
) -> dict:
    entry = _get_entry_or_404(db, entry_id)
    db.delete(entry)
    db.commit()
    logger.info("Deleted timetable entry id=%s", entry_id)
    return {"ok": True}


@router.get("/filters", response_model=FilterOptionsOut)
def get_filter_options(db: Session = Depends(get_db)) -> FilterOptionsOut:
    options = distinct_filter_options(_load_entries(db))
    return FilterOptionsOut(programs=options.programs, years=options.years)


@router.get("/view", response_model=TimetableViewOut)
def get_timetable_view(
    program: str | None = Query(default=None),
    year: str | None = Query(default=None),
    db: Session = Depends(get_db),
) -> TimetableViewOut:
    projection = _project(db, program, year)
    return TimetableViewOut(
        status=projection.status,
        program=projection.program,
        year=projection.year,
        days=[
            DayScheduleOut(day=day, entries=[TimetableEntryOut.model_validate(e) for e in bucket])
            for day, bucket in projection.iter_days()
        ],
    )


@router.get("/export")
def export_timetable(
    program: str | None = Query(default=None),
    year: str | None = Query(default=None),
    fmt: Literal["html", "pdf"] = Query(default="html", alias="format"),
    db: Session = Depends(get_db),
) -> Response:
    projection = _project(db, program, year)
    if projection.status != STATUS_OK:
        raise HTTPException(status_code=404, detail="NO_DATA")

    generated_at = datetime.now(timezone.utc)
    render_kwargs = dict(
        program=projection.program,
        year=projection.year,
        generated_at=generated_at,
        title=settings.document_title,
    )
    try:
        if fmt == "pdf":
            body: str | bytes = render_timetable_pdf(projection.by_day, ordered_days(), **render_kwargs)
            media_type = "application/pdf"
        else:
            body = render_timetable_document(projection.by_day, ordered_days(), **render_kwargs)
            media_type = "text/html; charset=utf-8"
    except NoTimetableDataError:
        raise HTTPException(status_code=404, detail="NO_DATA")

    filename = export_filename(projection.program, projection.year, fmt)
    logger.info("Exported %s (%d entries)", filename, len(projection.entries))
    return Response(
        content=body,
        media_type=media_type,
        headers={"Content-Disposition": _content_disposition(filename)},
    )
