from __future__ import annotations

import os
import uuid
from datetime import datetime, timezone
from types import SimpleNamespace

# Never let the suite reach a configured hosted database.
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ENVIRONMENT"] = "test"
os.environ["AUTO_CREATE_SCHEMA"] = "false"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from core.database import get_db, get_engine
from main import app
from models.base import Base


def make_entry(
    *,
    program: str = "Computer Science",
    year: str = "First Year",
    code: str = "CS101",
    name: str = "Intro to Programming",
    venue: str = "Hall A",
    day: str = "Monday",
    time: str = "09:00",
) -> SimpleNamespace:
    return SimpleNamespace(
        id=uuid.uuid4(),
        created_at=datetime(2026, 1, 5, 8, 0, tzinfo=timezone.utc),
        program_of_study=program,
        year_of_study=year,
        course_code=code,
        course_name=name,
        venue=venue,
        day=day,
        time=time,
    )


def entry_payload(**overrides) -> dict:
    payload = {
        "program_of_study": "Computer Science",
        "year_of_study": "First Year",
        "course_code": "cs101",
        "course_name": "Intro to Programming",
        "venue": "Hall A",
        "day": "Monday",
        "time": "09:00",
    }
    payload.update(overrides)
    return payload


@pytest.fixture()
def engine():
    engine = get_engine("sqlite://")
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def client(engine):
    TestingSession = sessionmaker(bind=engine, autoflush=False, autocommit=False)

    def _get_test_db():
        db = TestingSession()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = _get_test_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
