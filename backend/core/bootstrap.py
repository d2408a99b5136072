from __future__ import annotations

import logging

from sqlalchemy.engine import Engine

from core.database import ENGINE
from models.base import Base
import models  # noqa: F401  (registers tables on Base.metadata)


logger = logging.getLogger(__name__)


def ensure_schema(engine: Engine | None = None) -> None:
    """Create missing tables (currently just ``timetable_entries``).

    Idempotent. Production databases are normally provisioned with
    ``migrations/001_create_timetable_entries.py`` instead.
    """

    engine = engine or ENGINE
    Base.metadata.create_all(engine)
    logger.info("Schema ensured on %s", engine.url.render_as_string(hide_password=True))
