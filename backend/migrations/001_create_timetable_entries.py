from __future__ import annotations

"""Create the `timetable_entries` table on the hosted Postgres database.

Safe to run multiple times. Dry run unless --yes is given.
"""

import argparse
import sys
from pathlib import Path

# Allow running this script from any working directory.
BACKEND_DIR = Path(__file__).resolve().parents[1]
if str(BACKEND_DIR) not in sys.path:
    sys.path.insert(0, str(BACKEND_DIR))

from sqlalchemy import text

from core.database import ENGINE
from models.enums import DAY_LABELS, YEAR_LABELS


def _sql_list(values: tuple[str, ...]) -> str:
    return ", ".join("'" + v.replace("'", "''") + "'" for v in values)


def build_statements() -> list[str]:
    return [
        "CREATE EXTENSION IF NOT EXISTS pgcrypto;",
        f"""
        CREATE TABLE IF NOT EXISTS timetable_entries (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            created_at TIMESTAMPTZ NOT NULL DEFAULT now(),
            program_of_study TEXT NOT NULL,
            year_of_study VARCHAR(32) NOT NULL,
            course_code TEXT NOT NULL,
            course_name TEXT NOT NULL,
            venue TEXT NOT NULL,
            day VARCHAR(16) NOT NULL,
            time TEXT NOT NULL,
            CONSTRAINT year_of_study CHECK (year_of_study IN ({_sql_list(YEAR_LABELS)})),
            CONSTRAINT day_of_week CHECK (day IN ({_sql_list(DAY_LABELS)})),
            CONSTRAINT ck_timetable_entries_time CHECK (time ~ '^([01][0-9]|2[0-3]):[0-5][0-9]$')
        );
        """,
        "CREATE INDEX IF NOT EXISTS ix_timetable_entries_program_year "
        "ON timetable_entries (program_of_study, year_of_study);",
    ]


def main() -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument("--yes", action="store_true", help="Actually apply changes")
    args = parser.parse_args()

    statements = build_statements()

    if not args.yes:
        print("Dry run. Re-run with --yes to apply.")
        for s in statements:
            print("---")
            print(s.strip())
        return

    with ENGINE.begin() as conn:
        for s in statements:
            conn.execute(text(s))

    print("OK: timetable_entries ready")


if __name__ == "__main__":
    main()
