"""Seed the suggested academic year and a sample weekly schedule.

Run:
  PYTHONPATH=backend python scripts/seed_academic_year.py
"""

from __future__ import annotations

import os
from datetime import date

from sqlalchemy import delete, select, update

from timetable.db.bootstrap import ensure_runtime_schema_compatibility
from timetable.db.session import SessionLocal
from timetable.models.academic_year import AcademicYear
from timetable.models.schedule_slot import ScheduleSlotRecord
from timetable.services.academic_calendar import compute_quarters, current_quarter, suggest_academic_year

SUBJECT_GROUP = int(os.getenv("SEED_SUBJECT_GROUP", "1"))
ACTIVATE = os.getenv("SEED_ACTIVATE_YEAR", "true").strip().lower() in {"1", "true", "yes", "on"}

SAMPLE_SLOTS = [
    {"day_of_week": 0, "start_time": "09:00", "end_time": "10:30", "room": "101"},
    {"day_of_week": 2, "start_time": "11:00", "end_time": "12:30", "room": "101"},
    {"day_of_week": 4, "start_time": "14:00", "end_time": "15:30", "room": "Lab 2"},
]


def upsert_academic_year(session, values: dict) -> AcademicYear:
    year = session.execute(select(AcademicYear).where(AcademicYear.name == values["name"])).scalars().first()
    if year is None:
        year = AcademicYear(**values)
        session.add(year)
    else:
        for key, value in values.items():
            setattr(year, key, value)
    session.flush()
    if year.is_active:
        session.execute(
            update(AcademicYear).where(AcademicYear.id != year.id).values(is_active=False)
        )
    return year


def replace_sample_slots(session, quarter: int | None) -> int:
    session.execute(delete(ScheduleSlotRecord).where(ScheduleSlotRecord.subject_group == SUBJECT_GROUP))
    for item in SAMPLE_SLOTS:
        session.add(ScheduleSlotRecord(subject_group=SUBJECT_GROUP, quarter=quarter, **item))
    return len(SAMPLE_SLOTS)


def main() -> None:
    ensure_runtime_schema_compatibility()
    today = date.today()
    values = suggest_academic_year(today)
    values["is_active"] = ACTIVATE

    with SessionLocal() as session:
        year = upsert_academic_year(session, values)
        quarter = current_quarter(year, today=today)
        slot_count = replace_sample_slots(session, quarter)
        session.commit()

        print(f"Academic year: {year.name} (active: {year.is_active})")
        for item in compute_quarters(year) or []:
            print(f"  Quarter {item.number}: {item.start.isoformat()} - {item.end.isoformat()}")
        print(f"Current quarter: {quarter or 'outside the academic year'}")
        print(f"Subject group {SUBJECT_GROUP}: {slot_count} slot(s) seeded")


if __name__ == "__main__":
    main()
