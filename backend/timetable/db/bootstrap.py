from __future__ import annotations

import logging

from sqlalchemy import inspect, text

import timetable.models  # noqa: F401
from timetable.db.base import Base
from timetable.db.session import engine

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS: dict[str, set[str]] = {
    "academic_years": {
        "id",
        "start_date",
        "quarter1_weeks",
        "quarter2_weeks",
        "quarter3_weeks",
        "quarter4_weeks",
        "is_active",
    },
    "schedule_slots": {"id", "subject_group", "day_of_week", "start_time", "end_time", "room", "quarter"},
}


def _ensure_schedule_slot_quarter_column() -> None:
    # Databases created before quarter scoping existed lack the column.
    with engine.begin() as connection:
        inspector = inspect(connection)
        if "schedule_slots" not in set(inspector.get_table_names()):
            return
        column_names = {item["name"] for item in inspector.get_columns("schedule_slots")}
        if "quarter" in column_names:
            return
        connection.execute(text("ALTER TABLE schedule_slots ADD COLUMN quarter SMALLINT"))


def find_missing_schema(connection) -> tuple[list[str], list[str]]:
    """Required tables and ``table.column`` names absent from the database."""
    inspector = inspect(connection)
    table_names = set(inspector.get_table_names())
    missing_tables = sorted(name for name in REQUIRED_COLUMNS if name not in table_names)
    missing_columns: list[str] = []
    for table_name, required in REQUIRED_COLUMNS.items():
        if table_name not in table_names:
            continue
        existing = {item["name"] for item in inspector.get_columns(table_name)}
        missing_columns.extend(f"{table_name}.{column_name}" for column_name in sorted(required - existing))
    return missing_tables, missing_columns


def _assert_required_columns() -> None:
    with engine.begin() as connection:
        missing_tables, missing_columns = find_missing_schema(connection)
    if missing_tables:
        raise RuntimeError(f"Missing required tables: {', '.join(missing_tables)}")
    if missing_columns:
        raise RuntimeError(f"Missing required columns: {', '.join(missing_columns)}")


def ensure_runtime_schema_compatibility() -> None:
    try:
        # Ensure missing tables are present before additive compatibility patches.
        Base.metadata.create_all(bind=engine)
        _ensure_schedule_slot_quarter_column()
        _assert_required_columns()
    except Exception as exc:  # pragma: no cover - runtime environment dependent
        logger.exception("Runtime schema compatibility bootstrap failed")
        raise RuntimeError("Runtime schema compatibility bootstrap failed") from exc
