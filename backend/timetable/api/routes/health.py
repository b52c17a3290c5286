from __future__ import annotations

from datetime import date
import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from timetable.api.deps import get_db
from timetable.api.routes.academic_years import get_active_year
from timetable.db.bootstrap import find_missing_schema
from timetable.models.schedule_slot import ScheduleSlotRecord
from timetable.services.academic_calendar import current_quarter

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/health")
def health() -> dict:
    return {"status": "ok"}


@router.get("/health/live")
def health_live() -> dict:
    return {"status": "ok", "date": date.today().isoformat()}


@router.get("/health/ready")
def health_ready(db: Session = Depends(get_db)) -> JSONResponse:
    """Schema readiness plus the calendar state slot editors will load with."""
    try:
        missing_tables, missing_columns = find_missing_schema(db.connection())
    except SQLAlchemyError as exc:
        logger.warning("Readiness check could not reach the database: %s", exc)
        return JSONResponse(status_code=503, content={"status": "unavailable", "error": str(exc)})

    payload: dict = {
        "status": "ok",
        "schema": {"missing_tables": missing_tables, "missing_columns": missing_columns},
        "calendar": None,
    }
    if missing_tables or missing_columns:
        payload["status"] = "degraded"
        return JSONResponse(status_code=503, content=payload)

    year = get_active_year(db)
    payload["calendar"] = {
        "active_academic_year": year.name if year else None,
        "current_quarter": current_quarter(year) if year else None,
        "schedule_slots": db.execute(select(func.count(ScheduleSlotRecord.id))).scalar_one(),
    }
    return JSONResponse(status_code=200, content=payload)
