from datetime import date
import logging

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy import select, update
from sqlalchemy.orm import Session

from timetable.api.deps import get_db
from timetable.core.exceptions import ResourceNotFoundError
from timetable.models.academic_year import AcademicYear
from timetable.schemas.academic_year import (
    AcademicYearCreate,
    AcademicYearOut,
    AcademicYearQuartersOut,
    AcademicYearUpdate,
    QuarterRangeOut,
)
from timetable.services.academic_calendar import classify, compute_quarters, suggest_academic_year

logger = logging.getLogger(__name__)

router = APIRouter()

NULLABLE_FIELDS = {
    "end_date",
    "autumn_holiday_start",
    "autumn_holiday_end",
    "winter_holiday_start",
    "winter_holiday_end",
    "spring_holiday_start",
    "spring_holiday_end",
}


def get_year_or_404(db: Session, year_id: int) -> AcademicYear:
    year = db.get(AcademicYear, year_id)
    if year is None:
        raise ResourceNotFoundError("Academic year", str(year_id))
    return year


def get_active_year(db: Session) -> AcademicYear | None:
    return db.execute(
        select(AcademicYear).where(AcademicYear.is_active.is_(True)).order_by(AcademicYear.start_date.desc())
    ).scalars().first()


def deactivate_other_years(db: Session, year: AcademicYear) -> None:
    # Only one academic year may be active at a time.
    db.execute(
        update(AcademicYear)
        .where(AcademicYear.id != year.id, AcademicYear.is_active.is_(True))
        .values(is_active=False)
    )


@router.get("/", response_model=list[AcademicYearOut])
def list_academic_years(db: Session = Depends(get_db)) -> list[AcademicYearOut]:
    return list(db.execute(select(AcademicYear).order_by(AcademicYear.start_date.desc())).scalars())


@router.post("/", response_model=AcademicYearOut, status_code=status.HTTP_201_CREATED)
def create_academic_year(payload: AcademicYearCreate, db: Session = Depends(get_db)) -> AcademicYearOut:
    year = AcademicYear(**payload.model_dump())
    db.add(year)
    db.flush()
    if year.is_active:
        deactivate_other_years(db, year)
    db.commit()
    db.refresh(year)
    logger.info("Created academic year %s (%s)", year.id, year.name)
    return year


@router.get("/current/", response_model=AcademicYearOut)
def get_current_academic_year(db: Session = Depends(get_db)) -> AcademicYearOut:
    year = get_active_year(db)
    if year is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No active academic year")
    return year


@router.get("/suggested/", response_model=AcademicYearCreate)
def get_suggested_academic_year() -> AcademicYearCreate:
    return AcademicYearCreate(**suggest_academic_year(date.today()))


@router.get("/{year_id}/", response_model=AcademicYearOut)
def get_academic_year(year_id: int, db: Session = Depends(get_db)) -> AcademicYearOut:
    return get_year_or_404(db, year_id)


@router.patch("/{year_id}/", response_model=AcademicYearOut)
def update_academic_year(
    year_id: int,
    payload: AcademicYearUpdate,
    db: Session = Depends(get_db),
) -> AcademicYearOut:
    year = get_year_or_404(db, year_id)

    data = payload.model_dump(exclude_unset=True)
    for key in [key for key, value in data.items() if value is None and key not in NULLABLE_FIELDS]:
        data.pop(key)

    merged = AcademicYearOut.model_validate(year).model_dump() | data
    try:
        AcademicYearCreate.model_validate(merged)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)) from exc

    for key, value in data.items():
        setattr(year, key, value)
    if data.get("is_active"):
        deactivate_other_years(db, year)
    db.commit()
    db.refresh(year)
    return year


@router.delete("/{year_id}/", status_code=status.HTTP_204_NO_CONTENT)
def delete_academic_year(year_id: int, db: Session = Depends(get_db)) -> Response:
    year = get_year_or_404(db, year_id)
    db.delete(year)
    db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{year_id}/quarters/", response_model=AcademicYearQuartersOut)
def get_academic_year_quarters(year_id: int, db: Session = Depends(get_db)) -> AcademicYearQuartersOut:
    year = get_year_or_404(db, year_id)
    quarters = compute_quarters(year) or []
    return AcademicYearQuartersOut(
        academic_year_id=year.id,
        quarters=[
            QuarterRangeOut(number=item.number, start=item.start, end=item.end, weeks=item.days // 7)
            for item in quarters
        ],
        current_quarter=classify(date.today(), quarters),
    )
