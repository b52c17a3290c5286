from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, Field, model_validator

HOLIDAY_PERIODS = ("autumn", "winter", "spring")


def _check_holidays(values: dict[str, date | None]) -> None:
    for period in HOLIDAY_PERIODS:
        start = values.get(f"{period}_holiday_start")
        end = values.get(f"{period}_holiday_end")
        if start is not None and end is not None and end < start:
            raise ValueError(f"{period}_holiday_end must not be before {period}_holiday_start")


class AcademicYearBase(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    start_date: date
    end_date: date | None = None
    quarter1_weeks: int = Field(default=8, ge=1, le=52)
    quarter2_weeks: int = Field(default=8, ge=1, le=52)
    quarter3_weeks: int = Field(default=10, ge=1, le=52)
    quarter4_weeks: int = Field(default=8, ge=1, le=52)
    autumn_holiday_start: date | None = None
    autumn_holiday_end: date | None = None
    winter_holiday_start: date | None = None
    winter_holiday_end: date | None = None
    spring_holiday_start: date | None = None
    spring_holiday_end: date | None = None
    is_active: bool = False


class AcademicYearCreate(AcademicYearBase):
    @model_validator(mode="after")
    def validate_dates(self) -> "AcademicYearCreate":
        if self.end_date is not None and self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        _check_holidays(self.model_dump())
        return self


class AcademicYearUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=100)
    start_date: date | None = None
    end_date: date | None = None
    quarter1_weeks: int | None = Field(default=None, ge=1, le=52)
    quarter2_weeks: int | None = Field(default=None, ge=1, le=52)
    quarter3_weeks: int | None = Field(default=None, ge=1, le=52)
    quarter4_weeks: int | None = Field(default=None, ge=1, le=52)
    autumn_holiday_start: date | None = None
    autumn_holiday_end: date | None = None
    winter_holiday_start: date | None = None
    winter_holiday_end: date | None = None
    spring_holiday_start: date | None = None
    spring_holiday_end: date | None = None
    is_active: bool | None = None


class AcademicYearOut(AcademicYearBase):
    id: int
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = {"from_attributes": True}


class QuarterRangeOut(BaseModel):
    number: int
    start: date
    end: date
    weeks: int


class AcademicYearQuartersOut(BaseModel):
    academic_year_id: int
    quarters: list[QuarterRangeOut]
    current_quarter: int | None = None
