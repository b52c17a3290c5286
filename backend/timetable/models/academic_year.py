from datetime import date, datetime

from sqlalchemy import Boolean, Date, DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from timetable.db.base import Base


class AcademicYear(Base):
    __tablename__ = "academic_years"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    quarter1_weeks: Mapped[int] = mapped_column(Integer, nullable=False, default=8)
    quarter2_weeks: Mapped[int] = mapped_column(Integer, nullable=False, default=8)
    quarter3_weeks: Mapped[int] = mapped_column(Integer, nullable=False, default=10)
    quarter4_weeks: Mapped[int] = mapped_column(Integer, nullable=False, default=8)
    autumn_holiday_start: Mapped[date | None] = mapped_column(Date, nullable=True)
    autumn_holiday_end: Mapped[date | None] = mapped_column(Date, nullable=True)
    winter_holiday_start: Mapped[date | None] = mapped_column(Date, nullable=True)
    winter_holiday_end: Mapped[date | None] = mapped_column(Date, nullable=True)
    spring_holiday_start: Mapped[date | None] = mapped_column(Date, nullable=True)
    spring_holiday_end: Mapped[date | None] = mapped_column(Date, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), onupdate=func.now())
