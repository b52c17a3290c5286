from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date, datetime, timedelta
import logging

logger = logging.getLogger(__name__)

QUARTER_COUNT = 4
DEFAULT_QUARTER_WEEKS = (8, 8, 10, 8)
QUARTER_WEEK_FIELDS = tuple(f"quarter{number}_weeks" for number in range(1, QUARTER_COUNT + 1))


@dataclass(frozen=True)
class QuarterRange:
    number: int
    start: date
    end: date

    def contains(self, value: date) -> bool:
        return self.start <= value <= self.end

    @property
    def days(self) -> int:
        return (self.end - self.start).days + 1


def _read_field(year: object, name: str):
    if isinstance(year, Mapping):
        return year.get(name)
    return getattr(year, name, None)


def _coerce_date(value: object) -> date | None:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and value.strip():
        try:
            # API payloads may carry a full timestamp; only the date part matters.
            return date.fromisoformat(value.strip()[:10])
        except ValueError:
            return None
    return None


def _coerce_weeks(value: object, default: int) -> int | None:
    if value is None:
        return default
    if isinstance(value, bool):
        return None
    try:
        weeks = int(value)
    except (TypeError, ValueError):
        return None
    if weeks != value and not isinstance(value, str):
        return None
    return weeks if weeks >= 1 else None


def quarter_weeks(year: object) -> tuple[int, ...] | None:
    """Return the four week counts of ``year`` or ``None`` when any is unusable."""
    weeks: list[int] = []
    for field_name, default in zip(QUARTER_WEEK_FIELDS, DEFAULT_QUARTER_WEEKS):
        value = _coerce_weeks(_read_field(year, field_name), default)
        if value is None:
            return None
        weeks.append(value)
    return tuple(weeks)


def compute_quarters(year: object) -> list[QuarterRange] | None:
    """Partition an academic year into four contiguous quarters with inclusive ends.

    ``year`` may be a mapping shaped like the academic-year API record or any
    object exposing ``start_date`` and ``quarterN_weeks`` attributes. Returns
    ``None`` when the year is absent or malformed.
    """
    if year is None:
        return None
    start = _coerce_date(_read_field(year, "start_date"))
    weeks = quarter_weeks(year)
    if start is None or weeks is None:
        return None

    quarters: list[QuarterRange] = []
    current = start
    for number, week_count in enumerate(weeks, start=1):
        end = current + timedelta(days=week_count * 7 - 1)
        quarters.append(QuarterRange(number=number, start=current, end=end))
        current = end + timedelta(days=1)
    return quarters


def classify(value: date, quarters: list[QuarterRange] | None) -> int | None:
    if not quarters:
        return None
    for quarter in quarters:
        if quarter.contains(value):
            return quarter.number
    return None


def current_quarter(year: object, today: date | None = None) -> int | None:
    """Quarter containing ``today`` (evaluated at call time), or ``None``.

    ``None`` is the normal answer outside term time or when no active year is
    configured, not an error.
    """
    quarters = compute_quarters(year)
    if quarters is None:
        logger.debug("No usable academic year; current quarter is unknown")
        return None
    return classify(today or date.today(), quarters)


def year_span(year: object) -> tuple[date, date] | None:
    quarters = compute_quarters(year)
    if quarters is None:
        return None
    return quarters[0].start, quarters[-1].end


def suggest_academic_year(today: date | None = None) -> dict:
    """Draft values for a new academic year relative to ``today``.

    January to May belongs to the year that started last September; from June
    on the suggestion is the year starting this September.
    """
    today = today or date.today()
    start_year = today.year - 1 if today.month <= 5 else today.year
    end_year = start_year + 1
    q1, q2, q3, q4 = DEFAULT_QUARTER_WEEKS
    return {
        "name": f"{start_year}-{end_year} academic year",
        "start_date": date(start_year, 9, 1),
        "end_date": date(end_year, 5, 25),
        "quarter1_weeks": q1,
        "quarter2_weeks": q2,
        "quarter3_weeks": q3,
        "quarter4_weeks": q4,
        "autumn_holiday_start": date(start_year, 10, 27),
        "autumn_holiday_end": date(start_year, 11, 2),
        "winter_holiday_start": date(start_year, 12, 29),
        "winter_holiday_end": date(end_year, 1, 7),
        "spring_holiday_start": date(end_year, 3, 19),
        "spring_holiday_end": date(end_year, 3, 29),
        "is_active": False,
    }
