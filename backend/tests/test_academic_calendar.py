from datetime import date, timedelta

import pytest

from timetable.services.academic_calendar import (
    classify,
    compute_quarters,
    current_quarter,
    suggest_academic_year,
    year_span,
)


def make_year(start="2024-09-01", weeks=(8, 8, 10, 8)):
    return {
        "start_date": start,
        "quarter1_weeks": weeks[0],
        "quarter2_weeks": weeks[1],
        "quarter3_weeks": weeks[2],
        "quarter4_weeks": weeks[3],
    }


def test_default_school_year_quarters():
    quarters = compute_quarters(make_year())

    assert [(q.number, q.start, q.end) for q in quarters] == [
        (1, date(2024, 9, 1), date(2024, 10, 26)),
        (2, date(2024, 10, 27), date(2024, 12, 21)),
        (3, date(2024, 12, 22), date(2025, 3, 1)),
        (4, date(2025, 3, 2), date(2025, 4, 26)),
    ]


@pytest.mark.parametrize("weeks", [(8, 8, 10, 8), (1, 1, 1, 1), (1, 13, 2, 52), (5, 9, 11, 7)])
def test_quarters_are_contiguous_and_cover_all_weeks(weeks):
    quarters = compute_quarters(make_year(start="2023-08-28", weeks=weeks))

    assert len(quarters) == 4
    assert quarters[0].start == date(2023, 8, 28)
    for previous, following in zip(quarters, quarters[1:]):
        assert following.start == previous.end + timedelta(days=1)
    for quarter, week_count in zip(quarters, weeks):
        assert quarter.days == week_count * 7
    total = (quarters[-1].end - quarters[0].start).days + 1
    assert total == sum(weeks) * 7


def test_missing_week_counts_use_defaults():
    quarters = compute_quarters({"start_date": "2024-09-01"})
    assert [q.days // 7 for q in quarters] == [8, 8, 10, 8]


def test_accepts_objects_and_date_values():
    class Year:
        start_date = date(2024, 9, 1)
        quarter1_weeks = 8
        quarter2_weeks = 8
        quarter3_weeks = 10
        quarter4_weeks = 8

    assert compute_quarters(Year()) == compute_quarters(make_year())


@pytest.mark.parametrize(
    "year",
    [
        None,
        {},
        {"start_date": None},
        {"start_date": "not-a-date"},
        make_year(weeks=(0, 8, 10, 8)),
        make_year(weeks=(8, -1, 10, 8)),
        make_year(weeks=(8, 8, "ten", 8)),
        make_year(weeks=(8, 8, 10, 2.5)),
    ],
)
def test_malformed_year_yields_no_quarters(year):
    assert compute_quarters(year) is None
    assert current_quarter(year, today=date(2024, 10, 1)) is None


def test_classify_inclusive_boundaries():
    quarters = compute_quarters(make_year())

    assert classify(date(2024, 9, 1), quarters) == 1
    assert classify(date(2024, 10, 26), quarters) == 1
    assert classify(date(2024, 10, 27), quarters) == 2
    assert classify(date(2025, 1, 15), quarters) == 3
    assert classify(date(2025, 4, 26), quarters) == 4


def test_classify_outside_year_is_none():
    quarters = compute_quarters(make_year())

    assert classify(date(2024, 8, 31), quarters) is None
    assert classify(date(2025, 4, 27), quarters) is None
    assert classify(date(2025, 7, 1), quarters) is None
    assert classify(date(2024, 10, 1), None) is None


def test_current_quarter_uses_given_today():
    year = make_year()
    assert current_quarter(year, today=date(2024, 11, 5)) == 2
    assert current_quarter(year, today=date(2025, 6, 1)) is None


def test_current_quarter_accepts_api_timestamps():
    year = make_year(start="2024-09-01T00:00:00Z")
    assert current_quarter(year, today=date(2024, 9, 2)) == 1


def test_year_span():
    assert year_span(make_year()) == (date(2024, 9, 1), date(2025, 4, 26))
    assert year_span(None) is None


@pytest.mark.parametrize(
    "today, start_year",
    [
        (date(2025, 1, 10), 2024),
        (date(2025, 5, 31), 2024),
        (date(2025, 6, 1), 2025),
        (date(2025, 8, 15), 2025),
        (date(2025, 9, 1), 2025),
        (date(2025, 12, 31), 2025),
    ],
)
def test_suggested_year_follows_school_calendar(today, start_year):
    suggestion = suggest_academic_year(today)

    assert suggestion["name"] == f"{start_year}-{start_year + 1} academic year"
    assert suggestion["start_date"] == date(start_year, 9, 1)
    assert suggestion["end_date"] == date(start_year + 1, 5, 25)
    assert suggestion["winter_holiday_start"] == date(start_year, 12, 29)
    assert suggestion["winter_holiday_end"] == date(start_year + 1, 1, 7)
    assert suggestion["is_active"] is False
    assert [suggestion[f"quarter{n}_weeks"] for n in range(1, 5)] == [8, 8, 10, 8]
