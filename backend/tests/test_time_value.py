import pytest

from timetable.services.time_value import TimeValue, is_valid_range, normalize_time_text


def test_parse_pads_short_values():
    assert TimeValue.parse("9:5").format() == "09:05"
    assert TimeValue.parse("9:05").format() == "09:05"
    assert TimeValue.parse("14:30").format() == "14:30"


def test_parse_drops_seconds():
    value = TimeValue.parse("08:15:59")
    assert (value.hour, value.minute) == (8, 15)
    assert value.format() == "08:15"


@pytest.mark.parametrize("raw", [None, "", "   ", 930, object()])
def test_missing_or_non_text_input_defaults_to_nine(raw):
    assert TimeValue.parse(raw).format() == "09:00"


def test_malformed_parts_fall_back_per_component():
    assert TimeValue.parse("abc").format() == "09:00"
    assert TimeValue.parse("abc:45").format() == "09:45"
    assert TimeValue.parse("11:xx").format() == "11:00"
    assert TimeValue.parse("7").format() == "07:00"


def test_out_of_range_values_are_clamped():
    assert TimeValue.parse("25:75").format() == "23:59"
    assert TimeValue.parse("-3:10").format() == "00:10"
    assert TimeValue.of(30, -1).format() == "23:00"


def test_direct_construction_is_clamped_too():
    value = TimeValue(25, 99)
    assert (value.hour, value.minute) == (23, 59)
    assert TimeValue(hour=-1, minute=-5) == TimeValue.of(0, 0)


def test_leading_digits_are_read_before_junk():
    assert TimeValue.parse(" 8h:30min").format() == "08:30"
    assert TimeValue.parse("+7:5").format() == "07:05"


def test_minutes_and_comparison():
    early = TimeValue.parse("08:45")
    late = TimeValue.parse("10:00")
    assert early.to_minutes() == 525
    assert early.compare(late) == -1
    assert late.compare(early) == 1
    assert early.compare(TimeValue.parse("8:45")) == 0
    assert early < late
    assert sorted([late, early]) == [early, late]
    assert str(late) == "10:00"


def test_valid_range_requires_end_strictly_after_start():
    start = TimeValue.parse("09:00")
    assert is_valid_range(start, TimeValue.parse("09:01"))
    assert not is_valid_range(start, TimeValue.parse("09:00"))
    assert not is_valid_range(start, TimeValue.parse("08:59"))
    # No overnight wraparound.
    assert not is_valid_range(TimeValue.parse("23:00"), TimeValue.parse("01:00"))


def test_valid_range_matches_minute_comparison_everywhere():
    samples = [TimeValue.of(hour, minute) for hour in (0, 9, 12, 23) for minute in (0, 30, 59)]
    for start in samples:
        for end in samples:
            assert is_valid_range(start, end) == (end.to_minutes() > start.to_minutes())


def test_normalize_time_text():
    assert normalize_time_text("7:00:00") == "07:00"
    assert normalize_time_text(None) == "09:00"
