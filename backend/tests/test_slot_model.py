import pytest

from timetable.services.slot_model import ScheduleSlot, ScheduleSlotModel
from timetable.services.time_value import TimeValue


def slot(day=0, start="09:00", end="10:30", room=None, quarter=None, slot_id=None):
    return ScheduleSlot(
        id=slot_id,
        day_of_week=day,
        start_time=TimeValue.parse(start),
        end_time=TimeValue.parse(end),
        room=room,
        quarter=quarter,
    )


def three_slot_model():
    return ScheduleSlotModel.from_slots(
        [
            slot(0, room="101", quarter=1, slot_id=1),
            slot(2, "11:00", "12:00", room="102", quarter=1, slot_id=2),
            slot(4, "13:00", "14:30", room="103", quarter=None),
        ]
    )


def test_add_slot_uses_baseline_window_and_sticky_defaults():
    model = ScheduleSlotModel(default_room="204", default_quarter=3)

    index = model.add_slot(1)

    added = model.slots[index]
    assert index == 0
    assert added.id is None
    assert added.day_of_week == 1
    assert added.start_time.format() == "09:00"
    assert added.end_time.format() == "10:30"
    assert added.room == "204"
    assert added.quarter == 3
    assert model.editing_index == 0


def test_add_slot_rejects_unknown_day():
    with pytest.raises(ValueError):
        ScheduleSlotModel().add_slot(7)


def test_quarter_update_broadcasts_to_every_slot():
    model = three_slot_model()

    model.update_slot(1, quarter=2)

    assert [s.quarter for s in model.slots] == [2, 2, 2]


def test_quarter_broadcast_ignores_other_fields_in_same_patch():
    model = three_slot_model()

    model.update_slot(0, quarter=4, room="999")

    assert [s.quarter for s in model.slots] == [4, 4, 4]
    assert model.slots[0].room == "101"


def test_quarter_can_be_cleared_for_all_slots():
    model = three_slot_model()

    model.update_slot(2, quarter=None)

    assert [s.quarter for s in model.slots] == [None, None, None]


def test_room_update_only_touches_target_slot():
    model = three_slot_model()

    model.update_slot(1, room="101")

    assert [s.room for s in model.slots] == ["101", "101", "103"]
    assert [s.quarter for s in model.slots] == [1, 1, None]


def test_time_update_normalizes_text():
    model = three_slot_model()

    model.update_slot(0, start_time="8:5", end_time=TimeValue.of(9, 40))

    assert model.slots[0].start_time.format() == "08:05"
    assert model.slots[0].end_time.format() == "09:40"
    assert model.slots[0].id == 1


def test_update_rejects_bad_input():
    model = three_slot_model()

    with pytest.raises(IndexError):
        model.update_slot(5, room="1")
    with pytest.raises(KeyError):
        model.update_slot(0, instructor="Smith")
    with pytest.raises(ValueError):
        model.update_slot(0, quarter=5)


def test_remove_slot_does_not_cascade_and_shifts_cursor():
    model = three_slot_model()
    model.editing_index = 2

    removed = model.remove_slot(0)

    assert removed.id == 1
    assert [s.id for s in model.slots] == [2, None]
    assert model.editing_index == 1

    model.remove_slot(1)
    assert model.editing_index is None
    assert len(model) == 1


def test_apply_default_room_to_all_updates_sticky_default():
    model = three_slot_model()

    model.apply_default_room_to_all(" 305 ")

    assert [s.room for s in model.slots] == ["305", "305", "305"]
    model.add_slot(3)
    assert model.slots[-1].room == "305"


def test_apply_default_quarter_to_all_updates_sticky_default():
    model = three_slot_model()

    model.apply_default_quarter_to_all(4)

    assert [s.quarter for s in model.slots] == [4, 4, 4]
    model.add_slot(5)
    assert model.slots[-1].quarter == 4


def test_fill_missing_quarter_keeps_explicit_quarters():
    model = three_slot_model()

    model.fill_missing_quarter(2)

    assert [s.quarter for s in model.slots] == [1, 1, 2]
    assert model.default_quarter == 2


def test_snapshot_is_immutable_copy():
    model = three_slot_model()
    snapshot = model.snapshot()

    model.update_slot(0, room="B1")
    model.add_slot(6)

    assert isinstance(snapshot, tuple)
    assert len(snapshot) == 3
    assert snapshot[0].room == "101"


def test_grouping_by_day_is_a_projection():
    model = ScheduleSlotModel.from_slots([slot(2, slot_id=1), slot(0, slot_id=2), slot(2, "12:00", "13:00", slot_id=3)])

    grouped = model.group_by_day()

    assert [index for index, _ in grouped[2]] == [0, 2]
    assert [s.id for _, s in model.slots_for_day(0)] == [2]
    assert grouped[6] == []
    assert [s.id for s in model.slots] == [1, 2, 3]


def test_invalid_slots_reports_indexes():
    model = ScheduleSlotModel.from_slots([slot(0), slot(1, "10:00", "10:00"), slot(2, "12:00", "11:00")])

    assert [index for index, _ in model.invalid_slots()] == [1, 2]


def test_from_record_normalizes_api_values():
    parsed = ScheduleSlot.from_record(
        {"id": 7, "day_of_week": 3, "start_time": "08:00:00", "end_time": "9:45", "room": "", "quarter": None}
    )

    assert parsed.id == 7
    assert parsed.start_time.format() == "08:00"
    assert parsed.end_time.format() == "09:45"
    assert parsed.room is None
    assert parsed.quarter is None


def test_payload_omits_empty_optional_fields_unless_explicit():
    new_slot = slot(1, "9:00", "10:15")

    assert new_slot.to_payload() == {"day_of_week": 1, "start_time": "09:00", "end_time": "10:15"}
    assert new_slot.to_payload(explicit_nulls=True) == {
        "day_of_week": 1,
        "start_time": "09:00",
        "end_time": "10:15",
        "room": None,
        "quarter": None,
    }
    assert slot(1, room="12", quarter=2).to_payload()["quarter"] == 2
