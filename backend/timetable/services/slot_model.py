from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace

from timetable.services.time_value import TimeValue, is_valid_range

DAYS_OF_WEEK = (
    (0, "Monday", "Mon"),
    (1, "Tuesday", "Tue"),
    (2, "Wednesday", "Wed"),
    (3, "Thursday", "Thu"),
    (4, "Friday", "Fri"),
    (5, "Saturday", "Sat"),
    (6, "Sunday", "Sun"),
)
DAY_NAMES = {value: name for value, name, _ in DAYS_OF_WEEK}

NEW_SLOT_START = TimeValue.of(9, 0)
NEW_SLOT_END = TimeValue.of(10, 30)

EDITABLE_FIELDS = {"day_of_week", "start_time", "end_time", "room", "quarter"}


def _validate_day(day: int) -> int:
    if day not in DAY_NAMES:
        raise ValueError(f"day_of_week must be between 0 and 6, got {day!r}")
    return day


def _validate_quarter(quarter: int | None) -> int | None:
    if quarter is not None and quarter not in (1, 2, 3, 4):
        raise ValueError(f"quarter must be 1-4 or None, got {quarter!r}")
    return quarter


def _normalize_room(room: str | None) -> str | None:
    if room is None:
        return None
    return room.strip() or None


@dataclass(frozen=True)
class ScheduleSlot:
    """One weekly recurring meeting of a subject group.

    ``id`` is only present once the slot has been persisted. ``quarter`` of
    ``None`` means the slot applies in every quarter.
    """

    day_of_week: int
    start_time: TimeValue = NEW_SLOT_START
    end_time: TimeValue = NEW_SLOT_END
    room: str | None = None
    quarter: int | None = None
    id: int | None = None

    @classmethod
    def from_record(cls, record: Mapping) -> ScheduleSlot:
        return cls(
            id=record.get("id"),
            day_of_week=_validate_day(int(record["day_of_week"])),
            start_time=TimeValue.parse(record.get("start_time")),
            end_time=TimeValue.parse(record.get("end_time")),
            room=_normalize_room(record.get("room")),
            quarter=_validate_quarter(record.get("quarter")),
        )

    @property
    def is_persisted(self) -> bool:
        return self.id is not None

    @property
    def has_valid_range(self) -> bool:
        return is_valid_range(self.start_time, self.end_time)

    def describe(self) -> str:
        label = f"{DAY_NAMES[self.day_of_week]} {self.start_time}-{self.end_time}"
        if self.id is not None:
            label = f"#{self.id} {label}"
        return label

    def to_payload(self, *, explicit_nulls: bool = False) -> dict:
        """Request body for the slot-storage API; times are always ``HH:MM``."""
        payload: dict = {
            "day_of_week": self.day_of_week,
            "start_time": self.start_time.format(),
            "end_time": self.end_time.format(),
        }
        if self.room or explicit_nulls:
            payload["room"] = self.room or None
        if self.quarter is not None or explicit_nulls:
            payload["quarter"] = self.quarter
        return payload


def _coerce_change(name: str, value):
    if name in {"start_time", "end_time"}:
        return TimeValue.parse(value)
    if name == "day_of_week":
        return _validate_day(int(value))
    if name == "room":
        return _normalize_room(value)
    if name == "quarter":
        return _validate_quarter(value)
    raise KeyError(name)


@dataclass
class ScheduleSlotModel:
    """In-memory editing state for one subject group's weekly slots.

    Storage order is insertion order and has no meaning; per-day views are
    projections only.
    """

    slots: list[ScheduleSlot] = field(default_factory=list)
    default_quarter: int | None = None
    default_room: str | None = None
    editing_index: int | None = None

    @classmethod
    def from_slots(
        cls,
        slots: Iterable[ScheduleSlot],
        *,
        default_quarter: int | None = None,
        default_room: str | None = None,
    ) -> ScheduleSlotModel:
        return cls(
            slots=list(slots),
            default_quarter=_validate_quarter(default_quarter),
            default_room=_normalize_room(default_room),
        )

    def __len__(self) -> int:
        return len(self.slots)

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self.slots):
            raise IndexError(f"slot index {index} out of range for {len(self.slots)} slots")

    def add_slot(self, day: int) -> int:
        slot = ScheduleSlot(
            day_of_week=_validate_day(day),
            start_time=NEW_SLOT_START,
            end_time=NEW_SLOT_END,
            room=self.default_room,
            quarter=self.default_quarter,
        )
        self.slots.append(slot)
        self.editing_index = len(self.slots) - 1
        return self.editing_index

    def update_slot(self, index: int, **changes) -> None:
        """Patch one slot.

        Setting ``quarter`` is a broadcast: it overwrites the quarter of every
        slot in the model and the rest of that patch is ignored, matching the
        editor's single quarter picker.
        """
        self._check_index(index)
        unknown = set(changes) - EDITABLE_FIELDS
        if unknown:
            raise KeyError(f"Unknown slot field(s): {', '.join(sorted(unknown))}")

        if "quarter" in changes:
            quarter = _validate_quarter(changes["quarter"])
            self.slots = [replace(slot, quarter=quarter) for slot in self.slots]
            return

        coerced = {name: _coerce_change(name, value) for name, value in changes.items()}
        self.slots[index] = replace(self.slots[index], **coerced)

    def remove_slot(self, index: int) -> ScheduleSlot:
        self._check_index(index)
        removed = self.slots.pop(index)
        if self.editing_index == index:
            self.editing_index = None
        elif self.editing_index is not None and self.editing_index > index:
            self.editing_index -= 1
        return removed

    def apply_default_room_to_all(self, room: str | None) -> None:
        self.default_room = _normalize_room(room)
        self.slots = [replace(slot, room=self.default_room) for slot in self.slots]

    def apply_default_quarter_to_all(self, quarter: int | None) -> None:
        self.default_quarter = _validate_quarter(quarter)
        self.slots = [replace(slot, quarter=self.default_quarter) for slot in self.slots]

    def fill_missing_quarter(self, quarter: int | None) -> None:
        """Adopt ``quarter`` as the default and give it to slots that have none."""
        self.default_quarter = _validate_quarter(quarter)
        if quarter is None:
            return
        self.slots = [
            slot if slot.quarter is not None else replace(slot, quarter=quarter)
            for slot in self.slots
        ]

    def snapshot(self) -> tuple[ScheduleSlot, ...]:
        return tuple(self.slots)

    def slots_for_day(self, day: int) -> list[tuple[int, ScheduleSlot]]:
        """Slots on ``day`` paired with their index in the model."""
        return [(index, slot) for index, slot in enumerate(self.slots) if slot.day_of_week == day]

    def group_by_day(self) -> dict[int, list[tuple[int, ScheduleSlot]]]:
        return {day: self.slots_for_day(day) for day, _, _ in DAYS_OF_WEEK}

    def invalid_slots(self) -> list[tuple[int, ScheduleSlot]]:
        return [(index, slot) for index, slot in enumerate(self.slots) if not slot.has_valid_range]
