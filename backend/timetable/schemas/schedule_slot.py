from __future__ import annotations

import re

from pydantic import BaseModel, Field, field_validator, model_validator

from timetable.services.time_value import TimeValue, is_valid_range, normalize_time_text

# Accepts H:MM, HH:MM and HH:MM:SS; values are stored as HH:MM.
TIME_PATTERN = re.compile(r"^([01]?\d|2[0-3]):[0-5]\d(:[0-5]\d)?$")


def validate_time_text(value: str) -> str:
    value = value.strip()
    if not TIME_PATTERN.match(value):
        raise ValueError("Time must be in HH:MM 24-hour format")
    return normalize_time_text(value)


def validate_room_text(value: str | None) -> str | None:
    if value is None:
        return None
    return value.strip() or None


def ensure_time_order(start_time: str, end_time: str) -> None:
    if not is_valid_range(TimeValue.parse(start_time), TimeValue.parse(end_time)):
        raise ValueError("end_time must be after start_time")


class ScheduleSlotBase(BaseModel):
    day_of_week: int = Field(ge=0, le=6)
    start_time: str
    end_time: str
    room: str | None = Field(default=None, max_length=50)
    quarter: int | None = Field(default=None, ge=1, le=4)

    @field_validator("start_time", "end_time")
    @classmethod
    def validate_time(cls, value: str) -> str:
        return validate_time_text(value)

    @field_validator("room")
    @classmethod
    def normalize_room(cls, value: str | None) -> str | None:
        return validate_room_text(value)


class ScheduleSlotCreate(ScheduleSlotBase):
    subject_group: int = Field(ge=1)

    @model_validator(mode="after")
    def validate_order(self) -> "ScheduleSlotCreate":
        ensure_time_order(self.start_time, self.end_time)
        return self


class ScheduleSlotUpdate(BaseModel):
    day_of_week: int | None = Field(default=None, ge=0, le=6)
    start_time: str | None = None
    end_time: str | None = None
    room: str | None = Field(default=None, max_length=50)
    quarter: int | None = Field(default=None, ge=1, le=4)

    @field_validator("start_time", "end_time")
    @classmethod
    def validate_time(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return validate_time_text(value)

    @field_validator("room")
    @classmethod
    def normalize_room(cls, value: str | None) -> str | None:
        return validate_room_text(value)


class ScheduleSlotOut(ScheduleSlotBase):
    id: int
    subject_group: int

    model_config = {"from_attributes": True}
