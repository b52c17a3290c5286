from __future__ import annotations

from dataclasses import dataclass
from functools import total_ordering
import re

DEFAULT_HOUR = 9
DEFAULT_MINUTE = 0

LEADING_INT_PATTERN = re.compile(r"\s*([+-]?\d+)")


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))


def _leading_int(text: str) -> int | None:
    """Parse the leading integer of ``text`` the way a lenient form field would."""
    match = LEADING_INT_PATTERN.match(text)
    return int(match.group(1)) if match else None


@total_ordering
@dataclass(frozen=True)
class TimeValue:
    """Wall-clock time of day with minute precision.

    Parsing never fails: the editor must always be able to show a usable
    value, so missing or malformed input falls back to 09:00 and numeric
    parts are clamped into range.
    """

    hour: int = DEFAULT_HOUR
    minute: int = DEFAULT_MINUTE

    def __post_init__(self) -> None:
        object.__setattr__(self, "hour", _clamp(int(self.hour), 0, 23))
        object.__setattr__(self, "minute", _clamp(int(self.minute), 0, 59))

    @classmethod
    def of(cls, hour: int, minute: int = 0) -> TimeValue:
        return cls(hour=hour, minute=minute)

    @classmethod
    def parse(cls, value: object) -> TimeValue:
        """Parse ``H:MM``, ``HH:MM`` or ``HH:MM:SS``; seconds are dropped."""
        if isinstance(value, TimeValue):
            return value
        if not isinstance(value, str) or not value.strip():
            return cls()
        parts = value.strip().split(":")
        hour = _leading_int(parts[0])
        minute = _leading_int(parts[1]) if len(parts) > 1 else None
        return cls.of(
            DEFAULT_HOUR if hour is None else hour,
            DEFAULT_MINUTE if minute is None else minute,
        )

    def to_minutes(self) -> int:
        return self.hour * 60 + self.minute

    def compare(self, other: TimeValue) -> int:
        left, right = self.to_minutes(), other.to_minutes()
        return (left > right) - (left < right)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, TimeValue):
            return NotImplemented
        return self.to_minutes() < other.to_minutes()

    def format(self) -> str:
        return f"{self.hour:02d}:{self.minute:02d}"

    def __str__(self) -> str:
        return self.format()


def is_valid_range(start: TimeValue, end: TimeValue) -> bool:
    # Zero-length and overnight slots are both rejected.
    return end.to_minutes() > start.to_minutes()


def normalize_time_text(value: object) -> str:
    return TimeValue.parse(value).format()
