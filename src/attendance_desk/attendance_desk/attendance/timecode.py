from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Optional, Union

from ..core.exceptions import ValidationError

_HHMM = re.compile(r"[0-9]{2}:[0-9]{2}")

MINUTES_PER_DAY = 24 * 60


@dataclass(frozen=True, order=True)
class TimeCode:
    """Wall-clock time of day with minute precision (no date, no timezone)."""

    hour: int
    minute: int

    def __post_init__(self):
        if not (0 <= self.hour <= 23 and 0 <= self.minute <= 59):
            raise ValidationError(f"Time out of range: {self.hour}:{self.minute}")

    @property
    def total_minutes(self) -> int:
        return self.hour * 60 + self.minute

    @classmethod
    def parse(cls, text: object) -> Optional["TimeCode"]:
        """Read strict HH:MM text; anything else (including 24:00 or 12:60) is None."""
        if not text or not isinstance(text, str) or not _HHMM.fullmatch(text):
            return None
        hour, minute = int(text[:2]), int(text[3:])
        if hour > 23 or minute > 59:
            return None
        return cls(hour, minute)

    @classmethod
    def from_minutes(cls, total: int) -> "TimeCode":
        if not 0 <= total < MINUTES_PER_DAY:
            raise ValidationError(f"Minutes out of range: {total}")
        return cls(total // 60, total % 60)

    def to_text(self) -> str:
        return format_minutes(self.total_minutes)

    def __str__(self) -> str:
        return self.to_text()


TimeLike = Union[TimeCode, str, None]


def coerce(value: TimeLike) -> Optional[TimeCode]:
    if isinstance(value, TimeCode):
        return value
    return TimeCode.parse(value)


def format_minutes(total: Optional[Union[int, float]]) -> str:
    """Format a signed minute count as [-]HH:MM; None/NaN give ""."""
    if total is None or (isinstance(total, float) and math.isnan(total)):
        return ""
    total = int(total)
    sign = "-" if total < 0 else ""
    magnitude = abs(total)
    return f"{sign}{magnitude // 60:02d}:{magnitude % 60:02d}"
