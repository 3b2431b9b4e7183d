from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..common.validators import require_non_negative_int
from ..core.constants import DEFAULT_LATE_GRACE_MINUTES, DEFAULT_OFFICIAL_START
from ..core.exceptions import ValidationError
from .timecode import TimeCode


@dataclass(frozen=True)
class LatenessResult:
    late_by_minutes: int
    is_late: bool


@dataclass(frozen=True)
class LatenessPolicy:
    """Official start time plus a grace window; the grace window itself is not late."""

    official_start: TimeCode
    grace_minutes: int = DEFAULT_LATE_GRACE_MINUTES

    def __post_init__(self):
        if self.grace_minutes < 0:
            raise ValidationError("grace_minutes must not be negative")

    @classmethod
    def from_settings(
        cls,
        official_start: str = DEFAULT_OFFICIAL_START,
        grace_minutes: object = DEFAULT_LATE_GRACE_MINUTES,
    ) -> "LatenessPolicy":
        start = TimeCode.parse(official_start)
        if start is None:
            raise ValidationError(f"Official start must be HH:MM, got {official_start!r}")
        return cls(official_start=start, grace_minutes=require_non_negative_int(grace_minutes, "grace_minutes"))

    def classify(self, check_in: Optional[TimeCode]) -> LatenessResult:
        if check_in is None:
            raise ValidationError("Cannot classify lateness without a valid check-in")
        late_by = check_in.total_minutes - self.official_start.total_minutes
        return LatenessResult(late_by_minutes=late_by, is_late=late_by >= self.grace_minutes + 1)
