from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterable, Optional

from ..core.constants import DEFAULT_OFF_STATUSES, EMPTY_DURATION, INVALID_DURATION
from ..core.enums import AttendanceStatus
from ..core.exceptions import ValidationError
from .timecode import TimeLike, coerce, format_minutes

if TYPE_CHECKING:
    from .model import AttendanceDayRecord


def compute_client_duration(check_in: TimeLike, check_out: TimeLike) -> Optional[int]:
    """Minutes between check-in and check-out on the same day.

    None when either side does not parse or the range is inverted.
    """
    start, end = coerce(check_in), coerce(check_out)
    if start is None or end is None:
        return None
    if end.total_minutes < start.total_minutes:
        return None
    return end.total_minutes - start.total_minutes


def is_inverted(check_in: TimeLike, check_out: TimeLike) -> bool:
    start, end = coerce(check_in), coerce(check_out)
    return start is not None and end is not None and end.total_minutes < start.total_minutes


def _default_off_statuses() -> frozenset:
    return frozenset(AttendanceStatus(s) for s in DEFAULT_OFF_STATUSES)


@dataclass(frozen=True)
class DurationPolicy:
    """Which statuses suppress time tracking, and how a day's duration is derived."""

    off_statuses: frozenset = field(default_factory=_default_off_statuses)

    @classmethod
    def from_names(cls, names: Iterable[str]) -> "DurationPolicy":
        statuses = set()
        for name in names:
            if not str(name).strip():
                continue
            status = AttendanceStatus.normalize(name)
            if status is None:
                raise ValidationError(f"Unknown attendance status: {name!r}")
            statuses.add(status)
        return cls(off_statuses=frozenset(statuses))

    def is_off_status(self, status: Optional[AttendanceStatus]) -> bool:
        return status is not None and AttendanceStatus.normalize(status) in self.off_statuses

    def effective_duration(self, record: "AttendanceDayRecord") -> Optional[int]:
        # Backend value is authoritative even when the times disagree with it.
        if record.worked_minutes is not None:
            return int(record.worked_minutes)
        if self.is_off_status(record.status):
            return None
        return compute_client_duration(record.check_in, record.check_out)

    def is_invalid(self, record: "AttendanceDayRecord") -> bool:
        if record.worked_minutes is not None or self.is_off_status(record.status):
            return False
        return is_inverted(record.check_in, record.check_out)

    def describe(self, record: "AttendanceDayRecord") -> str:
        if self.is_invalid(record):
            return INVALID_DURATION
        minutes = self.effective_duration(record)
        if minutes is None:
            return EMPTY_DURATION
        return format_minutes(minutes)
