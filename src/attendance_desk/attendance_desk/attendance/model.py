from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date
from typing import Optional

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceDayRecord:
    """One employee's attendance for one calendar day (persisted or effective).

    Times are kept as the HH:MM text shown to the admin; "" means empty.
    worked_minutes comes from the backend and wins over anything computed locally.
    """

    status: Optional[AttendanceStatus] = None
    note: str = ""
    check_in: str = ""
    check_out: str = ""
    worked_minutes: Optional[int] = None


@dataclass(frozen=True)
class AttendanceDraft:
    """Unsaved edits for one employee on the selected day.

    None means "not edited"; "" is a deliberate clear.
    """

    status: Optional[AttendanceStatus] = None
    note: Optional[str] = None
    check_in: Optional[str] = None
    check_out: Optional[str] = None

    def updated(self, **patch) -> "AttendanceDraft":
        return replace(self, **patch)


@dataclass(frozen=True)
class SavePayload:
    """Wire shape for marking one employee's day."""

    user_id: str
    date: str
    status: AttendanceStatus
    note: str
    check_in: Optional[str]
    check_out: Optional[str]

    def to_wire(self) -> dict:
        return {
            "userId": self.user_id,
            "date": self.date,
            "status": self.status.value,
            "note": self.note,
            "checkIn": self.check_in,
            "checkOut": self.check_out,
        }

    def to_bulk_item(self) -> dict:
        item = self.to_wire()
        item.pop("date")
        return item


@dataclass(frozen=True)
class AttendanceRowUI:
    employee_id: str
    work_date: date
    record: AttendanceDayRecord
    duration_minutes: Optional[int]
    duration_text: str
    invalid_range: bool
    has_unsaved_changes: bool

    def to_dict(self) -> dict:
        status = self.record.status
        return {
            "employee_id": self.employee_id,
            "date": self.work_date.strftime("%Y-%m-%d"),
            "status": status.value if status else None,
            "status_label": status.label if status else "",
            "note": self.record.note,
            "check_in": self.record.check_in,
            "check_out": self.record.check_out,
            "worked_minutes": self.duration_minutes,
            "total_hours": self.duration_text,
            "invalid_range": self.invalid_range,
            "has_unsaved_changes": self.has_unsaved_changes,
        }
