from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Optional

from ..common.validators import require_month
from ..core.constants import UNKNOWN_DEPARTMENT
from ..core.enums import AttendanceStatus
from ..attendance.repository import AttendanceGateway
from ..attendance.timecode import format_minutes


def _zero_counts() -> dict[str, int]:
    return {s.value: 0 for s in AttendanceStatus}


@dataclass(frozen=True)
class MonthDay:
    date: str
    status: Optional[AttendanceStatus]
    note: str = ""
    worked_minutes: Optional[int] = None


@dataclass(frozen=True)
class MonthAttendance:
    year: int
    month: int
    days: list[MonthDay]
    stats: dict[str, int]
    total_minutes: int

    @property
    def total_hours(self) -> str:
        return format_minutes(self.total_minutes)

    def to_dict(self) -> dict:
        return {
            "year": self.year,
            "month": self.month,
            "days": [
                {
                    "date": d.date,
                    "status": d.status.value if d.status else None,
                    "note": d.note,
                    "worked_minutes": d.worked_minutes,
                }
                for d in self.days
            ],
            "stats": dict(self.stats),
            "total_hours": self.total_hours,
        }


@dataclass
class DepartmentSection:
    dept: str
    items: list[dict] = field(default_factory=list)
    totals: dict[str, int] = field(default_factory=_zero_counts)


@dataclass(frozen=True)
class MonthlyReport:
    sections: list[DepartmentSection]
    grand: dict[str, int]

    def to_dict(self) -> dict:
        return {
            "sections": [{"dept": s.dept, "items": s.items, "totals": dict(s.totals)} for s in self.sections],
            "grand": dict(self.grand),
        }


def _count(value: object) -> int:
    try:
        return int(value or 0)
    except (TypeError, ValueError):
        return 0


class AttendanceReportService:
    def __init__(self, gateway: AttendanceGateway):
        self._gateway = gateway

    def month_stats(self, *, year: object, month: object) -> MonthAttendance:
        """Per-status day counts for the signed-in employee's month."""
        y, m = require_month(year, month)
        days: list[MonthDay] = []
        stats = _zero_counts()
        total = 0

        for raw in self._gateway.fetch_month(year=y, month=m):
            status = AttendanceStatus.normalize(raw.get("status"))
            worked = raw.get("workedMinutes")
            worked = _count(worked) if worked is not None else None
            days.append(MonthDay(date=str(raw.get("date") or ""), status=status, note=raw.get("note") or "", worked_minutes=worked))
            if status is not None:
                stats[status.value] += 1
            total += worked or 0

        return MonthAttendance(year=y, month=m, days=days, stats=stats, total_minutes=total)

    def monthly_report(self, *, branch: str, year: object, month: object) -> MonthlyReport:
        """Backend rows grouped by department with per-department and grand totals."""
        y, m = require_month(year, month)
        rows = self._gateway.fetch_monthly_report(branch=branch or "all", year=y, month=m)
        return group_by_department(rows)


def group_by_department(rows: list[Mapping]) -> MonthlyReport:
    sections: dict[str, DepartmentSection] = {}
    for r in rows:
        key = r.get("department") or UNKNOWN_DEPARTMENT
        section = sections.get(key)
        if section is None:
            section = DepartmentSection(dept=key)
            sections[key] = section
        section.items.append(dict(r))
        for status in section.totals:
            section.totals[status] += _count(r.get(status))

    grand = _zero_counts()
    for section in sections.values():
        for status, n in section.totals.items():
            grand[status] += n
    return MonthlyReport(sections=list(sections.values()), grand=grand)
