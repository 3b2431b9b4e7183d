from __future__ import annotations

from datetime import date
from typing import Mapping, Protocol, Sequence

from .model import AttendanceDayRecord, SavePayload


class AttendanceGateway(Protocol):
    """Collaborator that persists attendance and serves reports."""

    def fetch_day(self, day: date) -> dict[str, AttendanceDayRecord]:
        raise NotImplementedError

    def mark(self, payload: SavePayload) -> Mapping:
        """Persist one employee's day; returns the backend record incl. workedMinutes."""

        raise NotImplementedError

    def bulk_mark(self, day: date, payloads: Sequence[SavePayload]) -> None:
        raise NotImplementedError

    def fetch_month(self, *, year: int, month: int) -> Sequence[Mapping]:
        raise NotImplementedError

    def fetch_monthly_report(self, *, branch: str, year: int, month: int) -> Sequence[Mapping]:
        raise NotImplementedError
