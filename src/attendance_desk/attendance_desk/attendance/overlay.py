"""Persisted records with unsaved drafts layered on top.

merge() is the single place where precedence between what the backend holds
and what the admin has typed is decided; everything else reads through it.
"""

from __future__ import annotations

from datetime import date
from typing import Mapping, Optional

from ..common.datetime_utils import combine_utc_iso, iso_to_hhmm, utc_midnight_iso
from ..core.enums import AttendanceStatus
from ..core.exceptions import ValidationError
from .duration import DurationPolicy
from .model import AttendanceDayRecord, AttendanceDraft, SavePayload
from .timecode import TimeCode

_DRAFT_FIELDS = ("status", "note", "check_in", "check_out")


def merge(persisted: Optional[AttendanceDayRecord], draft: Optional[AttendanceDraft]) -> AttendanceDayRecord:
    base = persisted or AttendanceDayRecord()
    if draft is None:
        return base
    return AttendanceDayRecord(
        status=draft.status if draft.status is not None else base.status,
        note=draft.note if draft.note is not None else base.note,
        check_in=draft.check_in if draft.check_in is not None else base.check_in,
        check_out=draft.check_out if draft.check_out is not None else base.check_out,
        worked_minutes=base.worked_minutes,
    )


def has_unsaved_changes(draft: Optional[AttendanceDraft]) -> bool:
    if draft is None:
        return False
    return any(getattr(draft, name) is not None for name in _DRAFT_FIELDS)


def _time_instant(day: date, text: str) -> Optional[str]:
    tc = TimeCode.parse(text)
    if tc is None:
        return None
    return combine_utc_iso(day, tc.total_minutes)


def build_save_payload(
    employee_id: str,
    day: date,
    record: AttendanceDayRecord,
    *,
    policy: DurationPolicy,
) -> SavePayload:
    if record.status is None:
        raise ValidationError(f"Choose a status for employee {employee_id} before saving")

    off = policy.is_off_status(record.status)
    return SavePayload(
        user_id=str(employee_id),
        date=utc_midnight_iso(day),
        status=record.status,
        note=record.note or "",
        check_in=None if off else _time_instant(day, record.check_in),
        check_out=None if off else _time_instant(day, record.check_out),
    )


def _worked_minutes(value: object) -> Optional[int]:
    if value is None or value == "":
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def record_from_wire(data: Mapping, *, policy: DurationPolicy) -> AttendanceDayRecord:
    """Backend record -> AttendanceDayRecord, with off statuses carrying no times."""
    status = AttendanceStatus.normalize(data.get("status"))
    off = policy.is_off_status(status)
    return AttendanceDayRecord(
        status=status,
        note=data.get("note") or "",
        check_in="" if off else iso_to_hhmm(data.get("checkIn")),
        check_out="" if off else iso_to_hhmm(data.get("checkOut")),
        worked_minutes=_worked_minutes(data.get("workedMinutes")),
    )


def apply_save_result(response: Mapping, *, policy: DurationPolicy) -> AttendanceDayRecord:
    """The persisted record after a successful mark; the caller drops the draft."""
    return record_from_wire(response, policy=policy)


class DraftOverlay:
    """Persisted records and drafts for the selected day, keyed by employee id."""

    def __init__(self):
        self._persisted: dict[str, AttendanceDayRecord] = {}
        self._drafts: dict[str, AttendanceDraft] = {}

    @property
    def persisted(self) -> dict[str, AttendanceDayRecord]:
        return dict(self._persisted)

    @property
    def drafts(self) -> dict[str, AttendanceDraft]:
        return dict(self._drafts)

    def employee_ids(self) -> list[str]:
        return sorted(set(self._persisted) | set(self._drafts))

    def replace_persisted(self, records: Mapping[str, AttendanceDayRecord]) -> None:
        """Swap in a freshly loaded day; drafts belong to the old data and are dropped."""
        self._persisted = {str(k): v for k, v in records.items()}
        self._drafts = {}

    def reset(self) -> None:
        self._persisted = {}
        self._drafts = {}

    def draft_for(self, employee_id: str) -> Optional[AttendanceDraft]:
        return self._drafts.get(employee_id)

    def patch(self, employee_id: str, **fields) -> AttendanceDraft:
        draft = self._drafts.get(employee_id, AttendanceDraft()).updated(**fields)
        self._drafts[employee_id] = draft
        return draft

    def effective(self, employee_id: str) -> AttendanceDayRecord:
        return merge(self._persisted.get(employee_id), self._drafts.get(employee_id))

    def store_saved(self, employee_id: str, record: AttendanceDayRecord) -> None:
        self._persisted[employee_id] = record
        self._drafts.pop(employee_id, None)

    def discard_draft(self, employee_id: str) -> None:
        self._drafts.pop(employee_id, None)

    def clear_drafts(self) -> None:
        self._drafts = {}

    def bulk_candidates(self) -> list[tuple[str, AttendanceDayRecord]]:
        """Employees whose draft carries a status, with their merged record.

        Drafts without a status are left out of bulk saves.
        """
        return [
            (employee_id, self.effective(employee_id))
            for employee_id, draft in self._drafts.items()
            if draft.status is not None
        ]
