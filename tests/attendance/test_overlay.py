from datetime import date

import pytest

from src.attendance_desk.attendance_desk.attendance.duration import DurationPolicy
from src.attendance_desk.attendance_desk.attendance.model import AttendanceDayRecord, AttendanceDraft
from src.attendance_desk.attendance_desk.attendance.overlay import (
    DraftOverlay,
    apply_save_result,
    build_save_payload,
    has_unsaved_changes,
    merge,
)
from src.attendance_desk.attendance_desk.core.enums import AttendanceStatus
from src.attendance_desk.attendance_desk.core.exceptions import ValidationError


DAY = date(2025, 3, 14)
POLICY = DurationPolicy()


def test_merge_only_overrides_set_fields():
    persisted = AttendanceDayRecord(status=AttendanceStatus.PRESENT, note="", check_in="09:00", check_out="17:00", worked_minutes=480)
    merged = merge(persisted, AttendanceDraft(note="doctor"))

    assert merged.status == AttendanceStatus.PRESENT
    assert merged.note == "doctor"
    assert merged.check_in == "09:00"
    assert merged.worked_minutes == 480


def test_merge_empty_string_clears_field():
    persisted = AttendanceDayRecord(status=AttendanceStatus.PRESENT, check_out="17:00")
    assert merge(persisted, AttendanceDraft(check_out="")).check_out == ""


def test_merge_without_persisted():
    merged = merge(None, AttendanceDraft(status=AttendanceStatus.LATE))
    assert merged.status == AttendanceStatus.LATE
    assert merged.note == ""


def test_has_unsaved_changes():
    assert has_unsaved_changes(None) is False
    assert has_unsaved_changes(AttendanceDraft()) is False
    assert has_unsaved_changes(AttendanceDraft(note="x")) is True


def test_payload_uses_utc_instants():
    record = AttendanceDayRecord(status=AttendanceStatus.PRESENT, note="ok", check_in="09:00", check_out="17:30")
    payload = build_save_payload("u1", DAY, record, policy=POLICY)

    assert payload.to_wire() == {
        "userId": "u1",
        "date": "2025-03-14T00:00:00.000Z",
        "status": "present",
        "note": "ok",
        "checkIn": "2025-03-14T09:00:00.000Z",
        "checkOut": "2025-03-14T17:30:00.000Z",
    }


def test_payload_nulls_times_for_off_status():
    record = AttendanceDayRecord(status=AttendanceStatus.LEAVE, check_in="10:00", check_out="12:00")
    payload = build_save_payload("u1", DAY, record, policy=POLICY)

    assert payload.check_in is None
    assert payload.check_out is None


def test_payload_nulls_empty_or_unparseable_times():
    record = AttendanceDayRecord(status=AttendanceStatus.PRESENT, check_in="", check_out="5pm")
    payload = build_save_payload("u1", DAY, record, policy=POLICY)

    assert payload.check_in is None
    assert payload.check_out is None


def test_payload_requires_status():
    with pytest.raises(ValidationError):
        build_save_payload("u1", DAY, AttendanceDayRecord(note="x"), policy=POLICY)


def test_apply_save_result_reads_utc_and_worked_minutes():
    record = apply_save_result(
        {
            "status": "late",
            "note": None,
            "checkIn": "2025-03-14T09:20:00.000Z",
            "checkOut": "2025-03-14T18:00:00+00:00",
            "workedMinutes": 520,
        },
        policy=POLICY,
    )
    assert record == AttendanceDayRecord(
        status=AttendanceStatus.LATE, note="", check_in="09:20", check_out="18:00", worked_minutes=520
    )


def test_apply_save_result_blanks_times_for_off_status():
    record = apply_save_result(
        {"status": "official_off", "checkIn": "2025-03-14T09:00:00Z", "checkOut": None},
        policy=POLICY,
    )
    assert record.check_in == ""
    assert record.check_out == ""
    assert record.worked_minutes is None


def test_overlay_store_saved_clears_draft():
    overlay = DraftOverlay()
    overlay.patch("u1", status=AttendanceStatus.PRESENT)
    overlay.store_saved("u1", AttendanceDayRecord(status=AttendanceStatus.PRESENT))

    assert overlay.draft_for("u1") is None
    assert overlay.persisted["u1"].status == AttendanceStatus.PRESENT


def test_overlay_replace_persisted_drops_drafts():
    overlay = DraftOverlay()
    overlay.patch("u1", note="draft")
    overlay.replace_persisted({"u2": AttendanceDayRecord(status=AttendanceStatus.ABSENT)})

    assert overlay.drafts == {}
    assert overlay.employee_ids() == ["u2"]


def test_bulk_candidates_need_a_draft_status():
    overlay = DraftOverlay()
    overlay.replace_persisted({"u3": AttendanceDayRecord(status=AttendanceStatus.PRESENT)})
    overlay.patch("u1", note="only a note")
    overlay.patch("u2", status=AttendanceStatus.ABSENT)
    overlay.patch("u3", note="persisted status only")

    ids = [employee_id for employee_id, _ in overlay.bulk_candidates()]
    assert ids == ["u2"]
