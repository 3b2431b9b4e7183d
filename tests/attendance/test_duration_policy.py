import pytest

from src.attendance_desk.attendance_desk.attendance.duration import DurationPolicy, compute_client_duration
from src.attendance_desk.attendance_desk.attendance.model import AttendanceDayRecord
from src.attendance_desk.attendance_desk.core.enums import AttendanceStatus
from src.attendance_desk.attendance_desk.core.exceptions import ValidationError


def test_client_duration_is_minute_difference():
    assert compute_client_duration("09:00", "17:30") == 510
    assert compute_client_duration("09:00", "09:00") == 0


def test_client_duration_inverted_or_unparsed_is_none():
    assert compute_client_duration("17:00", "08:00") is None
    assert compute_client_duration("", "17:00") is None
    assert compute_client_duration("09:00", "5pm") is None


def test_server_minutes_take_precedence():
    policy = DurationPolicy()
    record = AttendanceDayRecord(status=AttendanceStatus.PRESENT, check_in="17:00", check_out="08:00", worked_minutes=42)
    assert policy.effective_duration(record) == 42
    assert policy.describe(record) == "00:42"
    assert policy.is_invalid(record) is False

    missing_times = AttendanceDayRecord(status=AttendanceStatus.PRESENT, worked_minutes=480)
    assert policy.effective_duration(missing_times) == 480


def test_present_day_scenario():
    policy = DurationPolicy()
    record = AttendanceDayRecord(status=AttendanceStatus.PRESENT, check_in="09:00", check_out="17:30")
    assert policy.effective_duration(record) == 510
    assert policy.describe(record) == "08:30"


def test_off_status_suppresses_times():
    policy = DurationPolicy()
    record = AttendanceDayRecord(status=AttendanceStatus.LEAVE, check_in="09:00", check_out="17:00")
    assert policy.effective_duration(record) is None
    assert policy.describe(record) == "—"


def test_inverted_range_is_invalid():
    policy = DurationPolicy()
    record = AttendanceDayRecord(status=AttendanceStatus.PRESENT, check_in="18:00", check_out="09:00")
    assert policy.is_invalid(record) is True
    assert policy.describe(record) == "Invalid"


def test_off_statuses_are_configurable():
    policy = DurationPolicy.from_names(["absent", "Short Leave"])
    assert policy.is_off_status(AttendanceStatus.SHORT_LEAVE)
    assert not policy.is_off_status(AttendanceStatus.LEAVE)
    assert not policy.is_off_status(None)

    default = DurationPolicy()
    assert default.is_off_status(AttendanceStatus.OFFICIAL_OFF)
    assert not default.is_off_status(AttendanceStatus.LATE)
    assert not default.is_off_status(AttendanceStatus.SHORT_LEAVE)


def test_unknown_off_status_name_rejected():
    with pytest.raises(ValidationError):
        DurationPolicy.from_names(["holiday"])
