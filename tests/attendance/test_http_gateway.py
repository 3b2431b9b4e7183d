from __future__ import annotations

import json
from datetime import date

import pytest
import requests

from src.attendance_desk.attendance_desk.attendance.http_attendance_gateway import HttpAttendanceGateway
from src.attendance_desk.attendance_desk.attendance.model import SavePayload
from src.attendance_desk.attendance_desk.core.enums import AttendanceStatus
from src.attendance_desk.attendance_desk.core.exceptions import GatewayError


class FakeResponse:
    def __init__(self, status_code: int = 200, body=None):
        self.status_code = status_code
        self._body = body
        self.content = json.dumps(body).encode() if body is not None else b""

    def json(self):
        if self._body is None:
            raise ValueError("no body")
        return self._body

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error", response=self)


class FakeSession:
    def __init__(self, responses):
        self.headers = {}
        self.calls = []
        self._responses = list(responses)

    def request(self, method, url, **kwargs):
        self.calls.append((method, url, kwargs))
        nxt = self._responses.pop(0)
        if isinstance(nxt, Exception):
            raise nxt
        return nxt


def make_gateway(*responses) -> tuple[HttpAttendanceGateway, FakeSession]:
    session = FakeSession(responses)
    return HttpAttendanceGateway("http://backend.test/", timeout=3, session=session), session


def test_fetch_day_reads_records_in_utc():
    gateway, session = make_gateway(
        FakeResponse(
            body={
                "records": [
                    {"userId": 7, "status": "present", "note": None, "checkIn": "2025-03-14T09:02:00.000Z", "checkOut": "2025-03-14T17:00:00.000Z", "workedMinutes": 478},
                    {"userId": "u2", "status": "Official Off", "checkIn": "2025-03-14T09:00:00.000Z"},
                ]
            }
        )
    )

    records = gateway.fetch_day(date(2025, 3, 14))

    method, url, kwargs = session.calls[0]
    assert (method, url) == ("GET", "http://backend.test/api/attendance/by-date")
    assert kwargs["params"] == {"date": "2025-03-14"}
    assert kwargs["timeout"] == 3

    assert records["7"].check_in == "09:02"
    assert records["7"].worked_minutes == 478
    assert records["u2"].status == AttendanceStatus.OFFICIAL_OFF
    assert records["u2"].check_in == ""


def test_fetch_day_skips_records_without_user_id():
    gateway, _ = make_gateway(
        FakeResponse(body={"records": [{"status": "present"}, {"userId": "u3", "status": "absent"}]})
    )

    records = gateway.fetch_day(date(2025, 3, 14))

    assert list(records) == ["u3"]
    assert records["u3"].status == AttendanceStatus.ABSENT


def test_mark_posts_wire_payload():
    gateway, session = make_gateway(FakeResponse(body={"status": "present", "workedMinutes": 60}))
    payload = SavePayload(
        user_id="u1",
        date="2025-03-14T00:00:00.000Z",
        status=AttendanceStatus.PRESENT,
        note="",
        check_in="2025-03-14T09:00:00.000Z",
        check_out=None,
    )

    assert gateway.mark(payload)["workedMinutes"] == 60
    _, url, kwargs = session.calls[0]
    assert url.endswith("/api/attendance/mark")
    assert kwargs["json"]["userId"] == "u1"
    assert kwargs["json"]["checkOut"] is None


def test_bulk_mark_sends_date_and_records_without_date():
    gateway, session = make_gateway(FakeResponse(body=None))
    payload = SavePayload("u1", "2025-03-14T00:00:00.000Z", AttendanceStatus.ABSENT, "", None, None)

    gateway.bulk_mark(date(2025, 3, 14), [payload])

    _, _, kwargs = session.calls[0]
    assert kwargs["json"]["date"] == "2025-03-14T00:00:00.000Z"
    assert kwargs["json"]["records"] == [{"userId": "u1", "status": "absent", "note": "", "checkIn": None, "checkOut": None}]


def test_backend_message_surfaces_in_error():
    gateway, _ = make_gateway(FakeResponse(400, body={"message": "Invalid status"}))

    with pytest.raises(GatewayError) as exc:
        gateway.fetch_day(date(2025, 3, 14))

    assert str(exc.value) == "Invalid status"
    assert exc.value.status_code == 400


def test_network_failure_becomes_gateway_error():
    gateway, _ = make_gateway(requests.ConnectionError("connection refused"))

    with pytest.raises(GatewayError, match="connection refused"):
        gateway.fetch_month(year=2025, month=3)


def test_monthly_report_rows():
    gateway, session = make_gateway(FakeResponse(body={"rows": [{"department": "IT", "present": 3}]}))

    rows = gateway.fetch_monthly_report(branch="all", year=2025, month=3)

    assert rows == [{"department": "IT", "present": 3}]
    assert session.calls[0][2]["params"] == {"branch": "all", "year": 2025, "month": 3}
