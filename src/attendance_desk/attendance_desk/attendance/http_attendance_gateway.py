from __future__ import annotations

from datetime import date
from typing import Any, Mapping, Optional, Sequence

import requests
from loguru import logger

from ..common.datetime_utils import utc_midnight_iso
from ..core.constants import DEFAULT_API_TIMEOUT
from ..core.exceptions import GatewayError
from .duration import DurationPolicy
from .model import AttendanceDayRecord, SavePayload
from .overlay import record_from_wire
from .repository import AttendanceGateway


class HttpAttendanceGateway(AttendanceGateway):
    """AttendanceGateway over the backend's JSON API."""

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = DEFAULT_API_TIMEOUT,
        policy: Optional[DurationPolicy] = None,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._policy = policy or DurationPolicy()
        self._session = session or requests.Session()
        self._session.headers.update({"Content-Type": "application/json"})

    def _request(self, method: str, path: str, **kwargs) -> Any:
        url = f"{self.base_url}{path}"
        try:
            response = self._session.request(method, url, timeout=self.timeout, **kwargs)
            response.raise_for_status()
        except requests.HTTPError as e:
            logger.error(f"{method} {path} rejected: {e}")
            raise GatewayError(_error_message(e), status_code=e.response.status_code if e.response is not None else None)
        except requests.RequestException as e:
            logger.error(f"{method} {path} failed: {e}")
            raise GatewayError(str(e) or "Something went wrong")

        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError:
            raise GatewayError(f"{method} {path} returned a non-JSON body", status_code=response.status_code)

    def fetch_day(self, day: date) -> dict[str, AttendanceDayRecord]:
        data = self._request("GET", "/api/attendance/by-date", params={"date": day.strftime("%Y-%m-%d")})
        records = {}
        for r in (data or {}).get("records") or []:
            user_id = r.get("userId")
            if user_id is None:
                logger.warning(f"Skipping attendance record without userId for {day}")
                continue
            records[str(user_id)] = record_from_wire(r, policy=self._policy)
        logger.info(f"Loaded {len(records)} attendance records for {day}")
        return records

    def mark(self, payload: SavePayload) -> Mapping:
        return self._request("POST", "/api/attendance/mark", json=payload.to_wire()) or {}

    def bulk_mark(self, day: date, payloads: Sequence[SavePayload]) -> None:
        self._request(
            "POST",
            "/api/attendance/bulk",
            json={"date": utc_midnight_iso(day), "records": [p.to_bulk_item() for p in payloads]},
        )

    def fetch_month(self, *, year: int, month: int) -> Sequence[Mapping]:
        data = self._request("GET", "/api/attendance/by-month", params={"year": year, "month": month})
        return list((data or {}).get("days") or [])

    def fetch_monthly_report(self, *, branch: str, year: int, month: int) -> Sequence[Mapping]:
        data = self._request(
            "GET",
            "/api/attendance/report/monthly",
            params={"branch": branch, "year": year, "month": month},
        )
        return list((data or {}).get("rows") or [])


def _error_message(error: requests.HTTPError) -> str:
    response = error.response
    if response is not None:
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict) and body.get("message"):
            return str(body["message"])
    return str(error) or "Something went wrong"
