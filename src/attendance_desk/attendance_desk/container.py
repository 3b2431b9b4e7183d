from __future__ import annotations

from dataclasses import dataclass

from .attendance.duration import DurationPolicy
from .attendance.factory import AttendanceStrategyFactory
from .attendance.http_attendance_gateway import HttpAttendanceGateway
from .attendance.lateness import LatenessPolicy
from .attendance.repository import AttendanceGateway
from .attendance.service import AttendanceSheetService
from .core.constants import DEFAULT_API_TIMEOUT, DEFAULT_LATE_GRACE_MINUTES, DEFAULT_OFF_STATUSES, DEFAULT_OFFICIAL_START
from .reports.service import AttendanceReportService


@dataclass(frozen=True)
class Container:
    gateway: AttendanceGateway

    duration_policy: DurationPolicy
    lateness_policy: LatenessPolicy

    sheet_service: AttendanceSheetService
    report_service: AttendanceReportService


def build_services(gateway: AttendanceGateway, *, duration_policy: DurationPolicy, lateness_policy: LatenessPolicy) -> Container:
    sheet_service = AttendanceSheetService(
        gateway,
        duration_policy=duration_policy,
        lateness_policy=lateness_policy,
        strategy_factory=AttendanceStrategyFactory(),
    )
    report_service = AttendanceReportService(gateway)

    return Container(
        gateway=gateway,
        duration_policy=duration_policy,
        lateness_policy=lateness_policy,
        sheet_service=sheet_service,
        report_service=report_service,
    )


def build_container(*, api_config: dict, attendance_config: dict | None = None) -> Container:
    attendance_config = attendance_config or {}

    duration_policy = DurationPolicy.from_names(attendance_config.get("off_statuses", DEFAULT_OFF_STATUSES))
    lateness_policy = LatenessPolicy.from_settings(
        official_start=attendance_config.get("official_start", DEFAULT_OFFICIAL_START),
        grace_minutes=attendance_config.get("grace_minutes", DEFAULT_LATE_GRACE_MINUTES),
    )
    gateway = HttpAttendanceGateway(
        str(api_config["base_url"]),
        timeout=float(api_config.get("timeout", DEFAULT_API_TIMEOUT)),
        policy=duration_policy,
    )
    return build_services(gateway, duration_policy=duration_policy, lateness_policy=lateness_policy)
