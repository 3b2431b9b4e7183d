from __future__ import annotations

from typing import Optional

from ...core.enums import AttendanceStatus
from ..lateness import LatenessResult
from .base import CheckInStrategy, StatusDecision


class NormalStrategy(CheckInStrategy):
    """Check-in within grace: default to present, never overwrite a chosen status."""

    def decide_checkin(self, *, lateness: LatenessResult, current: Optional[AttendanceStatus]) -> StatusDecision:
        if current is not None:
            return StatusDecision(lateness=lateness)
        return StatusDecision(lateness=lateness, status=AttendanceStatus.PRESENT)
