from __future__ import annotations

from typing import Optional

from ...core.enums import AttendanceStatus
from ..lateness import LatenessResult
from .base import CheckInStrategy, StatusDecision


class LateStrategy(CheckInStrategy):
    """Check-in past grace: ask before recording present or late."""

    def decide_checkin(self, *, lateness: LatenessResult, current: Optional[AttendanceStatus]) -> StatusDecision:
        return StatusDecision(lateness=lateness, requires_confirmation=True)
