from __future__ import annotations

from dataclasses import dataclass

from .lateness import LatenessPolicy, LatenessResult
from .strategies.base import CheckInStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.normal_strategy import NormalStrategy
from .timecode import TimeCode


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose appropriate strategy based on rules."""

    def for_checkin(self, *, check_in: TimeCode, policy: LatenessPolicy) -> tuple[CheckInStrategy, LatenessResult]:
        lateness = policy.classify(check_in)
        if lateness.is_late:
            return LateStrategy(), lateness
        return NormalStrategy(), lateness
