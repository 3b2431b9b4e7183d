from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from ...core.enums import AttendanceStatus
from ..lateness import LatenessResult


@dataclass(frozen=True)
class StatusDecision:
    """What a check-in edit does to the day's status.

    status None means leave the status alone. requires_confirmation means a
    human has to pick between present and late before the status is set.
    """

    lateness: LatenessResult
    status: Optional[AttendanceStatus] = None
    requires_confirmation: bool = False


class CheckInStrategy(ABC):
    """Strategy Pattern: encapsulate how a check-in affects the day's status."""

    @abstractmethod
    def decide_checkin(self, *, lateness: LatenessResult, current: Optional[AttendanceStatus]) -> StatusDecision:
        raise NotImplementedError
