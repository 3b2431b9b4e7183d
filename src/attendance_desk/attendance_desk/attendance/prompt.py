from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from loguru import logger

from ..core.enums import AttendanceStatus, LateDecision, PromptState
from .timecode import TimeCode


@dataclass(frozen=True)
class PendingLateDecision:
    employee_id: str
    check_in: TimeCode
    late_by_minutes: int

    def to_dict(self) -> dict:
        return {
            "employee_id": self.employee_id,
            "check_in": self.check_in.to_text(),
            "late_by_minutes": self.late_by_minutes,
            "choices": [d.value for d in LateDecision],
        }


class LatePrompt:
    """Single pending late-check-in decision for the day being edited.

    Idle -> AwaitingDecision -> Idle. Opening a new prompt replaces the pending one.
    """

    def __init__(self):
        self._pending: Optional[PendingLateDecision] = None

    @property
    def state(self) -> PromptState:
        return PromptState.AWAITING_DECISION if self._pending else PromptState.IDLE

    @property
    def pending(self) -> Optional[PendingLateDecision]:
        return self._pending

    def open(self, pending: PendingLateDecision) -> Optional[PendingLateDecision]:
        replaced = self._pending
        if replaced and replaced.employee_id != pending.employee_id:
            logger.warning(
                f"Late decision for employee {replaced.employee_id} replaced by {pending.employee_id} before it was resolved"
            )
        self._pending = pending
        return replaced

    def resolve(self, decision: Optional[LateDecision]) -> Optional[tuple[str, AttendanceStatus]]:
        """Close the prompt; no decision (dismissed) records present.

        Returns (employee_id, status) to apply, or None when nothing was pending.
        """
        pending = self._pending
        if pending is None:
            return None
        self._pending = None
        status = decision.status if decision is not None else AttendanceStatus.PRESENT
        return pending.employee_id, status

    def discard(self) -> None:
        self._pending = None
