from __future__ import annotations

import re
from enum import Enum
from typing import Optional


class AttendanceStatus(str, Enum):
    """Day status an admin can assign to an employee."""

    PRESENT = "present"
    ABSENT = "absent"
    LEAVE = "leave"
    LATE = "late"
    OFFICIAL_OFF = "official_off"
    SHORT_LEAVE = "short_leave"

    @property
    def label(self) -> str:
        return _LABELS[self]

    @classmethod
    def normalize(cls, value: object) -> Optional["AttendanceStatus"]:
        """Map backend/free-text values ("Short Leave", "official off") to a status.

        Unknown or empty values yield None.
        """
        if value is None:
            return None
        if isinstance(value, cls):
            return value
        slug = re.sub(r"\s+", "_", str(value).strip().lower())
        if not slug:
            return None
        try:
            return cls(slug)
        except ValueError:
            return None


_LABELS = {
    AttendanceStatus.PRESENT: "Present",
    AttendanceStatus.ABSENT: "Absent",
    AttendanceStatus.LEAVE: "Leave",
    AttendanceStatus.LATE: "Late",
    AttendanceStatus.OFFICIAL_OFF: "Official Off",
    AttendanceStatus.SHORT_LEAVE: "Short Leave",
}


class LateDecision(str, Enum):
    """The two outcomes offered when a check-in falls past the grace window."""

    KEEP_PRESENT = "present"
    MARK_LATE = "late"

    @property
    def status(self) -> AttendanceStatus:
        return AttendanceStatus(self.value)


class PromptState(str, Enum):
    IDLE = "idle"
    AWAITING_DECISION = "awaiting_decision"
