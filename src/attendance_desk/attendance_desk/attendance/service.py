from __future__ import annotations

import threading
from datetime import date
from typing import Iterable, Optional

from loguru import logger

from ..common.datetime_utils import today_utc
from ..core.enums import AttendanceStatus, LateDecision
from ..core.exceptions import GatewayError, ValidationError
from .duration import DurationPolicy
from .factory import AttendanceStrategyFactory
from .lateness import LatenessPolicy
from .model import AttendanceDayRecord, AttendanceRowUI
from .overlay import DraftOverlay, apply_save_result, build_save_payload, has_unsaved_changes
from .prompt import LatePrompt, PendingLateDecision
from .repository import AttendanceGateway
from .timecode import TimeCode


class AttendanceSheetService:
    """The mark-attendance sheet for one selected day.

    Holds the backend's records for that day, the admin's unsaved drafts and
    the pending late-check-in decision. Drafts are keyed by employee only, so
    switching day drops them. Every day switch bumps a generation counter and
    responses that come back for an older generation are thrown away.

    One instance is shared by all request threads. State is read and written
    under ``_lock``; gateway calls run outside it.
    """

    def __init__(
        self,
        gateway: AttendanceGateway,
        *,
        duration_policy: DurationPolicy | None = None,
        lateness_policy: LatenessPolicy | None = None,
        strategy_factory: AttendanceStrategyFactory | None = None,
        day: date | None = None,
    ):
        self._gateway = gateway
        self._durations = duration_policy or DurationPolicy()
        self._lateness = lateness_policy or LatenessPolicy.from_settings()
        self._factory = strategy_factory or AttendanceStrategyFactory()
        self._day = day or today_utc()
        self._overlay = DraftOverlay()
        self._prompt = LatePrompt()
        self._generation = 0
        self._loaded_generation: Optional[int] = None
        self._lock = threading.RLock()

    @property
    def day(self) -> date:
        return self._day

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def is_loaded(self) -> bool:
        return self._loaded_generation == self._generation

    @property
    def pending_prompt(self) -> Optional[PendingLateDecision]:
        return self._prompt.pending

    @property
    def overlay(self) -> DraftOverlay:
        return self._overlay

    def select_day(self, day: date) -> bool:
        """Switch the sheet to ``day``. Returns True if the day actually changed."""
        with self._lock:
            if day == self._day:
                return False
            self._day = day
            self._generation += 1
            self._overlay.reset()
            self._prompt.discard()
            return True

    def load(self) -> bool:
        """Fetch the selected day's records, dropping any drafts.

        Returns False if the day changed while the fetch was in flight.
        """
        with self._lock:
            generation, day = self._generation, self._day
        records = self._gateway.fetch_day(day)
        with self._lock:
            if generation != self._generation:
                logger.debug(f"Discarding stale attendance for {day}")
                return False
            self._overlay.replace_persisted(records)
            self._loaded_generation = generation
            return True

    def ensure_loaded(self) -> bool:
        """Load the selected day once; later calls keep the drafts as they are."""
        if self.is_loaded:
            return True
        return self.load()

    # ----- row edits -----

    def set_status(self, employee_id: str, status: AttendanceStatus | str) -> None:
        normalized = AttendanceStatus.normalize(status)
        if normalized is None:
            raise ValidationError(f"Unknown attendance status: {status!r}")
        with self._lock:
            self._overlay.patch(str(employee_id), status=normalized)

    def set_note(self, employee_id: str, note: str) -> None:
        with self._lock:
            self._overlay.patch(str(employee_id), note=note or "")

    def set_check_out(self, employee_id: str, hhmm: str) -> None:
        with self._lock:
            self._overlay.patch(str(employee_id), check_out=hhmm or "")

    def set_check_in(self, employee_id: str, hhmm: str) -> Optional[PendingLateDecision]:
        """Record a check-in and apply the lateness rules to the day's status.

        Returns the opened prompt when the check-in is late and needs a decision.
        """
        employee_id = str(employee_id)
        with self._lock:
            self._overlay.patch(employee_id, check_in=hhmm or "")

            check_in = TimeCode.parse(hhmm)
            if check_in is None:
                return None

            strategy, lateness = self._factory.for_checkin(check_in=check_in, policy=self._lateness)
            decision = strategy.decide_checkin(lateness=lateness, current=self._overlay.effective(employee_id).status)

            if decision.requires_confirmation:
                pending = PendingLateDecision(
                    employee_id=employee_id,
                    check_in=check_in,
                    late_by_minutes=lateness.late_by_minutes,
                )
                self._prompt.open(pending)
                return pending

            if decision.status is not None:
                self._overlay.patch(employee_id, status=decision.status)
            return None

    def resolve_late_prompt(self, decision: LateDecision | None) -> Optional[AttendanceStatus]:
        """Apply the admin's choice; None (prompt dismissed) records present."""
        with self._lock:
            resolved = self._prompt.resolve(decision)
            if resolved is None:
                return None
            employee_id, status = resolved
            self._overlay.patch(employee_id, status=status)
            return status

    def discard_row(self, employee_id: str) -> None:
        with self._lock:
            self._overlay.discard_draft(str(employee_id))

    # ----- views -----

    def row(self, employee_id: str) -> AttendanceRowUI:
        employee_id = str(employee_id)
        with self._lock:
            record = self._overlay.effective(employee_id)
            return AttendanceRowUI(
                employee_id=employee_id,
                work_date=self._day,
                record=record,
                duration_minutes=self._durations.effective_duration(record),
                duration_text=self._durations.describe(record),
                invalid_range=self._durations.is_invalid(record),
                has_unsaved_changes=has_unsaved_changes(self._overlay.draft_for(employee_id)),
            )

    def rows(self, employee_ids: Iterable[str] | None = None) -> list[AttendanceRowUI]:
        with self._lock:
            ids = [str(e) for e in employee_ids] if employee_ids is not None else self._overlay.employee_ids()
            return [self.row(e) for e in ids]

    def total_minutes(self, employee_ids: Iterable[str] | None = None) -> int:
        return sum(r.duration_minutes or 0 for r in self.rows(employee_ids))

    # ----- saving -----

    def mark_one(self, employee_id: str) -> AttendanceDayRecord:
        employee_id = str(employee_id)
        with self._lock:
            draft = self._overlay.draft_for(employee_id)
            if draft is None or draft.status is None:
                raise ValidationError(f"Choose a status for employee {employee_id} before marking")
            generation, day = self._generation, self._day
            payload = build_save_payload(employee_id, day, self._overlay.effective(employee_id), policy=self._durations)

        try:
            response = self._gateway.mark(payload)
        except GatewayError as e:
            logger.error(f"Failed to mark attendance for {employee_id} on {day}: {e}")
            raise

        record = apply_save_result(response, policy=self._durations)
        with self._lock:
            if generation != self._generation:
                logger.debug(f"Day changed while marking {employee_id}; dropping response for {day}")
                return record
            self._overlay.store_saved(employee_id, record)
        logger.info(f"Marked {employee_id} as {payload.status.value} on {day}")
        return record

    def save_all(self) -> int:
        """Submit every draft that has a status, then reload the day.

        Returns how many records were submitted. On a failed submission all
        drafts are kept for a retry.
        """
        with self._lock:
            generation, day = self._generation, self._day
            payloads = [
                build_save_payload(employee_id, day, record, policy=self._durations)
                for employee_id, record in self._overlay.bulk_candidates()
            ]
        if not payloads:
            return 0

        try:
            self._gateway.bulk_mark(day, payloads)
        except GatewayError as e:
            logger.error(f"Bulk attendance save for {day} failed: {e}")
            raise

        if generation != self._generation:
            logger.debug(f"Day changed during bulk save; not refreshing {day}")
            return len(payloads)

        try:
            records = self._gateway.fetch_day(day)
        except GatewayError as e:
            logger.warning(f"Saved {len(payloads)} records but reloading {day} failed: {e}")
            with self._lock:
                if generation == self._generation:
                    self._overlay.clear_drafts()
            return len(payloads)

        with self._lock:
            if generation == self._generation:
                self._overlay.replace_persisted(records)
                self._loaded_generation = generation
        logger.info(f"Saved {len(payloads)} attendance records for {day}")
        return len(payloads)
