from __future__ import annotations

import logging
from datetime import date, datetime, timedelta
from typing import Any, Optional, Sequence

from ..common.datetime_utils import hours_between, now_local, optional_date
from ..common.validators import optional_positive_int, require_positive_int
from ..core.constants import DEFAULT_ATTENDANCE_LIMIT
from ..core.exceptions import NotFoundError
from ..operators.repository import OperatorRepository
from ..shifts.repository import ShiftRepository
from .model import AttendanceLog, AttendanceLogView
from .repository import AttendanceRepository
from .state import AttendanceEvent, AttendanceState, transition

logger = logging.getLogger(__name__)


class AttendanceService:
    """Clock-in / clock-out rules.

    The state machine in `state.py` decides whether a transition is allowed;
    the repository re-checks inside its transaction so concurrent callers
    cannot create a second log for the same (operator, date).
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        operators: OperatorRepository,
        shifts: ShiftRepository,
    ):
        self._attendance = attendance
        self._operators = operators
        self._shifts = shifts

    def clock_in(self, operator_id: Any, shift_id: Any = None, *, now: Optional[datetime] = None) -> AttendanceLog:
        now = now or now_local()
        today = now.date()
        operator_id = self._require_operator(operator_id)

        shift_id = optional_positive_int(shift_id, "Shift ID")
        if shift_id is not None and not self._shifts.get_by_id(shift_id):
            raise NotFoundError("Shift not found")

        existing = self._attendance.get_for_operator_and_date(operator_id, today)
        transition(AttendanceState.of(existing), AttendanceEvent.CLOCK_IN)

        attendance_id = self._attendance.clock_in(
            operator_id=operator_id,
            work_date=today,
            clock_in=now,
            shift_id=shift_id,
        )
        logger.info("Operator %s clocked in at %s (shift=%s)", operator_id, now.isoformat(), shift_id)
        return self._get(attendance_id)

    def clock_out(self, operator_id: Any, *, now: Optional[datetime] = None) -> AttendanceLog:
        now = now or now_local()
        operator_id = self._require_operator(operator_id)

        record = self._open_log(operator_id, now.date())
        transition(AttendanceState.of(record), AttendanceEvent.CLOCK_OUT)

        total_hours = hours_between(record.clock_in, now)
        self._attendance.clock_out(
            attendance_id=record.id,
            operator_id=operator_id,
            clock_out=now,
            total_hours=total_hours,
        )
        logger.info("Operator %s clocked out at %s (%.2fh)", operator_id, now.isoformat(), total_hours)
        return self._get(record.id)

    def get_today(self, operator_id: Any, *, today: Optional[date] = None) -> Optional[AttendanceLog]:
        operator_id = require_positive_int(operator_id, "Operator ID")
        return self._attendance.get_for_operator_and_date(operator_id, today or now_local().date())

    def list_attendance(self, *, work_date: Any = None, operator_id: Any = None) -> Sequence[AttendanceLogView]:
        return self._attendance.list_logs(
            work_date=optional_date(work_date, "Date"),
            operator_id=optional_positive_int(operator_id, "Operator ID"),
            limit=DEFAULT_ATTENDANCE_LIMIT,
        )

    def _open_log(self, operator_id: int, today: date) -> Optional[AttendanceLog]:
        record = self._attendance.get_for_operator_and_date(operator_id, today)
        if AttendanceState.of(record) is AttendanceState.CLOCKED_IN:
            return record

        # Only a shift that crosses midnight may clock out on the day after it clocked in.
        previous = self._attendance.get_for_operator_and_date(operator_id, today - timedelta(days=1))
        if AttendanceState.of(previous) is AttendanceState.CLOCKED_IN and self._is_overnight(previous.shift_id):
            return previous
        return record

    def _is_overnight(self, shift_id: Optional[int]) -> bool:
        if shift_id is None:
            return False
        shift = self._shifts.get_by_id(shift_id)
        return shift is not None and shift.end_time < shift.start_time

    def _require_operator(self, operator_id: Any) -> int:
        operator_id = require_positive_int(operator_id, "Operator ID")
        if not self._operators.get_by_id(operator_id):
            raise NotFoundError("Operator not found")
        return operator_id

    def _get(self, attendance_id: int) -> AttendanceLog:
        log = self._attendance.get_by_id(attendance_id)
        if not log:
            raise NotFoundError("Attendance record not found")
        return log
