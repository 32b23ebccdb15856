from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from .model import AttendanceLog, AttendanceLogView


class AttendanceRepository(Protocol):
    def get_by_id(self, attendance_id: int) -> Optional[AttendanceLog]:
        raise NotImplementedError

    def get_for_operator_and_date(self, operator_id: int, work_date: date) -> Optional[AttendanceLog]:
        raise NotImplementedError

    def clock_in(
        self,
        *,
        operator_id: int,
        work_date: date,
        clock_in: datetime,
        shift_id: Optional[int],
    ) -> int:
        """Record the day's clock-in and mark the operator online, in one transaction.

        Fills a pre-seeded row without a clock-in, otherwise inserts; the
        (operator, date) unique key turns a lost race into AlreadyClockedInError.
        Returns the attendance log id.
        """

        raise NotImplementedError

    def clock_out(
        self,
        *,
        attendance_id: int,
        operator_id: int,
        clock_out: datetime,
        total_hours: float,
    ) -> None:
        """Close an open log and mark the operator offline, in one transaction.

        Raises NoActiveClockInError when the log is not open any more.
        """

        raise NotImplementedError

    def list_logs(
        self,
        *,
        work_date: Optional[date] = None,
        operator_id: Optional[int] = None,
        limit: int = 500,
    ) -> Sequence[AttendanceLogView]:
        raise NotImplementedError
