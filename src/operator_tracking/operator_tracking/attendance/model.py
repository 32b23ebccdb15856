from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceLog:
    """Domain entity: one operator's attendance for one calendar date."""

    id: int
    operator_id: int
    work_date: date
    clock_in: Optional[datetime]
    clock_out: Optional[datetime]
    total_hours: float
    status: AttendanceStatus
    shift_id: Optional[int] = None


@dataclass(frozen=True)
class AttendanceLogView:
    """Read-model for listings (joined with operator, department and shift)."""

    id: int
    operator_id: int
    operator_name: Optional[str]
    operator_email: Optional[str]
    department_name: Optional[str]
    work_date: date
    clock_in: Optional[datetime]
    clock_out: Optional[datetime]
    total_hours: float
    status: AttendanceStatus
    shift_id: Optional[int]
    shift_name: Optional[str]
