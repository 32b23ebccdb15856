from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time
from typing import Optional


@dataclass(frozen=True)
class Shift:
    """Domain entity: a named, time-bounded work period.

    `capacity` is informational; nothing enforces it when assigning operators.
    """

    id: int
    name: str
    start_time: time
    end_time: time
    department_id: Optional[int]
    capacity: int
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    is_active: bool = True


@dataclass(frozen=True)
class ShiftView:
    """Read-model: active shift with the number of assignments on a given date."""

    id: int
    name: str
    start_time: time
    end_time: time
    start_date: Optional[date]
    end_date: Optional[date]
    department_id: Optional[int]
    department_name: Optional[str]
    capacity: int
    is_active: bool
    assigned_count: int
