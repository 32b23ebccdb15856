from __future__ import annotations

import logging
from datetime import date
from typing import Any, Mapping, Optional, Sequence

from ..common.datetime_utils import optional_date, parse_time_of_day
from ..common.validators import require_non_empty, require_positive_int
from ..core.exceptions import NotFoundError, ValidationError
from ..departments.repository import DepartmentRepository
from .model import Shift, ShiftView
from .repository import ShiftRepository

logger = logging.getLogger(__name__)


class ShiftService:
    def __init__(self, shifts: ShiftRepository, departments: DepartmentRepository):
        self._shifts = shifts
        self._departments = departments

    def list_shifts(self, *, today: Optional[date] = None) -> Sequence[ShiftView]:
        return self._shifts.list_active(on_date=today or date.today())

    def get_shift(self, shift_id: Any) -> Shift:
        shift = self._shifts.get_by_id(require_positive_int(shift_id, "Shift ID"))
        if not shift:
            raise NotFoundError("Shift not found")
        return shift

    def create_shift(
        self,
        *,
        name: Optional[str],
        start_time: Any,
        end_time: Any,
        department_id: Any,
        capacity: Any,
        start_date: Any = None,
        end_date: Any = None,
    ) -> Shift:
        name = require_non_empty(name, "Shift name")
        start = parse_time_of_day(start_time, "Start time")
        end = parse_time_of_day(end_time, "End time")
        department_id = self._check_department(department_id)
        capacity = require_positive_int(capacity, "Capacity")
        valid_from = optional_date(start_date, "Start date")
        valid_to = optional_date(end_date, "End date")
        _check_window(valid_from, valid_to)

        shift_id = self._shifts.create(
            name=name,
            start_time=start,
            end_time=end,
            department_id=department_id,
            capacity=capacity,
            start_date=valid_from,
            end_date=valid_to,
        )
        logger.info("Created shift %s (%s %s-%s)", shift_id, name, start, end)
        return self.get_shift(shift_id)

    def update_shift(self, shift_id: Any, data: Mapping[str, Any]) -> Shift:
        shift = self.get_shift(shift_id)

        changes: dict[str, Any] = {}
        if data.get("name") is not None:
            changes["name"] = require_non_empty(data["name"], "Shift name")
        if data.get("start_time") is not None:
            changes["start_time"] = parse_time_of_day(data["start_time"], "Start time")
        if data.get("end_time") is not None:
            changes["end_time"] = parse_time_of_day(data["end_time"], "End time")
        if data.get("department_id") is not None:
            changes["department_id"] = self._check_department(data["department_id"])
        if data.get("capacity") is not None:
            changes["capacity"] = require_positive_int(data["capacity"], "Capacity")
        if data.get("start_date") is not None:
            changes["start_date"] = optional_date(data["start_date"], "Start date")
        if data.get("end_date") is not None:
            changes["end_date"] = optional_date(data["end_date"], "End date")

        _check_window(changes.get("start_date", shift.start_date), changes.get("end_date", shift.end_date))

        if not self._shifts.update(shift.id, changes=changes):
            raise NotFoundError("Shift not found")
        return self.get_shift(shift.id)

    def _check_department(self, department_id: Any) -> int:
        department_id = require_positive_int(department_id, "Department ID")
        if not self._departments.get_by_id(department_id):
            raise NotFoundError("Department not found")
        return department_id


def _check_window(start: Optional[date], end: Optional[date]) -> None:
    if start and end and start > end:
        raise ValidationError("Start date must not be after end date")
