from __future__ import annotations

import logging
from datetime import date
from typing import Any, Optional, Sequence

from ..common.datetime_utils import optional_date
from ..common.validators import optional_positive_int, require_positive_int
from ..core.exceptions import ConflictError, NotFoundError
from ..lines.repository import StationRepository
from ..operators.repository import OperatorRepository
from ..shifts.repository import ShiftRepository
from .model import AssignmentView, ShiftAssignment
from .repository import AssignmentRepository

logger = logging.getLogger(__name__)


class AssignmentService:
    """Binds operators to shifts (and stations) per date.

    Shift capacity is reported, not enforced. A station is held by at most one
    operator per (shift, date).
    """

    def __init__(
        self,
        assignments: AssignmentRepository,
        shifts: ShiftRepository,
        operators: OperatorRepository,
        stations: StationRepository,
    ):
        self._assignments = assignments
        self._shifts = shifts
        self._operators = operators
        self._stations = stations

    def assign(
        self,
        *,
        shift_id: Any,
        operator_id: Any,
        station_id: Any = None,
        assigned_date: Any = None,
    ) -> ShiftAssignment:
        shift_id = require_positive_int(shift_id, "Shift ID")
        operator_id = require_positive_int(operator_id, "Operator ID")
        station_id = optional_positive_int(station_id, "Station ID")
        work_date = optional_date(assigned_date, "Assigned date") or date.today()

        if not self._shifts.get_by_id(shift_id):
            raise NotFoundError("Shift not found")
        if not self._operators.get_by_id(operator_id):
            raise NotFoundError("Operator not found")

        if station_id is not None:
            if not self._stations.get_by_id(station_id):
                raise NotFoundError("Station not found")
            holder = self._assignments.find_station_holder(
                station_id=station_id, shift_id=shift_id, assigned_date=work_date
            )
            if holder and holder.operator_id != operator_id:
                raise ConflictError("Station is already assigned for this shift and date", constraint="uq_station_slot")

        assignment = self._assignments.upsert(
            shift_id=shift_id,
            operator_id=operator_id,
            assigned_date=work_date,
            station_id=station_id,
        )
        logger.info(
            "Assigned operator %s to shift %s on %s (station=%s, assignment=%s)",
            operator_id, shift_id, work_date, station_id, assignment.id,
        )
        return assignment

    def remove(self, assignment_id: Any) -> ShiftAssignment:
        assignment = self._assignments.get_by_id(require_positive_int(assignment_id, "Assignment ID"))
        if not assignment or not self._assignments.delete(assignment.id):
            raise NotFoundError("Assignment not found")
        logger.info("Removed assignment %s", assignment.id)
        return assignment

    def list_assignments(self, *, assigned_date: Any = None, shift_id: Any = None) -> Sequence[AssignmentView]:
        work_date: Optional[date] = optional_date(assigned_date, "Date") or date.today()
        return self._assignments.list_for_date(
            assigned_date=work_date, shift_id=optional_positive_int(shift_id, "Shift ID")
        )
