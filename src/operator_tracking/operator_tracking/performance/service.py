from __future__ import annotations

import logging
from datetime import date
from typing import Any, Mapping, Optional, Sequence

from ..common.datetime_utils import optional_date
from ..common.validators import (
    optional_positive_int,
    require_non_negative_int,
    require_number_in_range,
    require_positive_int,
)
from ..core.constants import DEFAULT_PERFORMANCE_LIMIT, MAX_EFFICIENCY_PERCENTAGE
from ..core.exceptions import NotFoundError, ValidationError
from ..lines.repository import StationRepository
from ..operators.repository import OperatorRepository
from ..shifts.repository import ShiftRepository
from .model import StationPerformance
from .repository import PerformanceRepository

logger = logging.getLogger(__name__)


class PerformanceService:
    """Records and reads station performance history."""

    def __init__(
        self,
        performance: PerformanceRepository,
        stations: StationRepository,
        operators: OperatorRepository,
        shifts: ShiftRepository,
    ):
        self._performance = performance
        self._stations = stations
        self._operators = operators
        self._shifts = shifts

    def record_performance(
        self, station_id: Any, data: Mapping[str, Any], *, today: Optional[date] = None
    ) -> StationPerformance:
        station_id = require_positive_int(station_id, "Station ID")
        operator_id = optional_positive_int(data.get("operator_id"), "Operator ID")
        shift_id = optional_positive_int(data.get("shift_id"), "Shift ID")
        work_date = optional_date(data.get("work_date"), "Work date") or today or date.today()

        efficiency = require_number_in_range(
            data.get("efficiency_percentage", 0),
            "Efficiency percentage",
            low=0,
            high=MAX_EFFICIENCY_PERCENTAGE,
        )
        units_produced = require_non_negative_int(data.get("units_produced"), "Units produced")
        target_units = require_non_negative_int(data.get("target_units"), "Target units")
        downtime_minutes = require_non_negative_int(data.get("downtime_minutes"), "Downtime minutes")

        if not self._stations.get_by_id(station_id):
            raise NotFoundError("Station not found")
        if operator_id is not None and not self._operators.get_by_id(operator_id):
            raise NotFoundError("Operator not found")
        if shift_id is not None and not self._shifts.get_by_id(shift_id):
            raise NotFoundError("Shift not found")

        new_id = self._performance.add(
            station_id=station_id,
            operator_id=operator_id,
            shift_id=shift_id,
            work_date=work_date,
            efficiency_percentage=efficiency,
            units_produced=units_produced,
            target_units=target_units,
            downtime_minutes=downtime_minutes,
        )
        logger.info("Recorded performance %s for station %s on %s", new_id, station_id, work_date)

        return StationPerformance(
            id=new_id,
            station_id=station_id,
            operator_id=operator_id,
            work_date=work_date,
            shift_id=shift_id,
            efficiency_percentage=efficiency,
            units_produced=units_produced,
            target_units=target_units,
            downtime_minutes=downtime_minutes,
        )

    def list_performance(
        self,
        *,
        station_id: Any = None,
        start: Any = None,
        end: Any = None,
        limit: int = DEFAULT_PERFORMANCE_LIMIT,
    ) -> Sequence[StationPerformance]:
        station_id = optional_positive_int(station_id, "Station ID")
        start_date = optional_date(start, "Start date")
        end_date = optional_date(end, "End date")
        if start_date and end_date and start_date > end_date:
            raise ValidationError("Start date must be on or before end date")

        return self._performance.list(station_id=station_id, start=start_date, end=end_date, limit=limit)
