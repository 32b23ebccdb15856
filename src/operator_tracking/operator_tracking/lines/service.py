from __future__ import annotations

import logging
from datetime import date
from typing import Any, Optional, Sequence

from ..common.validators import optional_positive_int, require_number_in_range, require_positive_int
from ..core.constants import MAX_EFFICIENCY_PERCENTAGE
from ..core.exceptions import NotFoundError
from .model import LineSummary, Station, StationView
from .repository import LineRepository, StationRepository

logger = logging.getLogger(__name__)


class LineService:
    """Production lines and their stations."""

    def __init__(self, lines: LineRepository, stations: StationRepository):
        self._lines = lines
        self._stations = stations

    def list_lines(self) -> Sequence[LineSummary]:
        return self._lines.list_active()

    def list_stations(self, *, line_id: Any = None, today: Optional[date] = None) -> Sequence[StationView]:
        line_id = optional_positive_int(line_id, "Line ID")
        return self._stations.list_with_assignments(on_date=today or date.today(), line_id=line_id)

    def get_station(self, station_id: Any) -> Station:
        station = self._stations.get_by_id(require_positive_int(station_id, "Station ID"))
        if not station:
            raise NotFoundError("Station not found")
        return station

    def update_efficiency(self, station_id: Any, efficiency_percentage: Any) -> Station:
        value = require_number_in_range(
            efficiency_percentage, "Efficiency percentage", low=0, high=MAX_EFFICIENCY_PERCENTAGE
        )
        station = self.get_station(station_id)

        if not self._stations.update_efficiency(station.id, value):
            raise NotFoundError("Station not found")

        logger.info("Station %s efficiency %.2f -> %.2f", station.id, station.efficiency_percentage, value)
        return Station(
            id=station.id,
            name=station.name,
            line_id=station.line_id,
            position_order=station.position_order,
            status=station.status,
            efficiency_percentage=value,
            target_efficiency=station.target_efficiency,
        )
