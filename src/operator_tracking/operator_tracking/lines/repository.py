from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import LineSummary, Station, StationView


class LineRepository(Protocol):
    def list_active(self) -> Sequence[LineSummary]:
        raise NotImplementedError


class StationRepository(Protocol):
    def get_by_id(self, station_id: int) -> Optional[Station]:
        raise NotImplementedError

    def list_with_assignments(self, *, on_date: date, line_id: Optional[int] = None) -> Sequence[StationView]:
        """Stations ordered by line then position, joined with assignments on `on_date`."""

        raise NotImplementedError

    def update_efficiency(self, station_id: int, efficiency_percentage: float) -> bool:
        raise NotImplementedError
