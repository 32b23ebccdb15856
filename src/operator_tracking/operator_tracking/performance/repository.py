from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import StationPerformance


class PerformanceRepository(Protocol):
    """Append-only store of station performance snapshots."""

    def add(
        self,
        *,
        station_id: int,
        operator_id: Optional[int],
        shift_id: Optional[int],
        work_date: date,
        efficiency_percentage: float,
        units_produced: int,
        target_units: int,
        downtime_minutes: int,
    ) -> int:
        raise NotImplementedError

    def list(
        self,
        *,
        station_id: Optional[int] = None,
        start: Optional[date] = None,
        end: Optional[date] = None,
        limit: int = 200,
    ) -> Sequence[StationPerformance]:
        """Newest first."""

        raise NotImplementedError
