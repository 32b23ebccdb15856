from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class StationPerformance:
    """Historical snapshot of a station's output. Never updated once written."""

    id: int
    station_id: int
    operator_id: Optional[int]
    work_date: date
    shift_id: Optional[int]
    efficiency_percentage: float
    units_produced: int
    target_units: int
    downtime_minutes: int
    station_name: Optional[str] = None
    operator_name: Optional[str] = None
