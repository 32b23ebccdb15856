from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Station:
    """A physical work position within a production line."""

    id: int
    name: str
    line_id: int
    position_order: int
    status: str
    efficiency_percentage: float
    target_efficiency: float


@dataclass(frozen=True)
class LineSummary:
    """Read-model: active line with station count and average efficiency."""

    id: int
    name: str
    department_id: Optional[int]
    department_name: Optional[str]
    capacity: int
    status: str
    efficiency_target: float
    station_count: int
    avg_efficiency: Optional[float]


@dataclass(frozen=True)
class StationView:
    """Read-model: station with the assignment held on the requested date."""

    id: int
    name: str
    line_id: int
    line_name: Optional[str]
    position_order: int
    status: str
    efficiency_percentage: float
    target_efficiency: float
    operator_id: Optional[int] = None
    operator_name: Optional[str] = None
    shift_id: Optional[int] = None
    assignment_id: Optional[int] = None
