from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Dict, List, Optional


@dataclass(frozen=True)
class LineOccupancy:
    line_id: int
    line_name: str
    total_stations: int
    occupied_stations: int
    avg_efficiency: Optional[float]


@dataclass(frozen=True)
class DashboardSnapshot:
    """Aggregate counts for the polling dashboard."""

    date: date
    operators_by_status: Dict[str, int] = field(default_factory=dict)
    attendance_by_status: Dict[str, int] = field(default_factory=dict)
    lines: List[LineOccupancy] = field(default_factory=list)


@dataclass(frozen=True)
class HealthStatus:
    status: str
    database: str
    timestamp: Optional[datetime] = None

    @property
    def ok(self) -> bool:
        return self.status == "OK"
