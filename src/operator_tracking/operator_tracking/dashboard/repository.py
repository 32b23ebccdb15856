from __future__ import annotations

from datetime import date, datetime
from typing import Dict, Protocol, Sequence

from .model import LineOccupancy


class DashboardRepository(Protocol):
    def operator_counts_by_status(self) -> Dict[str, int]:
        raise NotImplementedError

    def attendance_counts_by_status(self, work_date: date) -> Dict[str, int]:
        raise NotImplementedError

    def line_occupancy(self, on_date: date) -> Sequence[LineOccupancy]:
        """Active lines with station totals and stations assigned on `on_date`."""

        raise NotImplementedError

    def ping(self) -> datetime:
        """Database server time; raises StoreUnavailableError when unreachable."""

        raise NotImplementedError
