from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from ..core.exceptions import DomainError
from .model import DashboardSnapshot, HealthStatus
from .repository import DashboardRepository

logger = logging.getLogger(__name__)


class DashboardService:
    def __init__(self, dashboard: DashboardRepository):
        self._dashboard = dashboard

    def snapshot(self, today: Optional[date] = None) -> DashboardSnapshot:
        today = today or date.today()
        return DashboardSnapshot(
            date=today,
            operators_by_status=self._dashboard.operator_counts_by_status(),
            attendance_by_status=self._dashboard.attendance_counts_by_status(today),
            lines=list(self._dashboard.line_occupancy(today)),
        )

    def health(self) -> HealthStatus:
        """Store connectivity probe. Reports failure instead of raising."""
        try:
            timestamp = self._dashboard.ping()
        except DomainError as e:
            logger.error("Health check failed: %s", e)
            return HealthStatus(status="ERROR", database="Disconnected")
        return HealthStatus(status="OK", database="Connected", timestamp=timestamp)
