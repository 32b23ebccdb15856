from __future__ import annotations

from datetime import date, datetime
from typing import Dict, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, to_float
from .model import LineOccupancy
from .repository import DashboardRepository


class MySQLDashboardRepository(DashboardRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def operator_counts_by_status(self) -> Dict[str, int]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT status, COUNT(*) AS count FROM operators GROUP BY status")
            return {r["status"]: int(r["count"]) for r in fetchall(cur)}

    def attendance_counts_by_status(self, work_date: date) -> Dict[str, int]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT status, COUNT(*) AS count FROM attendance_logs WHERE work_date=%s GROUP BY status",
                (work_date,),
            )
            return {r["status"]: int(r["count"]) for r in fetchall(cur)}

    def line_occupancy(self, on_date: date) -> Sequence[LineOccupancy]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT pl.id, pl.name,
                       COUNT(s.id) AS total_stations,
                       COALESCE(SUM(EXISTS(
                           SELECT 1 FROM shift_assignments sa
                           WHERE sa.station_id = s.id AND sa.assigned_date = %s
                       )), 0) AS occupied_stations,
                       AVG(s.efficiency_percentage) AS avg_efficiency
                FROM production_lines pl
                LEFT JOIN stations s ON s.line_id = pl.id
                WHERE pl.status = 'active'
                GROUP BY pl.id, pl.name
                ORDER BY pl.name
                """,
                (on_date,),
            )
            return [
                LineOccupancy(
                    line_id=int(r["id"]),
                    line_name=r["name"],
                    total_stations=int(r["total_stations"] or 0),
                    occupied_stations=int(r["occupied_stations"] or 0),
                    avg_efficiency=to_float(r["avg_efficiency"], default=None),
                )
                for r in fetchall(cur)
            ]

    def ping(self) -> datetime:
        with db_cursor(self._conn_factory, dictionary=False) as (_, cur):
            cur.execute("SELECT NOW()")
            row = fetchone(cur)
            return row[0] if row else None
