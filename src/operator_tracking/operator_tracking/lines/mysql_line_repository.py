from __future__ import annotations

from typing import Sequence

from ..core.enums import LineStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, to_float
from .model import LineSummary
from .repository import LineRepository


class MySQLLineRepository(LineRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_active(self) -> Sequence[LineSummary]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT pl.id, pl.name, pl.department_id, d.name AS department_name,
                       pl.capacity, pl.status, pl.efficiency_target,
                       COUNT(s.id) AS station_count,
                       AVG(s.efficiency_percentage) AS avg_efficiency
                FROM production_lines pl
                LEFT JOIN departments d ON d.id = pl.department_id
                LEFT JOIN stations s ON s.line_id = pl.id
                WHERE pl.status=%s
                GROUP BY pl.id, pl.name, pl.department_id, d.name, pl.capacity, pl.status, pl.efficiency_target
                ORDER BY pl.name
                """,
                (LineStatus.ACTIVE.value,),
            )
            rows = fetchall(cur)
            return [
                LineSummary(
                    id=int(r["id"]),
                    name=r["name"],
                    department_id=r.get("department_id"),
                    department_name=r.get("department_name"),
                    capacity=int(r["capacity"]),
                    status=r["status"],
                    efficiency_target=to_float(r["efficiency_target"]),
                    station_count=int(r["station_count"] or 0),
                    avg_efficiency=to_float(r.get("avg_efficiency"), default=None),
                )
                for r in rows
            ]
