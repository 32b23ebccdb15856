from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, to_float
from .model import StationPerformance
from .repository import PerformanceRepository


class MySQLPerformanceRepository(PerformanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO station_performance
                    (station_id, operator_id, work_date, shift_id, efficiency_percentage,
                     units_produced, target_units, downtime_minutes)
                VALUES (%s, %s, %s, %s, %s, %s, %s, %s)
                """,
                (
                    int(station_id),
                    operator_id,
                    work_date,
                    shift_id,
                    efficiency_percentage,
                    units_produced,
                    target_units,
                    downtime_minutes,
                ),
            )
            return int(cur.lastrowid)

    def list(
        self,
        *,
        station_id: Optional[int] = None,
        start: Optional[date] = None,
        end: Optional[date] = None,
        limit: int = 200,
    ) -> Sequence[StationPerformance]:
        clauses = []
        params: list[object] = []
        if station_id is not None:
            clauses.append("sp.station_id=%s")
            params.append(int(station_id))
        if start is not None:
            clauses.append("sp.work_date >= %s")
            params.append(start)
        if end is not None:
            clauses.append("sp.work_date <= %s")
            params.append(end)

        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""
        params.append(int(limit))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT sp.id, sp.station_id, sp.operator_id, sp.work_date, sp.shift_id,
                       sp.efficiency_percentage, sp.units_produced, sp.target_units, sp.downtime_minutes,
                       s.name AS station_name, o.name AS operator_name
                FROM station_performance sp
                JOIN stations s ON s.id = sp.station_id
                LEFT JOIN operators o ON o.id = sp.operator_id
                {where}
                ORDER BY sp.work_date DESC, sp.id DESC
                LIMIT %s
                """,
                tuple(params),
            )
            return [
                StationPerformance(
                    id=int(r["id"]),
                    station_id=int(r["station_id"]),
                    operator_id=r.get("operator_id"),
                    work_date=r["work_date"],
                    shift_id=r.get("shift_id"),
                    efficiency_percentage=to_float(r["efficiency_percentage"]),
                    units_produced=int(r["units_produced"]),
                    target_units=int(r["target_units"]),
                    downtime_minutes=int(r["downtime_minutes"]),
                    station_name=r.get("station_name"),
                    operator_name=r.get("operator_name"),
                )
                for r in fetchall(cur)
            ]
