from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, to_float
from .model import Station, StationView
from .repository import StationRepository


class MySQLStationRepository(StationRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, station_id: int) -> Optional[Station]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, name, line_id, position_order, status, efficiency_percentage, target_efficiency
                FROM stations
                WHERE id=%s
                """,
                (int(station_id),),
            )
            r = fetchone(cur)
            if not r:
                return None
            return Station(
                id=int(r["id"]),
                name=r["name"],
                line_id=int(r["line_id"]),
                position_order=int(r["position_order"]),
                status=r["status"],
                efficiency_percentage=to_float(r["efficiency_percentage"]),
                target_efficiency=to_float(r["target_efficiency"]),
            )

    def list_with_assignments(self, *, on_date: date, line_id: Optional[int] = None) -> Sequence[StationView]:
        clauses = []
        params: list[object] = [on_date]
        if line_id is not None:
            clauses.append("s.line_id=%s")
            params.append(int(line_id))

        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT s.id, s.name, s.line_id, pl.name AS line_name, s.position_order, s.status,
                       s.efficiency_percentage, s.target_efficiency,
                       o.id AS operator_id, o.name AS operator_name,
                       sa.shift_id, sa.id AS assignment_id
                FROM stations s
                LEFT JOIN production_lines pl ON pl.id = s.line_id
                LEFT JOIN shift_assignments sa ON sa.station_id = s.id AND sa.assigned_date = %s
                LEFT JOIN operators o ON o.id = sa.operator_id
                {where}
                ORDER BY s.line_id, s.position_order, sa.shift_id
                """,
                tuple(params),
            )
            rows = fetchall(cur)
            return [
                StationView(
                    id=int(r["id"]),
                    name=r["name"],
                    line_id=int(r["line_id"]),
                    line_name=r.get("line_name"),
                    position_order=int(r["position_order"]),
                    status=r["status"],
                    efficiency_percentage=to_float(r["efficiency_percentage"]),
                    target_efficiency=to_float(r["target_efficiency"]),
                    operator_id=r.get("operator_id"),
                    operator_name=r.get("operator_name"),
                    shift_id=r.get("shift_id"),
                    assignment_id=r.get("assignment_id"),
                )
                for r in rows
            ]

    def update_efficiency(self, station_id: int, efficiency_percentage: float) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE stations SET efficiency_percentage=%s WHERE id=%s",
                (efficiency_percentage, int(station_id)),
            )
            return cur.rowcount > 0
