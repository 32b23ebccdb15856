from __future__ import annotations

from datetime import date, time
from typing import Any, Mapping, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_time
from .model import Shift, ShiftView
from .repository import ShiftRepository

_UPDATABLE = ("name", "start_time", "end_time", "department_id", "capacity", "start_date", "end_date")


class MySQLShiftRepository(ShiftRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_active(self, *, on_date: date) -> Sequence[ShiftView]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT s.id, s.name, s.start_time, s.end_time, s.start_date, s.end_date,
                       s.department_id, d.name AS department_name, s.capacity, s.is_active,
                       COUNT(sa.id) AS assigned_count
                FROM shifts s
                LEFT JOIN departments d ON d.id = s.department_id
                LEFT JOIN shift_assignments sa ON sa.shift_id = s.id AND sa.assigned_date = %s
                WHERE s.is_active = 1
                GROUP BY s.id, s.name, s.start_time, s.end_time, s.start_date, s.end_date,
                         s.department_id, d.name, s.capacity, s.is_active
                ORDER BY s.start_time, s.id
                """,
                (on_date,),
            )
            rows = fetchall(cur)
            return [
                ShiftView(
                    id=int(r["id"]),
                    name=r["name"],
                    start_time=normalize_mysql_time(r["start_time"]),
                    end_time=normalize_mysql_time(r["end_time"]),
                    start_date=r.get("start_date"),
                    end_date=r.get("end_date"),
                    department_id=r.get("department_id"),
                    department_name=r.get("department_name"),
                    capacity=int(r["capacity"]),
                    is_active=bool(r["is_active"]),
                    assigned_count=int(r["assigned_count"] or 0),
                )
                for r in rows
            ]

    def get_by_id(self, shift_id: int) -> Optional[Shift]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, name, start_time, end_time, start_date, end_date, department_id, capacity, is_active
                FROM shifts
                WHERE id=%s
                """,
                (int(shift_id),),
            )
            r = fetchone(cur)
            if not r:
                return None
            return Shift(
                id=int(r["id"]),
                name=r["name"],
                start_time=normalize_mysql_time(r["start_time"]),
                end_time=normalize_mysql_time(r["end_time"]),
                department_id=r.get("department_id"),
                capacity=int(r["capacity"]),
                start_date=r.get("start_date"),
                end_date=r.get("end_date"),
                is_active=bool(r["is_active"]),
            )

    def create(
        self,
        *,
        name: str,
        start_time: time,
        end_time: time,
        department_id: int,
        capacity: int,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO shifts(name, start_time, end_time, start_date, end_date, department_id, capacity)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (name, start_time, end_time, start_date, end_date, int(department_id), int(capacity)),
            )
            return int(cur.lastrowid)

    def update(self, shift_id: int, *, changes: Mapping[str, Any]) -> bool:
        columns = [c for c in _UPDATABLE if c in changes]
        if not columns:
            return self.get_by_id(shift_id) is not None

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"UPDATE shifts SET {', '.join(f'{c}=%s' for c in columns)} WHERE id=%s",
                tuple(changes[c] for c in columns) + (int(shift_id),),
            )
            return cur.rowcount > 0
