from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from mysql.connector import errors as mysql_errors

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, duplicate_key_name, fetchall, fetchone
from .model import AssignmentView, ShiftAssignment
from .repository import AssignmentRepository


class MySQLAssignmentRepository(AssignmentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, assignment_id: int) -> Optional[ShiftAssignment]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, shift_id, operator_id, assigned_date, station_id
                FROM shift_assignments
                WHERE id=%s
                """,
                (int(assignment_id),),
            )
            r = fetchone(cur)
            if not r:
                return None
            return ShiftAssignment(
                id=int(r["id"]),
                shift_id=int(r["shift_id"]),
                operator_id=int(r["operator_id"]),
                assigned_date=r["assigned_date"],
                station_id=r.get("station_id"),
            )

    def find_station_holder(self, *, station_id: int, shift_id: int, assigned_date: date) -> Optional[ShiftAssignment]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, shift_id, operator_id, assigned_date, station_id
                FROM shift_assignments
                WHERE station_id=%s AND shift_id=%s AND assigned_date=%s
                """,
                (int(station_id), int(shift_id), assigned_date),
            )
            r = fetchone(cur)
            if not r:
                return None
            return ShiftAssignment(
                id=int(r["id"]),
                shift_id=int(r["shift_id"]),
                operator_id=int(r["operator_id"]),
                assigned_date=r["assigned_date"],
                station_id=r.get("station_id"),
            )

    def upsert(
        self,
        *,
        shift_id: int,
        operator_id: int,
        assigned_date: date,
        station_id: Optional[int] = None,
    ) -> ShiftAssignment:
        key = (int(shift_id), int(operator_id), assigned_date)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id FROM shift_assignments
                WHERE shift_id=%s AND operator_id=%s AND assigned_date=%s
                FOR UPDATE
                """,
                key,
            )
            existing = fetchone(cur)

            assignment_id: Optional[int] = None
            if existing:
                assignment_id = int(existing["id"])
                cur.execute("UPDATE shift_assignments SET station_id=%s WHERE id=%s", (station_id, assignment_id))
            else:
                try:
                    cur.execute(
                        """
                        INSERT INTO shift_assignments(shift_id, operator_id, assigned_date, station_id)
                        VALUES(%s,%s,%s,%s)
                        """,
                        key + (station_id,),
                    )
                    assignment_id = int(cur.lastrowid)
                except mysql_errors.IntegrityError as e:
                    if duplicate_key_name(e) != "uq_assignment_slot":
                        raise

            if assignment_id is None:
                # A concurrent insert for the same key won; update its station instead.
                cur.execute(
                    """
                    UPDATE shift_assignments SET station_id=%s
                    WHERE shift_id=%s AND operator_id=%s AND assigned_date=%s
                    """,
                    (station_id,) + key,
                )
                cur.execute(
                    "SELECT id FROM shift_assignments WHERE shift_id=%s AND operator_id=%s AND assigned_date=%s",
                    key,
                )
                assignment_id = int(fetchone(cur)["id"])

            return ShiftAssignment(
                id=assignment_id,
                shift_id=key[0],
                operator_id=key[1],
                assigned_date=assigned_date,
                station_id=station_id,
            )

    def delete(self, assignment_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM shift_assignments WHERE id=%s", (int(assignment_id),))
            return cur.rowcount > 0

    def list_for_date(self, *, assigned_date: date, shift_id: Optional[int] = None) -> Sequence[AssignmentView]:
        clauses = ["sa.assigned_date=%s"]
        params: list[object] = [assigned_date]
        if shift_id is not None:
            clauses.append("sa.shift_id=%s")
            params.append(int(shift_id))

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT sa.id, sa.assigned_date, sa.shift_id, sh.name AS shift_name,
                       sa.operator_id, o.name AS operator_name,
                       sa.station_id, st.name AS station_name, pl.name AS line_name
                FROM shift_assignments sa
                JOIN shifts sh ON sh.id = sa.shift_id
                JOIN operators o ON o.id = sa.operator_id
                LEFT JOIN stations st ON st.id = sa.station_id
                LEFT JOIN production_lines pl ON pl.id = st.line_id
                WHERE {where}
                ORDER BY sh.start_time, pl.name, st.position_order, o.name
                """,
                tuple(params),
            )
            rows = fetchall(cur)
            return [
                AssignmentView(
                    id=int(r["id"]),
                    assigned_date=r["assigned_date"],
                    shift_id=int(r["shift_id"]),
                    shift_name=r["shift_name"],
                    operator_id=int(r["operator_id"]),
                    operator_name=r["operator_name"],
                    station_id=r.get("station_id"),
                    station_name=r.get("station_name"),
                    line_name=r.get("line_name"),
                )
                for r in rows
            ]
