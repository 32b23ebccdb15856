from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, Optional, Sequence

from mysql.connector import errors as mysql_errors

from ..core.enums import AttendanceStatus, OperatorStatus
from ..core.exceptions import AlreadyClockedInError, NoActiveClockInError, NotFoundError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, duplicate_key_name, fetchall, fetchone, to_float
from .model import AttendanceLog, AttendanceLogView
from .repository import AttendanceRepository

_LOG_COLUMNS = "id, operator_id, work_date, clock_in, clock_out, total_hours, status, shift_id"


def _to_log(r: Dict[str, Any]) -> AttendanceLog:
    return AttendanceLog(
        id=int(r["id"]),
        operator_id=int(r["operator_id"]),
        work_date=r["work_date"],
        clock_in=r.get("clock_in"),
        clock_out=r.get("clock_out"),
        total_hours=to_float(r.get("total_hours")),
        status=AttendanceStatus(r["status"]),
        shift_id=r.get("shift_id"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceLog]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_LOG_COLUMNS} FROM attendance_logs WHERE id=%s", (int(attendance_id),))
            r = fetchone(cur)
            return _to_log(r) if r else None

    def get_for_operator_and_date(self, operator_id: int, work_date: date) -> Optional[AttendanceLog]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_LOG_COLUMNS} FROM attendance_logs WHERE operator_id=%s AND work_date=%s",
                (int(operator_id), work_date),
            )
            r = fetchone(cur)
            return _to_log(r) if r else None

    def clock_in(
        self,
        *,
        operator_id: int,
        work_date: date,
        clock_in: datetime,
        shift_id: Optional[int],
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_logs
                SET clock_in=%s, status=%s, shift_id=%s
                WHERE operator_id=%s AND work_date=%s AND clock_in IS NULL
                """,
                (clock_in, AttendanceStatus.PRESENT.value, shift_id, int(operator_id), work_date),
            )
            if cur.rowcount == 0:
                try:
                    cur.execute(
                        """
                        INSERT INTO attendance_logs(operator_id, work_date, clock_in, status, shift_id)
                        VALUES(%s,%s,%s,%s,%s)
                        """,
                        (int(operator_id), work_date, clock_in, AttendanceStatus.PRESENT.value, shift_id),
                    )
                except mysql_errors.IntegrityError as e:
                    if duplicate_key_name(e) == "uq_attendance_day":
                        raise AlreadyClockedInError() from e
                    raise

            cur.execute(
                "SELECT id FROM attendance_logs WHERE operator_id=%s AND work_date=%s",
                (int(operator_id), work_date),
            )
            attendance_id = int(fetchone(cur)["id"])

            cur.execute(
                "UPDATE operators SET status=%s, last_active=%s WHERE id=%s",
                (OperatorStatus.ONLINE.value, clock_in, int(operator_id)),
            )
            if cur.rowcount == 0:
                raise NotFoundError("Operator not found")

            return attendance_id

    def clock_out(
        self,
        *,
        attendance_id: int,
        operator_id: int,
        clock_out: datetime,
        total_hours: float,
    ) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_logs
                SET clock_out=%s, total_hours=%s
                WHERE id=%s AND operator_id=%s AND clock_in IS NOT NULL AND clock_out IS NULL
                """,
                (clock_out, total_hours, int(attendance_id), int(operator_id)),
            )
            if cur.rowcount == 0:
                raise NoActiveClockInError()

            cur.execute(
                "UPDATE operators SET status=%s, last_active=%s WHERE id=%s",
                (OperatorStatus.OFFLINE.value, clock_out, int(operator_id)),
            )

    def list_logs(
        self,
        *,
        work_date: Optional[date] = None,
        operator_id: Optional[int] = None,
        limit: int = 500,
    ) -> Sequence[AttendanceLogView]:
        clauses = []
        params: list[object] = []
        if work_date is not None:
            clauses.append("al.work_date=%s")
            params.append(work_date)
        if operator_id is not None:
            clauses.append("al.operator_id=%s")
            params.append(int(operator_id))

        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""
        params.append(int(limit))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT al.id, al.operator_id, o.name AS operator_name, o.email AS operator_email,
                       d.name AS department_name,
                       al.work_date, al.clock_in, al.clock_out, al.total_hours, al.status,
                       al.shift_id, s.name AS shift_name
                FROM attendance_logs al
                LEFT JOIN operators o ON o.id = al.operator_id
                LEFT JOIN departments d ON d.id = o.department_id
                LEFT JOIN shifts s ON s.id = al.shift_id
                {where}
                ORDER BY al.work_date DESC, o.name
                LIMIT %s
                """,
                tuple(params),
            )
            rows = fetchall(cur)
            return [
                AttendanceLogView(
                    id=int(r["id"]),
                    operator_id=int(r["operator_id"]),
                    operator_name=r.get("operator_name"),
                    operator_email=r.get("operator_email"),
                    department_name=r.get("department_name"),
                    work_date=r["work_date"],
                    clock_in=r.get("clock_in"),
                    clock_out=r.get("clock_out"),
                    total_hours=to_float(r.get("total_hours")),
                    status=AttendanceStatus(r["status"]),
                    shift_id=r.get("shift_id"),
                    shift_name=r.get("shift_name"),
                )
                for r in rows
            ]
