from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple

from mysql.connector import errors as mysql_errors

from ..core.enums import OperatorStatus, SkillLevel
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, duplicate_key_name, fetchall, fetchone
from .model import Operator, OperatorView
from .repository import OperatorRepository

_OPERATOR_COLUMNS = "id, name, email, employee_id, department_id, skill_level, status, last_active"

# Columns a partial update may touch.
_UPDATABLE = ("name", "email", "employee_id", "department_id", "skill_level", "status")


def _to_operator(r: Dict[str, Any]) -> Operator:
    return Operator(
        id=int(r["id"]),
        name=r["name"],
        email=r["email"],
        employee_id=r.get("employee_id"),
        department_id=r.get("department_id"),
        skill_level=SkillLevel(r["skill_level"]),
        status=OperatorStatus(r["status"]),
        last_active=r.get("last_active"),
    )


def _db_value(value: Any) -> Any:
    return value.value if isinstance(value, (SkillLevel, OperatorStatus)) else value


class MySQLOperatorRepository(OperatorRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, operator_id: int) -> Optional[Operator]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_OPERATOR_COLUMNS} FROM operators WHERE id=%s", (int(operator_id),))
            r = fetchone(cur)
            return _to_operator(r) if r else None

    def list_with_assignments(self, *, on_date: date) -> Sequence[OperatorView]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT o.id, o.name, o.email, o.employee_id, o.department_id, d.name AS department_name,
                       o.skill_level, o.status, o.last_active,
                       sa.station_id, s.name AS station_name, pl.name AS line_name
                FROM operators o
                LEFT JOIN departments d ON d.id = o.department_id
                LEFT JOIN shift_assignments sa ON sa.operator_id = o.id AND sa.assigned_date = %s
                LEFT JOIN stations s ON s.id = sa.station_id
                LEFT JOIN production_lines pl ON pl.id = s.line_id
                ORDER BY o.name, o.id, sa.shift_id
                """,
                (on_date,),
            )
            rows = fetchall(cur)
            return [
                OperatorView(
                    id=int(r["id"]),
                    name=r["name"],
                    email=r["email"],
                    employee_id=r.get("employee_id"),
                    department_id=r.get("department_id"),
                    department_name=r.get("department_name"),
                    skill_level=SkillLevel(r["skill_level"]),
                    status=OperatorStatus(r["status"]),
                    last_active=r.get("last_active"),
                    station_id=r.get("station_id"),
                    station_name=r.get("station_name"),
                    line_name=r.get("line_name"),
                )
                for r in rows
            ]

    def create(
        self,
        *,
        name: str,
        email: str,
        employee_id: Optional[str],
        department_id: Optional[int],
        skill_level: SkillLevel,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO operators(name, email, employee_id, department_id, skill_level)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (name, email, employee_id, department_id, skill_level.value),
            )
            return int(cur.lastrowid)

    def update(self, operator_id: int, *, changes: Mapping[str, Any], last_active: datetime) -> bool:
        columns = [c for c in _UPDATABLE if c in changes]
        assignments = [f"{c}=%s" for c in columns] + ["last_active=%s"]
        params = [_db_value(changes[c]) for c in columns] + [last_active, int(operator_id)]

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"UPDATE operators SET {', '.join(assignments)} WHERE id=%s", tuple(params))
            return cur.rowcount > 0

    def set_status(self, operator_id: int, *, status: OperatorStatus, last_active: datetime) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE operators SET status=%s, last_active=%s WHERE id=%s",
                (status.value, last_active, int(operator_id)),
            )
            return cur.rowcount > 0

    def delete(self, operator_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM operators WHERE id=%s", (int(operator_id),))
            return cur.rowcount > 0

    def upsert_by_email(
        self,
        *,
        name: str,
        email: str,
        employee_id: Optional[str],
        department_id: Optional[int],
        skill_level: SkillLevel,
    ) -> Tuple[int, bool]:
        update_sql = """
            UPDATE operators
            SET name=%s, employee_id=%s, department_id=%s, skill_level=%s
            WHERE email=%s
        """
        update_params = (name, employee_id, department_id, skill_level.value, email)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id FROM operators WHERE email=%s FOR UPDATE", (email,))
            existing = fetchone(cur)
            if existing:
                cur.execute(update_sql, update_params)
                return int(existing["id"]), False

            try:
                cur.execute(
                    """
                    INSERT INTO operators(name, email, employee_id, department_id, skill_level)
                    VALUES(%s,%s,%s,%s,%s)
                    """,
                    (name, email, employee_id, department_id, skill_level.value),
                )
                return int(cur.lastrowid), True
            except mysql_errors.IntegrityError as e:
                if duplicate_key_name(e) != "uq_operator_email":
                    raise

            # A concurrent insert of the same email won; fall back to updating it.
            cur.execute(update_sql, update_params)
            cur.execute("SELECT id FROM operators WHERE email=%s", (email,))
            return int(fetchone(cur)["id"]), False
