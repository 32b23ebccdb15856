from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Department
from .repository import DepartmentRepository


class MySQLDepartmentRepository(DepartmentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Department]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id, name, description FROM departments ORDER BY name")
            rows = fetchall(cur)
            return [Department(id=int(r["id"]), name=r["name"], description=r.get("description")) for r in rows]

    def get_by_id(self, department_id: int) -> Optional[Department]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id, name, description FROM departments WHERE id=%s", (int(department_id),))
            r = fetchone(cur)
            if not r:
                return None
            return Department(id=int(r["id"]), name=r["name"], description=r.get("description"))

    def find_id_by_name(self, name: str) -> Optional[int]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT id FROM departments WHERE LOWER(name)=LOWER(%s) ORDER BY id LIMIT 1",
                (name.strip(),),
            )
            r = fetchone(cur)
            return int(r["id"]) if r else None

    def create(self, *, name: str, description: Optional[str] = None) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("INSERT INTO departments(name, description) VALUES(%s,%s)", (name, description))
            return int(cur.lastrowid)
