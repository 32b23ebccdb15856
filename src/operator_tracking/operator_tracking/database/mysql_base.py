from __future__ import annotations

import logging
import re
from contextlib import contextmanager
from datetime import time, timedelta
from typing import Any, Dict, List, Optional

from mysql.connector import errors as mysql_errors

from ..core.exceptions import ConflictError, DomainError, NotFoundError, StoreUnavailableError, ValidationError
from .connection import DatabaseConnection

logger = logging.getLogger(__name__)

ER_DUP_ENTRY = 1062
ER_BAD_NULL_ERROR = 1048
ER_ROW_IS_REFERENCED = 1451
ER_NO_REFERENCED_ROW = 1452
ER_LOCK_DEADLOCK = 1213
ER_WARN_DATA_OUT_OF_RANGE = 1264
ER_DATA_TOO_LONG = 1406

# User-facing messages per named unique key in schema.sql.
CONSTRAINT_MESSAGES = {
    "uq_department_name": "Department name already exists",
    "uq_line_name": "Production line name already exists",
    "uq_station_position": "A station with this name already exists at this position on the line",
    "uq_operator_email": "Email already exists",
    "uq_operator_employee_id": "Employee ID already exists",
    "uq_assignment_slot": "Operator is already assigned to this shift on this date",
    "uq_station_slot": "Station is already assigned for this shift and date",
    "uq_attendance_day": "Attendance already recorded for this operator today",
}

_DUP_KEY_RE = re.compile(r"for key '(?:[^'.]+\.)?([^']+)'")


def duplicate_key_name(err: mysql_errors.Error) -> Optional[str]:
    """Name of the unique key a duplicate-entry error tripped, if any."""
    if getattr(err, "errno", None) != ER_DUP_ENTRY:
        return None
    m = _DUP_KEY_RE.search(str(getattr(err, "msg", "") or err))
    return m.group(1) if m else None


def translate_error(err: mysql_errors.Error) -> DomainError:
    """Map a driver error onto the domain taxonomy without leaking driver text."""
    errno = getattr(err, "errno", None)

    if isinstance(err, (mysql_errors.InterfaceError, mysql_errors.OperationalError)):
        return StoreUnavailableError("Database is unavailable")

    if errno == ER_DUP_ENTRY:
        key = duplicate_key_name(err)
        return ConflictError(CONSTRAINT_MESSAGES.get(key or "", "Record already exists"), constraint=key)
    if errno == ER_NO_REFERENCED_ROW:
        return NotFoundError("Referenced record does not exist")
    if errno == ER_ROW_IS_REFERENCED:
        return ConflictError("Record is still referenced by other data")
    if errno == ER_LOCK_DEADLOCK:
        return ConflictError("Concurrent update detected, please retry")
    if errno == ER_BAD_NULL_ERROR:
        return ValidationError("A required field is missing")
    if errno == ER_DATA_TOO_LONG:
        return ValidationError("A value is too long for its field")
    if errno == ER_WARN_DATA_OUT_OF_RANGE:
        return ValidationError("A value is out of range for its field")

    return DomainError("Database error")


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """One connection, one transaction: commit on success, rollback on any error."""
    try:
        conn = conn_factory.connect()
    except mysql_errors.Error as e:
        logger.error("Database connection failed: %s", e)
        raise StoreUnavailableError("Database is unavailable") from e

    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except mysql_errors.Error as e:
        _safe_rollback(conn)
        logger.warning("Database statement failed: %s", e)
        raise translate_error(e) from e
    except Exception:
        _safe_rollback(conn)
        raise
    finally:
        conn.close()


def _safe_rollback(conn) -> None:
    try:
        conn.rollback()
    except mysql_errors.Error as e:
        logger.warning("Rollback failed: %s", e)


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def to_float(value: Any, default: Optional[float] = 0.0) -> Optional[float]:
    """DECIMAL/AVG columns come back as Decimal (or None for empty groups)."""
    if value is None:
        return default
    return round(float(value), 2)


def normalize_mysql_time(value: Any) -> Optional[time]:
    """Normalize MySQL TIME values across connector implementations.

    mysql-connector can return TIME as:
    - datetime.time
    - datetime.timedelta
    - string (e.g. '08:30:00')
    """

    if value is None:
        return None

    if isinstance(value, time):
        return value

    if isinstance(value, timedelta):
        total_seconds = int(value.total_seconds()) % 86400
        hours = total_seconds // 3600
        minutes = (total_seconds % 3600) // 60
        seconds = total_seconds % 60
        return time(hour=hours, minute=minutes, second=seconds)

    if isinstance(value, str):
        parts = value.strip().split(":")
        if len(parts) < 2:
            raise ValueError(f"Invalid time string: {value!r}")
        hours = int(parts[0])
        minutes = int(parts[1])
        seconds = int(parts[2]) if len(parts) >= 3 and parts[2] else 0
        return time(hour=hours, minute=minutes, second=seconds)

    raise TypeError(f"Unsupported MySQL TIME value type: {type(value)!r}")
