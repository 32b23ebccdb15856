"""End-to-end checks against a real MySQL server.

Run with OPTRACK_TEST_MYSQL=1 and DB_* pointing at a disposable database.
"""

from __future__ import annotations

import importlib
import os
import uuid
from concurrent.futures import ThreadPoolExecutor
from datetime import date, datetime, timedelta

import pytest

pytestmark = pytest.mark.skipif(os.getenv("OPTRACK_TEST_MYSQL") != "1", reason="needs a MySQL server")


@pytest.fixture(scope="module")
def live():
    from src.operator_tracking.operator_tracking.container import build_container
    from src.operator_tracking.operator_tracking.database.bootstrap import apply_schema, apply_seed_sql

    os.environ.setdefault("APP_ENV", "testing")
    settings = importlib.import_module("config.testing")
    db_config = dict(settings.DB_CONFIG)
    apply_schema(db_config)
    apply_seed_sql(db_config)
    return build_container(db_config=db_config)


def _new_operator(live):
    email = f"{uuid.uuid4().hex[:10]}@example.com"
    return live.operator_service.create_operator(name="Live Test", email=email)


def test_concurrent_clock_in_creates_one_log(live):
    from src.operator_tracking.operator_tracking.core.exceptions import ConflictError

    operator = _new_operator(live)
    now = datetime.now().replace(microsecond=0)

    def clock_in(_):
        try:
            live.attendance_service.clock_in(operator.id, now=now)
            return "ok"
        except ConflictError:
            return "conflict"

    with ThreadPoolExecutor(max_workers=4) as pool:
        outcomes = list(pool.map(clock_in, range(4)))

    assert outcomes.count("ok") == 1
    assert len(live.attendance_service.list_attendance(work_date=now.date(), operator_id=operator.id)) == 1

    record = live.attendance_service.clock_out(operator.id, now=now + timedelta(hours=2))
    assert record.total_hours == 2.0


def test_reassignment_keeps_single_row(live):
    operator = _new_operator(live)
    shift = live.shift_service.list_shifts()[0]
    day = date.today() + timedelta(days=400)

    first = live.assignment_service.assign(shift_id=shift.id, operator_id=operator.id, assigned_date=day)
    second = live.assignment_service.assign(shift_id=shift.id, operator_id=operator.id, assigned_date=day)

    assert first.id == second.id
    rows = [a for a in live.assignment_service.list_assignments(assigned_date=day) if a.operator_id == operator.id]
    assert len(rows) == 1


def test_delete_operator_cascades(live):
    operator = _new_operator(live)
    now = datetime.now().replace(microsecond=0)
    live.attendance_service.clock_in(operator.id, now=now)

    live.operator_service.delete_operator(operator.id)

    assert live.attendance_service.list_attendance(operator_id=operator.id) == []


def test_line_average_counts_each_station_once(live):
    line = next(candidate for candidate in live.line_service.list_lines() if candidate.station_count >= 2)
    stations = live.line_service.list_stations(line_id=line.id)
    station_ids = sorted({s.id for s in stations})
    live.line_service.update_efficiency(station_ids[0], 100)
    for station_id in station_ids[1:]:
        live.line_service.update_efficiency(station_id, 0)

    day = date.today() + timedelta(days=1000 + uuid.uuid4().int % 5000)
    for shift in live.shift_service.list_shifts()[:2]:
        live.assignment_service.assign(
            shift_id=shift.id, operator_id=_new_operator(live).id, station_id=station_ids[0], assigned_date=day
        )

    snapshot = live.dashboard_service.snapshot(today=day)
    occupancy = next(o for o in snapshot.lines if o.line_id == line.id)

    assert occupancy.total_stations == len(station_ids)
    assert occupancy.occupied_stations == 1
    assert occupancy.avg_efficiency == pytest.approx(100 / len(station_ids))
