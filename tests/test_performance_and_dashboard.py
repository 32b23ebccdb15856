from __future__ import annotations

from datetime import date

import pytest

from src.operator_tracking.operator_tracking.core.exceptions import NotFoundError, ValidationError
from src.operator_tracking.operator_tracking.dashboard.model import LineOccupancy


def test_record_performance(container, repos):
    ann = repos.operators.add("Ann", "ann@example.com")

    record = container.performance_service.record_performance(
        1,
        {
            "operator_id": ann.id,
            "shift_id": 1,
            "work_date": "2026-03-02",
            "efficiency_percentage": 88.5,
            "units_produced": 120,
            "target_units": 130,
            "downtime_minutes": "15",
        },
    )

    assert record.station_id == 1
    assert record.operator_id == ann.id
    assert record.work_date == date(2026, 3, 2)
    assert record.downtime_minutes == 15
    assert len(repos.performance.rows) == 1


def test_record_performance_defaults(container, fixed_now):
    record = container.performance_service.record_performance(2, {}, today=fixed_now.date())

    assert record.work_date == fixed_now.date()
    assert (record.units_produced, record.target_units, record.downtime_minutes) == (0, 0, 0)
    assert record.efficiency_percentage == 0.0


@pytest.mark.parametrize(
    "data, error",
    [
        ({"units_produced": -1}, ValidationError),
        ({"downtime_minutes": -5}, ValidationError),
        ({"efficiency_percentage": 1200}, ValidationError),
        ({"operator_id": 999}, NotFoundError),
        ({"shift_id": 999}, NotFoundError),
    ],
)
def test_record_performance_validation(container, data, error):
    with pytest.raises(error):
        container.performance_service.record_performance(1, data)


def test_record_performance_unknown_station(container):
    with pytest.raises(NotFoundError, match="Station"):
        container.performance_service.record_performance(99, {})


def test_list_performance_filters(container):
    for day in ("2026-03-01", "2026-03-02", "2026-03-03"):
        container.performance_service.record_performance(1, {"work_date": day})
    container.performance_service.record_performance(2, {"work_date": "2026-03-02"})

    rows = container.performance_service.list_performance(station_id=1, start="2026-03-02", end="2026-03-03")

    assert [r.work_date for r in rows] == [date(2026, 3, 3), date(2026, 3, 2)]
    with pytest.raises(ValidationError):
        container.performance_service.list_performance(start="2026-03-05", end="2026-03-01")


def test_dashboard_snapshot(container, repos, fixed_now):
    repos.dashboard.operator_counts = {"online": 3, "offline": 1}
    repos.dashboard.attendance_counts = {"present": 3}
    repos.dashboard.lines = [
        LineOccupancy(line_id=1, line_name="Line A", total_stations=4, occupied_stations=3, avg_efficiency=81.0)
    ]

    snapshot = container.dashboard_service.snapshot(fixed_now.date())

    assert snapshot.date == fixed_now.date()
    assert snapshot.operators_by_status == {"online": 3, "offline": 1}
    assert snapshot.attendance_by_status == {"present": 3}
    assert snapshot.lines[0].occupied_stations == 3


def test_health_ok_and_disconnected(container, repos, fixed_now):
    health = container.dashboard_service.health()
    assert health.ok
    assert health.timestamp == fixed_now

    repos.dashboard.down = True
    health = container.dashboard_service.health()
    assert (health.status, health.database) == ("ERROR", "Disconnected")
    assert not health.ok
