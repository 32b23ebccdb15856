from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, time

import pytest

from src.operator_tracking.operator_tracking.container import Container, build_services
from src.operator_tracking.operator_tracking.lines.model import LineSummary, Station
from src.operator_tracking.operator_tracking.shifts.model import Shift
from tests.fakes import (
    InMemoryAssignments,
    InMemoryAttendance,
    InMemoryDashboard,
    InMemoryDepartments,
    InMemoryLines,
    InMemoryOperators,
    InMemoryPerformance,
    InMemoryShifts,
    InMemoryStations,
)


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 3, 2, 8, 0, 0)


@dataclass
class Repos:
    departments: InMemoryDepartments
    lines: InMemoryLines
    stations: InMemoryStations
    operators: InMemoryOperators
    shifts: InMemoryShifts
    assignments: InMemoryAssignments
    attendance: InMemoryAttendance
    performance: InMemoryPerformance
    dashboard: InMemoryDashboard


@pytest.fixture
def repos(fixed_now) -> Repos:
    departments = InMemoryDepartments(["Assembly", "Quality Control"])
    operators = InMemoryOperators()
    shifts = InMemoryShifts()
    shifts.add(Shift(id=1, name="Morning", start_time=time(6, 0), end_time=time(14, 0), department_id=1, capacity=10))
    shifts.add(Shift(id=2, name="Night", start_time=time(22, 0), end_time=time(6, 0), department_id=1, capacity=5))

    return Repos(
        departments=departments,
        lines=InMemoryLines(
            [
                LineSummary(
                    id=1,
                    name="Line A",
                    department_id=1,
                    department_name="Assembly",
                    capacity=4,
                    status="active",
                    efficiency_target=85.0,
                    station_count=2,
                    avg_efficiency=80.0,
                )
            ]
        ),
        stations=InMemoryStations(
            [
                Station(id=1, name="Press", line_id=1, position_order=1, status="active",
                        efficiency_percentage=82.5, target_efficiency=85.0),
                Station(id=2, name="Weld", line_id=1, position_order=2, status="active",
                        efficiency_percentage=77.5, target_efficiency=85.0),
            ]
        ),
        operators=operators,
        shifts=shifts,
        assignments=InMemoryAssignments(),
        attendance=InMemoryAttendance(operators),
        performance=InMemoryPerformance(),
        dashboard=InMemoryDashboard(now=fixed_now),
    )


@pytest.fixture
def container(repos: Repos) -> Container:
    return build_services(
        departments_repo=repos.departments,
        lines_repo=repos.lines,
        stations_repo=repos.stations,
        operators_repo=repos.operators,
        shifts_repo=repos.shifts,
        assignments_repo=repos.assignments,
        attendance_repo=repos.attendance,
        performance_repo=repos.performance,
        dashboard_repo=repos.dashboard,
    )
