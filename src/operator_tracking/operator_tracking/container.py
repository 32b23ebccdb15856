from __future__ import annotations

from dataclasses import dataclass

from .assignments.mysql_assignment_repository import MySQLAssignmentRepository
from .assignments.service import AssignmentService
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.service import AttendanceService
from .dashboard.mysql_dashboard_repository import MySQLDashboardRepository
from .dashboard.service import DashboardService
from .database.connection import DBConfig, DatabaseConnection
from .departments.mysql_department_repository import MySQLDepartmentRepository
from .departments.service import DepartmentService
from .imports.service import OperatorImportService
from .lines.mysql_line_repository import MySQLLineRepository
from .lines.mysql_station_repository import MySQLStationRepository
from .lines.service import LineService
from .operators.mysql_operator_repository import MySQLOperatorRepository
from .operators.service import OperatorService
from .performance.mysql_performance_repository import MySQLPerformanceRepository
from .performance.service import PerformanceService
from .shifts.mysql_shift_repository import MySQLShiftRepository
from .shifts.service import ShiftService


@dataclass(frozen=True)
class Container:
    """Service registry handed to every controller's `register`."""

    department_service: DepartmentService
    line_service: LineService
    operator_service: OperatorService
    shift_service: ShiftService
    assignment_service: AssignmentService
    attendance_service: AttendanceService
    import_service: OperatorImportService
    performance_service: PerformanceService
    dashboard_service: DashboardService


def build_services(
    *,
    departments_repo,
    lines_repo,
    stations_repo,
    operators_repo,
    shifts_repo,
    assignments_repo,
    attendance_repo,
    performance_repo,
    dashboard_repo,
) -> Container:
    """Wire services over any set of repositories (MySQL or in-memory)."""
    department_service = DepartmentService(departments_repo)

    return Container(
        department_service=department_service,
        line_service=LineService(lines_repo, stations_repo),
        operator_service=OperatorService(operators_repo, departments_repo),
        shift_service=ShiftService(shifts_repo, departments_repo),
        assignment_service=AssignmentService(assignments_repo, shifts_repo, operators_repo, stations_repo),
        attendance_service=AttendanceService(attendance_repo, operators_repo, shifts_repo),
        import_service=OperatorImportService(operators_repo, department_service),
        performance_service=PerformanceService(performance_repo, stations_repo, operators_repo, shifts_repo),
        dashboard_service=DashboardService(dashboard_repo),
    )


def build_container(*, db_config: dict) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return build_services(
        departments_repo=MySQLDepartmentRepository(conn),
        lines_repo=MySQLLineRepository(conn),
        stations_repo=MySQLStationRepository(conn),
        operators_repo=MySQLOperatorRepository(conn),
        shifts_repo=MySQLShiftRepository(conn),
        assignments_repo=MySQLAssignmentRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        performance_repo=MySQLPerformanceRepository(conn),
        dashboard_repo=MySQLDashboardRepository(conn),
    )
