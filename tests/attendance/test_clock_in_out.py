from __future__ import annotations

from datetime import timedelta

import pytest

from src.operator_tracking.operator_tracking.core.enums import AttendanceStatus, OperatorStatus
from src.operator_tracking.operator_tracking.core.exceptions import (
    AlreadyClockedInError,
    ConflictError,
    NoActiveClockInError,
    NotFoundError,
    ValidationError,
)


@pytest.fixture
def operator(repos):
    return repos.operators.add("Ann Smith", "ann@example.com")


def test_clock_in_creates_present_log_and_sets_operator_online(container, repos, operator, fixed_now):
    log = container.attendance_service.clock_in(operator.id, 1, now=fixed_now)

    assert log.work_date == fixed_now.date()
    assert log.clock_in == fixed_now
    assert log.clock_out is None
    assert log.status is AttendanceStatus.PRESENT
    assert log.shift_id == 1
    assert repos.operators.get_by_id(operator.id).status is OperatorStatus.ONLINE


def test_second_clock_in_same_day_is_conflict(container, repos, operator, fixed_now):
    container.attendance_service.clock_in(operator.id, now=fixed_now)

    with pytest.raises(AlreadyClockedInError) as exc:
        container.attendance_service.clock_in(operator.id, now=fixed_now + timedelta(hours=1))

    assert isinstance(exc.value, ConflictError)
    assert str(exc.value) == "Already clocked in today"
    assert len(repos.attendance.by_operator_date) == 1


def test_clock_in_again_after_clock_out_is_still_conflict(container, operator, fixed_now):
    container.attendance_service.clock_in(operator.id, now=fixed_now)
    container.attendance_service.clock_out(operator.id, now=fixed_now + timedelta(hours=2))

    with pytest.raises(AlreadyClockedInError):
        container.attendance_service.clock_in(operator.id, now=fixed_now + timedelta(hours=3))


def test_clock_in_fills_pre_seeded_absent_row(container, repos, operator, fixed_now):
    seeded = repos.attendance.seed_absent(operator.id, fixed_now.date())

    log = container.attendance_service.clock_in(operator.id, now=fixed_now)

    assert log.id == seeded.id
    assert log.status is AttendanceStatus.PRESENT
    assert log.clock_in == fixed_now
    assert len(repos.attendance.by_operator_date) == 1


def test_clock_out_computes_hours_and_sets_operator_offline(container, repos, operator, fixed_now):
    container.attendance_service.clock_in(operator.id, now=fixed_now)

    log = container.attendance_service.clock_out(operator.id, now=fixed_now + timedelta(hours=8, minutes=30))

    assert log.total_hours == 8.5
    assert log.clock_out == fixed_now + timedelta(hours=8, minutes=30)
    assert repos.operators.get_by_id(operator.id).status is OperatorStatus.OFFLINE


def test_clock_out_rounds_to_two_decimals(container, operator, fixed_now):
    container.attendance_service.clock_in(operator.id, now=fixed_now)

    # 20 minutes = 0.3333h
    log = container.attendance_service.clock_out(operator.id, now=fixed_now + timedelta(minutes=20))

    assert log.total_hours == 0.33


def test_clock_out_without_clock_in_is_not_found(container, operator, fixed_now):
    with pytest.raises(NoActiveClockInError) as exc:
        container.attendance_service.clock_out(operator.id, now=fixed_now)

    assert isinstance(exc.value, NotFoundError)
    assert str(exc.value) == "No active clock-in found for today"


def test_clock_out_on_absent_row_is_not_found(container, repos, operator, fixed_now):
    repos.attendance.seed_absent(operator.id, fixed_now.date())

    with pytest.raises(NoActiveClockInError):
        container.attendance_service.clock_out(operator.id, now=fixed_now)


def test_second_clock_out_is_not_found(container, operator, fixed_now):
    container.attendance_service.clock_in(operator.id, now=fixed_now)
    container.attendance_service.clock_out(operator.id, now=fixed_now + timedelta(hours=1))

    with pytest.raises(NoActiveClockInError):
        container.attendance_service.clock_out(operator.id, now=fixed_now + timedelta(hours=2))


def test_overnight_shift_clocks_out_next_day(container, operator, fixed_now):
    evening = fixed_now.replace(hour=22)
    container.attendance_service.clock_in(operator.id, 2, now=evening)

    log = container.attendance_service.clock_out(operator.id, now=evening + timedelta(hours=8))

    assert log.work_date == evening.date()
    assert log.total_hours == 8.0


def test_day_shift_left_open_does_not_clock_out_next_day(container, repos, operator, fixed_now):
    container.attendance_service.clock_in(operator.id, 1, now=fixed_now)

    with pytest.raises(NoActiveClockInError):
        container.attendance_service.clock_out(operator.id, now=fixed_now + timedelta(days=1, hours=9))

    assert repos.attendance.get_for_operator_and_date(operator.id, fixed_now.date()).clock_out is None


def test_clock_in_without_shift_does_not_clock_out_next_day(container, operator, fixed_now):
    container.attendance_service.clock_in(operator.id, now=fixed_now.replace(hour=22))

    with pytest.raises(NoActiveClockInError):
        container.attendance_service.clock_out(operator.id, now=fixed_now + timedelta(days=1))


def test_clock_out_before_clock_in_is_rejected(container, operator, fixed_now):
    container.attendance_service.clock_in(operator.id, now=fixed_now)

    with pytest.raises(ValidationError):
        container.attendance_service.clock_out(operator.id, now=fixed_now - timedelta(minutes=5))


def test_clock_in_unknown_operator(container, fixed_now):
    with pytest.raises(NotFoundError):
        container.attendance_service.clock_in(999, now=fixed_now)


def test_clock_in_unknown_shift(container, operator, fixed_now):
    with pytest.raises(NotFoundError, match="Shift not found"):
        container.attendance_service.clock_in(operator.id, 42, now=fixed_now)


def test_list_attendance_filters_by_date_and_operator(container, repos, operator, fixed_now):
    other = repos.operators.add("Bob Jones", "bob@example.com")
    container.attendance_service.clock_in(operator.id, now=fixed_now)
    container.attendance_service.clock_in(other.id, now=fixed_now)
    container.attendance_service.clock_in(operator.id, now=fixed_now + timedelta(days=1))

    by_date = container.attendance_service.list_attendance(work_date=fixed_now.date().isoformat())
    by_operator = container.attendance_service.list_attendance(operator_id=str(operator.id))

    assert {r.operator_id for r in by_date} == {operator.id, other.id}
    assert [r.work_date for r in by_operator] == [fixed_now.date() + timedelta(days=1), fixed_now.date()]


def test_get_today_returns_log(container, operator, fixed_now):
    assert container.attendance_service.get_today(operator.id, today=fixed_now.date()) is None
    container.attendance_service.clock_in(operator.id, now=fixed_now)
    assert container.attendance_service.get_today(operator.id, today=fixed_now.date()).clock_in == fixed_now
