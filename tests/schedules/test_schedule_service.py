from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Optional

from src.timeclock.timeclock.departments.model import DepartmentView
from src.timeclock.timeclock.schedules.model import DepartmentSchedule, WorkShift
from src.timeclock.timeclock.schedules.service import ScheduleService, describe_conflict, shift_duration_label


class InMemorySchedules:
    def __init__(self, *schedules: DepartmentSchedule):
        self.schedules = list(schedules)

    def get_for_user(self, *, user_id: int, department_id: int, week_start: Optional[date] = None):
        matches = [
            s for s in self.schedules
            if s.department_id == department_id and (week_start is None or s.week_start == week_start)
        ]
        if not matches:
            return None
        latest = max(matches, key=lambda s: s.week_start)
        return DepartmentSchedule(
            latest.schedule_id,
            latest.department_id,
            latest.department_name,
            latest.week_start,
            tuple(s for s in latest.shifts if s.user_id == user_id),
        )


class FakeDepartmentService:
    def __init__(self, departments_by_user: dict[int, list[DepartmentView]]):
        self.departments_by_user = departments_by_user

    def list_member_departments(self, user_id: int):
        return self.departments_by_user.get(user_id, [])


WEEK = date(2024, 1, 1)


def _view(department_id: int, name: str) -> DepartmentView:
    return DepartmentView(department_id, name, None, 1, 0)


def _shift(shift_id: int, schedule_id: int, start_hour: int, end_hour: int, user_id: int = 7, week: date = WEEK) -> WorkShift:
    base = datetime.combine(week, datetime.min.time())
    return WorkShift(shift_id, schedule_id, user_id, 0, base + timedelta(hours=start_hour), base + timedelta(hours=end_hour))


def _service(*schedules: DepartmentSchedule) -> ScheduleService:
    departments = FakeDepartmentService({7: [_view(1, "Sales"), _view(2, "Support"), _view(3, "Warehouse")]})
    return ScheduleService(InMemorySchedules(*schedules), departments)


def test_get_schedule_defaults_to_latest_week():
    older = DepartmentSchedule(1, 1, "Sales", WEEK, (_shift(1, 1, 9, 17),))
    newer_week = WEEK + timedelta(days=7)
    newer = DepartmentSchedule(2, 1, "Sales", newer_week, (_shift(2, 2, 10, 14, week=newer_week),))
    svc = _service(older, newer)

    latest = svc.get_schedule(7, 1)
    pinned = svc.get_schedule(7, 1, week_start=WEEK)

    assert latest.data.schedule_id == 2
    assert pinned.data.schedule_id == 1


def test_get_schedule_missing_is_not_found():
    result = _service().get_schedule(7, 1)

    assert result.code == "not_found"
    assert result.error == "No schedules found for this department"


def test_get_schedule_only_returns_own_shifts():
    schedule = DepartmentSchedule(1, 1, "Sales", WEEK, (_shift(1, 1, 9, 17), _shift(2, 1, 9, 17, user_id=8)))

    result = _service(schedule).get_schedule(7, 1)

    assert [s.shift_id for s in result.data.shifts] == [1]


def test_check_user_conflicts_across_member_departments():
    sales = DepartmentSchedule(1, 1, "Sales", WEEK, (_shift(1, 1, 9, 13),))
    support = DepartmentSchedule(2, 2, "Support", WEEK, (_shift(2, 2, 12, 16),))
    svc = _service(sales, support)

    report = svc.check_user_conflicts(7)

    assert report.has_conflict
    assert describe_conflict(report.conflicts[0]) == "Conflict between Sales and Support on Mon at 9:00 AM"


def test_user_without_departments_has_no_conflicts():
    assert not _service().check_user_conflicts(42).has_conflict


def test_shift_duration_label():
    assert shift_duration_label(_shift(1, 1, 9, 17)) == "8h"
    half = WorkShift(2, 1, 7, 0, datetime(2024, 1, 1, 9, 0), datetime(2024, 1, 1, 17, 30))
    assert shift_duration_label(half) == "8h 30m"
    assert shift_duration_label(WorkShift(3, 1, 7, 0, half.start_time, half.start_time)) == "0m"
