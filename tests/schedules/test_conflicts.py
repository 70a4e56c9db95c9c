from __future__ import annotations

from datetime import date, datetime

from src.timeclock.timeclock.schedules.conflicts import detect_conflicts, shifts_overlap
from src.timeclock.timeclock.schedules.model import DepartmentSchedule, WorkShift

MONDAY = date(2024, 1, 1)


def _shift(shift_id: int, schedule_id: int, start: tuple[int, int], end: tuple[int, int], day: int = 0) -> WorkShift:
    base = datetime(2024, 1, 1 + day)
    return WorkShift(
        shift_id=shift_id,
        schedule_id=schedule_id,
        user_id=1,
        day_of_week=day,
        start_time=base.replace(hour=start[0], minute=start[1]),
        end_time=base.replace(hour=end[0], minute=end[1]),
    )


def _schedule(schedule_id: int, department_id: int, name: str, *shifts: WorkShift) -> DepartmentSchedule:
    return DepartmentSchedule(schedule_id, department_id, name, MONDAY, tuple(shifts))


def test_overlapping_shifts_in_different_departments_conflict():
    x = _schedule(1, 1, "X", _shift(1, 1, (9, 0), (13, 0)))
    y = _schedule(2, 2, "Y", _shift(2, 2, (12, 0), (16, 0)))

    report = detect_conflicts([x, y])

    assert report.has_conflict
    assert len(report.conflicts) == 1
    conflict = report.conflicts[0]
    assert (conflict.department1_name, conflict.department2_name) == ("X", "Y")
    assert conflict.describe() == "Conflict between X and Y on Mon at 9:00 AM"


def test_touching_shifts_do_not_conflict():
    x = _schedule(1, 1, "X", _shift(1, 1, (9, 0), (13, 0)))
    z = _schedule(3, 3, "Z", _shift(3, 3, (13, 0), (17, 0)))

    assert detect_conflicts([x, z]).has_conflict is False


def test_same_department_is_never_compared():
    a = _schedule(1, 1, "X", _shift(1, 1, (9, 0), (13, 0)))
    b = _schedule(2, 1, "X", _shift(2, 2, (10, 0), (12, 0)))

    assert detect_conflicts([a, b]).conflicts == ()


def test_different_days_do_not_conflict():
    x = _schedule(1, 1, "X", _shift(1, 1, (9, 0), (13, 0), day=0))
    y = _schedule(2, 2, "Y", _shift(2, 2, (9, 0), (13, 0), day=1))

    assert not detect_conflicts([x, y]).has_conflict


def test_each_pair_reported_once_in_discovery_order():
    x = _schedule(1, 1, "X", _shift(1, 1, (9, 0), (13, 0)), _shift(4, 1, (14, 0), (18, 0)))
    y = _schedule(2, 2, "Y", _shift(2, 2, (12, 0), (15, 0)))
    z = _schedule(3, 3, "Z", _shift(3, 3, (8, 0), (10, 0)))

    report = detect_conflicts([x, y, z])

    pairs = [(c.shift1.shift_id, c.shift2.shift_id) for c in report.conflicts]
    assert pairs == [(1, 2), (4, 2), (1, 3)]


def test_overnight_shift_keeps_its_length():
    night = WorkShift(1, 1, 1, 0, datetime(2024, 1, 1, 22, 0), datetime(2024, 1, 2, 6, 0))
    late = WorkShift(2, 2, 1, 0, datetime(2024, 1, 1, 23, 0), datetime(2024, 1, 1, 23, 30))

    assert shifts_overlap(night, late)
    assert night.duration_label == "8h"


def test_empty_and_single_inputs():
    assert detect_conflicts([]).to_dict() == {"hasConflict": False, "conflicts": []}
    assert not detect_conflicts([_schedule(1, 1, "X", _shift(1, 1, (9, 0), (13, 0)))]).has_conflict
