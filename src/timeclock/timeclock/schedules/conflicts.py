"""Cross-department shift conflict detection.

Two shifts conflict when they belong to schedules of different departments,
fall on the same day_of_week, and their time-of-day intervals overlap with
half-open semantics: a shift ending at 09:00 does not collide with one
starting at 09:00. Shifts of the same department are never compared.

The pairwise scan is O(D^2 * S^2); one person's week keeps D and S small.
"""

from __future__ import annotations

from itertools import combinations
from typing import Iterable

from ..common.datetime_utils import seconds_since_midnight
from .model import ConflictReport, DepartmentSchedule, ScheduleConflict, WorkShift


def _day_interval(shift: WorkShift) -> tuple[float, float]:
    # Anchor on the start's time of day and keep the real length, so a shift
    # crossing midnight still ends after it starts.
    start = seconds_since_midnight(shift.start_time)
    return start, start + (shift.end_time - shift.start_time).total_seconds()


def shifts_overlap(a: WorkShift, b: WorkShift) -> bool:
    if a.day_of_week != b.day_of_week:
        return False
    start1, end1 = _day_interval(a)
    start2, end2 = _day_interval(b)
    return start1 < end2 and start2 < end1


def detect_conflicts(schedules: Iterable[DepartmentSchedule]) -> ConflictReport:
    """Report every overlapping cross-department shift pair, in discovery order."""

    found: list[ScheduleConflict] = []
    for first, second in combinations(list(schedules), 2):
        if first.department_id == second.department_id:
            continue
        for shift1 in first.shifts:
            for shift2 in second.shifts:
                if shifts_overlap(shift1, shift2):
                    found.append(
                        ScheduleConflict(
                            shift1=shift1,
                            department1_name=first.department_name,
                            shift2=shift2,
                            department2_name=second.department_name,
                        )
                    )
    return ConflictReport(conflicts=tuple(found))
