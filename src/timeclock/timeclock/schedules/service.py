from __future__ import annotations

import logging
from datetime import date
from typing import Iterable, Optional, Union

from ..common.datetime_utils import format_duration
from ..core.exceptions import NotFound
from ..core.logging_config import get_logger
from ..core.results import ActionResult, run_action
from ..departments.model import Department, DepartmentView
from ..departments.service import DepartmentService
from .conflicts import detect_conflicts
from .model import ConflictReport, DepartmentSchedule, ScheduleConflict, WorkShift
from .repository import ScheduleRepository


def shift_duration_label(shift: WorkShift) -> str:
    return format_duration(shift.end_time - shift.start_time)


def describe_conflict(conflict: ScheduleConflict) -> str:
    return conflict.describe()


class ScheduleService:
    """Read-only schedule access plus the cross-department conflict check."""

    def __init__(
        self,
        schedules: ScheduleRepository,
        departments: DepartmentService,
        *,
        logger: Optional[logging.Logger] = None,
    ):
        self._schedules = schedules
        self._departments = departments
        self._log = logger or get_logger("schedules")

    def get_schedule(self, user_id: int, department_id: int, *, week_start: Optional[date] = None) -> ActionResult[DepartmentSchedule]:
        def _get() -> DepartmentSchedule:
            schedule = self._schedules.get_for_user(user_id=int(user_id), department_id=int(department_id), week_start=week_start)
            if schedule is None:
                raise NotFound("No schedules found for this department")
            return schedule

        return run_action(_get, success="Schedule loaded", logger=self._log, action="get_schedule")

    def get_user_schedules(
        self,
        user_id: int,
        departments: Iterable[Union[Department, DepartmentView]],
        *,
        week_start: Optional[date] = None,
    ) -> list[DepartmentSchedule]:
        """Schedules for each department, skipping departments without one."""

        out: list[DepartmentSchedule] = []
        for dept in departments:
            schedule = self._schedules.get_for_user(user_id=int(user_id), department_id=dept.department_id, week_start=week_start)
            if schedule is not None:
                out.append(schedule)
        return out

    def check_user_conflicts(self, user_id: int, *, week_start: Optional[date] = None) -> ConflictReport:
        departments = self._departments.list_member_departments(int(user_id))
        report = detect_conflicts(self.get_user_schedules(user_id, departments, week_start=week_start))
        if report.has_conflict:
            self._log.info("schedule conflicts found", extra={"user_id": int(user_id), "conflicts": len(report.conflicts)})
        return report
