from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime

from ..common.datetime_utils import format_duration


@dataclass(frozen=True)
class WorkShift:
    """One shift; only day_of_week and time-of-day are compared."""

    shift_id: int
    schedule_id: int
    user_id: int
    day_of_week: int  # 0..6, 0 = first day of the schedule week
    start_time: datetime
    end_time: datetime

    @property
    def duration_label(self) -> str:
        return format_duration(self.end_time - self.start_time)

    def to_dict(self) -> dict:
        return {
            "id": self.shift_id,
            "scheduleId": self.schedule_id,
            "userId": self.user_id,
            "dayOfWeek": self.day_of_week,
            "startTime": self.start_time.isoformat(),
            "endTime": self.end_time.isoformat(),
            "duration": self.duration_label,
        }


@dataclass(frozen=True)
class DepartmentSchedule:
    """A week of one user's shifts in one department."""

    schedule_id: int
    department_id: int
    department_name: str
    week_start: date
    shifts: tuple[WorkShift, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict:
        return {
            "id": self.schedule_id,
            "departmentId": self.department_id,
            "departmentName": self.department_name,
            "weekStart": self.week_start.isoformat(),
            "shifts": [s.to_dict() for s in self.shifts],
        }


@dataclass(frozen=True)
class ScheduleConflict:
    shift1: WorkShift
    department1_name: str
    shift2: WorkShift
    department2_name: str

    def describe(self) -> str:
        return (
            f"Conflict between {self.department1_name} and {self.department2_name} "
            f"on {self.shift1.start_time.strftime('%a')} at {self.shift1.start_time.strftime('%I:%M %p').lstrip('0')}"
        )

    def to_dict(self) -> dict:
        return {
            "shift1": {**self.shift1.to_dict(), "departmentName": self.department1_name},
            "shift2": {**self.shift2.to_dict(), "departmentName": self.department2_name},
            "message": self.describe(),
        }


@dataclass(frozen=True)
class ConflictReport:
    conflicts: tuple[ScheduleConflict, ...] = ()

    @property
    def has_conflict(self) -> bool:
        return bool(self.conflicts)

    def to_dict(self) -> dict:
        return {"hasConflict": self.has_conflict, "conflicts": [c.to_dict() for c in self.conflicts]}
