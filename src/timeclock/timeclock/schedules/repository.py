from __future__ import annotations

from datetime import date
from typing import Optional, Protocol

from .model import DepartmentSchedule


class ScheduleRepository(Protocol):
    def get_for_user(
        self,
        *,
        user_id: int,
        department_id: int,
        week_start: Optional[date] = None,
    ) -> Optional[DepartmentSchedule]:
        """The department's schedule for week_start (latest week when None),
        holding only the given user's shifts."""

        raise NotImplementedError
