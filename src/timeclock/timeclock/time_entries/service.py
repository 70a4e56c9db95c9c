from __future__ import annotations

import logging
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Callable, Iterable, Optional, Sequence

from ..common.validators import require_positive_id
from ..common.datetime_utils import now_local
from ..core.constants import DEFAULT_HISTORY_LIMIT, HOURS_QUANTUM, SECONDS_PER_HOUR
from ..core.enums import ClockState
from ..core.exceptions import Conflict, NotFound, ValidationError
from ..core.logging_config import get_logger
from ..core.results import ActionResult, run_action
from ..departments.repository import DepartmentRepository
from ..users.repository import UserRepository
from .model import TimeEntry, TimeEntryStats
from .repository import TimeEntryRepository


def compute_hours(clock_in: datetime, clock_out: datetime) -> Decimal:
    """Worked hours between two instants, Decimal rounded half-up to 2 places."""

    delta = clock_out - clock_in
    # Exact seconds from the timedelta parts; total_seconds() would go through float.
    seconds = Decimal(delta.days * 86400 + delta.seconds) + Decimal(delta.microseconds) / Decimal(1_000_000)
    return (seconds / SECONDS_PER_HOUR).quantize(HOURS_QUANTUM, rounding=ROUND_HALF_UP)


def summarize(entries: Iterable[TimeEntry]) -> TimeEntryStats:
    completed = 0
    total = Decimal("0.00")
    has_open = False
    for e in entries:
        if e.is_open:
            has_open = True
            continue
        completed += 1
        total += e.hours if e.hours is not None else compute_hours(e.clock_in, e.clock_out)
    return TimeEntryStats(completed_entries=completed, total_hours=total.quantize(HOURS_QUANTUM), has_open_entry=has_open)


class TimeEntryService:
    """Use case: clock-in / clock-out lifecycle.

    Per user there are two states: CLOCKED_OUT (no open entry) and
    CLOCKED_IN (exactly one entry with clock_out None).
    """

    def __init__(
        self,
        entries: TimeEntryRepository,
        users: UserRepository,
        departments: DepartmentRepository,
        *,
        clock: Callable[[], datetime] = now_local,
        logger: Optional[logging.Logger] = None,
    ):
        self._entries = entries
        self._users = users
        self._departments = departments
        self._clock = clock
        self._log = logger or get_logger("time_entries")

    def get_current_entry(self, user_id: int) -> Optional[TimeEntry]:
        return self._entries.get_open_for_user(int(user_id))

    def get_clock_state(self, user_id: int) -> ClockState:
        return ClockState.CLOCKED_IN if self.get_current_entry(user_id) else ClockState.CLOCKED_OUT

    def get_recent_entries(self, user_id: int, *, limit: int = DEFAULT_HISTORY_LIMIT) -> Sequence[TimeEntry]:
        return self._entries.get_recent_for_user(int(user_id), int(limit))

    def clock_in(self, user_id: int, department_id: int) -> ActionResult[TimeEntry]:
        def _clock_in() -> TimeEntry:
            user_key = require_positive_id(user_id, "User")
            department_key = require_positive_id(department_id, "Department")
            if self._users.get_by_id(user_key) is None:
                raise NotFound("User not found")
            if self._departments.get_department(department_key) is None:
                raise NotFound("Department not found")

            now = self._clock()
            entry_id = self._entries.create_open_entry(user_id=user_key, department_id=department_key, clock_in=now)
            if entry_id is None:
                raise Conflict("You are already clocked in")
            return TimeEntry(time_entry_id=entry_id, user_id=user_key, department_id=department_key, clock_in=now)

        return run_action(_clock_in, success="Clocked in", logger=self._log, action="clock_in")

    def clock_out(self, user_id: int, time_entry_id: int) -> ActionResult[TimeEntry]:
        def _clock_out() -> TimeEntry:
            user_key = require_positive_id(user_id, "User")
            entry_key = require_positive_id(time_entry_id, "Time entry")
            current = self._entries.get_open_for_user(user_key)
            if current is None:
                raise NotFound("You are not clocked in")
            if current.time_entry_id != entry_key:
                raise Conflict("That time entry is not your open entry")

            now = self._clock()
            if now < current.clock_in:
                raise ValidationError("Clock-out time is before clock-in time")
            hours = compute_hours(current.clock_in, now)

            if not self._entries.close_entry(time_entry_id=current.time_entry_id, user_id=current.user_id, clock_out=now, hours=hours):
                raise Conflict("That time entry was already closed")
            return TimeEntry(
                time_entry_id=current.time_entry_id,
                user_id=current.user_id,
                department_id=current.department_id,
                clock_in=current.clock_in,
                clock_out=now,
                hours=hours,
            )

        return run_action(_clock_out, success="Clocked out", logger=self._log, action="clock_out")
