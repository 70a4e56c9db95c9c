from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from typing import Callable, Iterable, Optional, Sequence, Union

from ..common.datetime_utils import format_elapsed, now_local
from ..core.enums import ClockState
from ..departments.model import Department, DepartmentView
from .model import TimeEntry
from .service import compute_hours, summarize


class TimeEntrySessionState:
    """View model for one signed-in user's clock widget.

    Mirrors what the server already returned so the UI can update without a
    refetch. The local values are a display projection only: the next call to
    reload() replaces them with the server's rows.
    """

    def __init__(
        self,
        current_entry: Optional[TimeEntry],
        recent_entries: Sequence[TimeEntry],
        departments: Iterable[Union[Department, DepartmentView]],
        *,
        clock: Callable[[], datetime] = now_local,
    ):
        self._clock = clock
        self.current_entry = current_entry
        self.recent_entries: list[TimeEntry] = list(recent_entries)
        self.departments = list(departments)

    @property
    def department_map(self) -> dict[int, Union[Department, DepartmentView]]:
        return {d.department_id: d for d in self.departments}

    @property
    def state(self) -> ClockState:
        return ClockState.CLOCKED_IN if self.current_entry else ClockState.CLOCKED_OUT

    def add_entry(self, entry: TimeEntry) -> None:
        self.recent_entries.insert(0, entry)

    def clock_in(self, entry: TimeEntry) -> None:
        self.current_entry = entry
        self.add_entry(entry)

    def clock_out(self, time_entry_id: int) -> Optional[TimeEntry]:
        """Close the current entry locally with an estimated hours value."""

        if self.current_entry is None or self.current_entry.time_entry_id != time_entry_id:
            return None

        now = self._clock()
        completed = replace(self.current_entry, clock_out=now, hours=compute_hours(self.current_entry.clock_in, now))
        self.recent_entries = [completed if e.time_entry_id == time_entry_id else e for e in self.recent_entries]
        self.current_entry = None
        return completed

    def reload(self, current_entry: Optional[TimeEntry], recent_entries: Sequence[TimeEntry]) -> None:
        self.current_entry = current_entry
        self.recent_entries = list(recent_entries)

    def elapsed(self) -> str:
        if self.current_entry is None:
            return "00:00:00"
        return format_elapsed(self.current_entry.clock_in, self._clock())

    def to_dict(self) -> dict:
        return {
            "state": self.state.value,
            "currentEntry": self.current_entry.to_dict() if self.current_entry else None,
            "elapsed": self.elapsed(),
            "recentEntries": [e.to_dict() for e in self.recent_entries],
            "departments": [d.to_dict() for d in self.departments],
            "stats": summarize(self.recent_entries).to_dict(),
        }
