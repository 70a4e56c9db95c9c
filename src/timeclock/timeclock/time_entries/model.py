from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class TimeEntry:
    """Domain entity: one clock session. clock_out is None while open."""

    time_entry_id: int
    user_id: int
    department_id: Optional[int]
    clock_in: datetime
    clock_out: Optional[datetime] = None
    hours: Optional[Decimal] = None

    @property
    def is_open(self) -> bool:
        return self.clock_out is None

    def to_dict(self) -> dict:
        return {
            "id": self.time_entry_id,
            "userId": self.user_id,
            "departmentId": self.department_id,
            "clockIn": self.clock_in.isoformat(),
            "clockOut": self.clock_out.isoformat() if self.clock_out else None,
            "hours": str(self.hours) if self.hours is not None else None,
        }


@dataclass(frozen=True)
class TimeEntryStats:
    """Dashboard statistics over a list of entries."""

    completed_entries: int
    total_hours: Decimal
    has_open_entry: bool

    def to_dict(self) -> dict:
        return {
            "completedEntries": self.completed_entries,
            "totalHours": str(self.total_hours),
            "hasOpenEntry": self.has_open_entry,
        }
