from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional, Protocol, Sequence

from .model import TimeEntry


class TimeEntryRepository(Protocol):
    def get_by_id(self, time_entry_id: int) -> Optional[TimeEntry]:
        raise NotImplementedError

    def get_open_for_user(self, user_id: int) -> Optional[TimeEntry]:
        raise NotImplementedError

    def get_recent_for_user(self, user_id: int, limit: int) -> Sequence[TimeEntry]:
        """Newest first."""

        raise NotImplementedError

    def create_open_entry(self, *, user_id: int, department_id: int, clock_in: datetime) -> Optional[int]:
        """Atomically insert an open entry unless the user already has one.

        Returns the new time_entry_id, or None when an open entry exists.
        Two concurrent calls for the same user must never both succeed.
        """

        raise NotImplementedError

    def close_entry(self, *, time_entry_id: int, user_id: int, clock_out: datetime, hours: Decimal) -> bool:
        """Close the entry only if it belongs to the user and is still open."""

        raise NotImplementedError
