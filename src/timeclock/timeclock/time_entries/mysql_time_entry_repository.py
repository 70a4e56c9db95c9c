from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, Optional, Sequence

import mysql.connector

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, to_optional_decimal
from ..users.mysql_user_repository import select_user
from .model import TimeEntry
from .repository import TimeEntryRepository

ENTRY_COLUMNS = "time_entry_id, user_id, department_id, clock_in, clock_out, hours"


def _row_to_entry(r: Dict[str, Any]) -> TimeEntry:
    return TimeEntry(
        time_entry_id=int(r["time_entry_id"]),
        user_id=int(r["user_id"]),
        department_id=int(r["department_id"]) if r.get("department_id") is not None else None,
        clock_in=r["clock_in"],
        clock_out=r.get("clock_out"),
        hours=to_optional_decimal(r.get("hours")),
    )


def _select_open(cur, user_id: int) -> Optional[TimeEntry]:
    cur.execute(
        f"SELECT {ENTRY_COLUMNS} FROM time_entries WHERE user_id=%s AND clock_out IS NULL",
        (int(user_id),),
    )
    r = fetchone(cur)
    return _row_to_entry(r) if r else None


class MySQLTimeEntryRepository(TimeEntryRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, time_entry_id: int) -> Optional[TimeEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {ENTRY_COLUMNS} FROM time_entries WHERE time_entry_id=%s", (int(time_entry_id),))
            r = fetchone(cur)
            return _row_to_entry(r) if r else None

    def get_open_for_user(self, user_id: int) -> Optional[TimeEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            return _select_open(cur, user_id)

    def get_recent_for_user(self, user_id: int, limit: int) -> Sequence[TimeEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {ENTRY_COLUMNS}
                FROM time_entries
                WHERE user_id=%s
                ORDER BY clock_in DESC, time_entry_id DESC
                LIMIT %s
                """,
                (int(user_id), int(limit)),
            )
            return [_row_to_entry(r) for r in fetchall(cur)]

    def create_open_entry(self, *, user_id: int, department_id: int, clock_in: datetime) -> Optional[int]:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                # Row lock on the user serializes concurrent clock-ins for that user.
                select_user(cur, user_id, for_update=True)
                if _select_open(cur, user_id) is not None:
                    return None
                cur.execute(
                    "INSERT INTO time_entries(user_id, department_id, clock_in) VALUES(%s,%s,%s)",
                    (int(user_id), int(department_id), clock_in),
                )
                return int(cur.lastrowid)
        except mysql.connector.IntegrityError:
            # uq_time_entries_open_per_user
            return None

    def close_entry(self, *, time_entry_id: int, user_id: int, clock_out: datetime, hours: Decimal) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE time_entries
                SET clock_out=%s, hours=%s
                WHERE time_entry_id=%s AND user_id=%s AND clock_out IS NULL
                """,
                (clock_out, hours, int(time_entry_id), int(user_id)),
            )
            return cur.rowcount > 0
