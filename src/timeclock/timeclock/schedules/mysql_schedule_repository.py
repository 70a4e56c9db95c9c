from __future__ import annotations

from datetime import date
from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import DepartmentSchedule, WorkShift
from .repository import ScheduleRepository


class MySQLScheduleRepository(ScheduleRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_user(
        self,
        *,
        user_id: int,
        department_id: int,
        week_start: Optional[date] = None,
    ) -> Optional[DepartmentSchedule]:
        clauses = ["ds.department_id=%s"]
        params: list[object] = [int(department_id)]
        if week_start is not None:
            clauses.append("ds.week_start=%s")
            params.append(week_start)
        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT ds.schedule_id, ds.department_id, ds.week_start, d.name AS department_name
                FROM department_schedules ds
                JOIN departments d ON d.department_id = ds.department_id
                WHERE {where}
                ORDER BY ds.week_start DESC
                LIMIT 1
                """,
                tuple(params),
            )
            head = fetchone(cur)
            if not head:
                return None

            cur.execute(
                """
                SELECT shift_id, schedule_id, user_id, day_of_week, start_time, end_time
                FROM work_shifts
                WHERE schedule_id=%s AND user_id=%s
                ORDER BY day_of_week, start_time, shift_id
                """,
                (int(head["schedule_id"]), int(user_id)),
            )
            shifts = tuple(
                WorkShift(
                    shift_id=int(r["shift_id"]),
                    schedule_id=int(r["schedule_id"]),
                    user_id=int(r["user_id"]),
                    day_of_week=int(r["day_of_week"]),
                    start_time=r["start_time"],
                    end_time=r["end_time"],
                )
                for r in fetchall(cur)
            )

            return DepartmentSchedule(
                schedule_id=int(head["schedule_id"]),
                department_id=int(head["department_id"]),
                department_name=head["department_name"],
                week_start=head["week_start"],
                shifts=shifts,
            )
