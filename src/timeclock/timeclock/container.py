from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Callable

from .common.datetime_utils import now_local
from .database.connection import DBConfig, DatabaseConnection
from .departments.mysql_department_repository import MySQLDepartmentRepository
from .departments.service import DepartmentService
from .schedules.mysql_schedule_repository import MySQLScheduleRepository
from .schedules.service import ScheduleService
from .time_entries.mysql_time_entry_repository import MySQLTimeEntryRepository
from .time_entries.service import TimeEntryService
from .users.mysql_user_repository import MySQLUserRepository


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection
    clock: Callable[[], datetime]

    users_repo: MySQLUserRepository
    departments_repo: MySQLDepartmentRepository
    time_entries_repo: MySQLTimeEntryRepository
    schedules_repo: MySQLScheduleRepository

    department_service: DepartmentService
    time_entry_service: TimeEntryService
    schedule_service: ScheduleService


def build_container(*, db_config: dict, clock: Callable[[], datetime] = now_local) -> Container:
    conn = DatabaseConnection(DBConfig.from_dict(db_config))

    users_repo = MySQLUserRepository(conn)
    departments_repo = MySQLDepartmentRepository(conn)
    time_entries_repo = MySQLTimeEntryRepository(conn)
    schedules_repo = MySQLScheduleRepository(conn)

    department_service = DepartmentService(departments_repo, users_repo)
    time_entry_service = TimeEntryService(time_entries_repo, users_repo, departments_repo, clock=clock)
    schedule_service = ScheduleService(schedules_repo, department_service)

    return Container(
        conn=conn,
        clock=clock,
        users_repo=users_repo,
        departments_repo=departments_repo,
        time_entries_repo=time_entries_repo,
        schedules_repo=schedules_repo,
        department_service=department_service,
        time_entry_service=time_entry_service,
        schedule_service=schedule_service,
    )
