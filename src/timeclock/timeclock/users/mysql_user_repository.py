from __future__ import annotations

from typing import Any, Dict, Optional

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import User
from .repository import UserRepository

USER_COLUMNS = "user_id, full_name, email, role"


def row_to_user(row: Dict[str, Any]) -> User:
    return User(
        user_id=int(row["user_id"]),
        full_name=row["full_name"],
        email=row.get("email"),
        role=Role(row["role"]),
    )


def select_user(cur, user_id: int, *, for_update: bool = False) -> Optional[User]:
    sql = f"SELECT {USER_COLUMNS} FROM users WHERE user_id=%s"
    if for_update:
        sql += " FOR UPDATE"
    cur.execute(sql, (int(user_id),))
    row = fetchone(cur)
    return row_to_user(row) if row else None


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: int) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            return select_user(cur, user_id)
