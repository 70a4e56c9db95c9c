from __future__ import annotations

from contextlib import contextmanager
from decimal import Decimal
from typing import Any, Dict, Iterable, Iterator, Optional, Sequence

from ..core.enums import DepartmentRole
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, to_decimal
from ..users.model import User
from ..users.mysql_user_repository import select_user
from .model import Department, MemberView, Membership
from .repository import DepartmentRepository, DepartmentTransaction

MEMBERSHIP_COLUMNS = "membership_id, user_id, department_id, role, hourly_rate, position"


def _row_to_department(r: Dict[str, Any]) -> Department:
    return Department(department_id=int(r["department_id"]), name=r["name"], info=r.get("info"))


def _row_to_membership(r: Dict[str, Any]) -> Membership:
    return Membership(
        membership_id=int(r["membership_id"]),
        user_id=int(r["user_id"]),
        department_id=int(r["department_id"]),
        role=DepartmentRole(r["role"]),
        hourly_rate=to_decimal(r["hourly_rate"]),
        position=r.get("position"),
    )


# Cursor-level queries, shared by the repository and its transaction view.


def _select_department(cur, department_id: int) -> Optional[Department]:
    cur.execute("SELECT department_id, name, info FROM departments WHERE department_id=%s", (int(department_id),))
    r = fetchone(cur)
    return _row_to_department(r) if r else None


def _select_membership(cur, *, user_id: int, department_id: int, for_update: bool = False) -> Optional[Membership]:
    sql = f"SELECT {MEMBERSHIP_COLUMNS} FROM employee_departments WHERE user_id=%s AND department_id=%s"
    if for_update:
        sql += " FOR UPDATE"
    cur.execute(
        sql,
        (int(user_id), int(department_id)),
    )
    r = fetchone(cur)
    return _row_to_membership(r) if r else None


def _delete_membership(cur, *, user_id: int, department_id: int) -> bool:
    cur.execute(
        "DELETE FROM employee_departments WHERE user_id=%s AND department_id=%s",
        (int(user_id), int(department_id)),
    )
    return cur.rowcount > 0


def _count_members(cur, department_id: int) -> int:
    cur.execute("SELECT COUNT(*) AS n FROM employee_departments WHERE department_id=%s", (int(department_id),))
    r = fetchone(cur)
    return int(r["n"]) if r else 0


def _sum_member_rates(cur, department_id: int) -> Decimal:
    cur.execute(
        "SELECT SUM(hourly_rate) AS total FROM employee_departments WHERE department_id=%s",
        (int(department_id),),
    )
    r = fetchone(cur)
    return to_decimal(r["total"] if r else None)


class MySQLDepartmentTransaction(DepartmentTransaction):
    """Transaction view bound to one open cursor."""

    def __init__(self, cur):
        self._cur = cur

    def get_user(self, user_id: int) -> Optional[User]:
        return select_user(self._cur, user_id)

    def get_department(self, department_id: int) -> Optional[Department]:
        return _select_department(self._cur, department_id)

    def get_membership(self, *, user_id: int, department_id: int, for_update: bool = False) -> Optional[Membership]:
        return _select_membership(self._cur, user_id=user_id, department_id=department_id, for_update=for_update)

    def delete_membership(self, *, user_id: int, department_id: int) -> bool:
        return _delete_membership(self._cur, user_id=user_id, department_id=department_id)

    def count_members(self, department_id: int) -> int:
        return _count_members(self._cur, department_id)

    def sum_member_rates(self, department_id: int) -> Decimal:
        return _sum_member_rates(self._cur, department_id)


class MySQLDepartmentRepository(DepartmentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    @contextmanager
    def transaction(self) -> Iterator[DepartmentTransaction]:
        with db_cursor(self._conn_factory) as (_, cur):
            yield MySQLDepartmentTransaction(cur)

    def get_department(self, department_id: int) -> Optional[Department]:
        with db_cursor(self._conn_factory) as (_, cur):
            return _select_department(cur, department_id)

    def list_all(self) -> Sequence[Department]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT department_id, name, info FROM departments ORDER BY name, department_id")
            return [_row_to_department(r) for r in fetchall(cur)]

    def list_by_ids(self, department_ids: Iterable[int]) -> Sequence[Department]:
        ids = sorted({int(i) for i in department_ids})
        if not ids:
            return []
        placeholders = ", ".join(["%s"] * len(ids))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT department_id, name, info FROM departments WHERE department_id IN ({placeholders}) ORDER BY name, department_id",
                tuple(ids),
            )
            return [_row_to_department(r) for r in fetchall(cur)]

    def create(self, *, name: str, info: Optional[str] = None) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("INSERT INTO departments(name, info) VALUES(%s, %s)", (name, info))
            return int(cur.lastrowid)

    def rename(self, *, department_id: int, name: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE departments SET name=%s WHERE department_id=%s", (name, int(department_id)))
            # MySQL reports 0 affected rows when the value is unchanged; check existence instead.
            return cur.rowcount > 0 or _select_department(cur, department_id) is not None

    def delete(self, *, department_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            # Memberships and schedules cascade; time entries keep their rows with department_id NULL.
            cur.execute("DELETE FROM departments WHERE department_id=%s", (int(department_id),))
            return cur.rowcount > 0

    def get_membership(self, *, user_id: int, department_id: int) -> Optional[Membership]:
        with db_cursor(self._conn_factory) as (_, cur):
            return _select_membership(cur, user_id=user_id, department_id=department_id)

    def get_membership_by_id(self, membership_id: int) -> Optional[Membership]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {MEMBERSHIP_COLUMNS} FROM employee_departments WHERE membership_id=%s", (int(membership_id),))
            r = fetchone(cur)
            return _row_to_membership(r) if r else None

    def upsert_membership(
        self,
        *,
        user_id: int,
        department_id: int,
        role: DepartmentRole,
        hourly_rate: Decimal,
        position: Optional[str] = None,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO employee_departments(user_id, department_id, role, hourly_rate, position)
                VALUES(%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE role=VALUES(role), hourly_rate=VALUES(hourly_rate), position=VALUES(position)
                """,
                (int(user_id), int(department_id), role.value, hourly_rate, position),
            )

            # If it was an update, lastrowid can be 0; fetch membership_id.
            if cur.lastrowid:
                return int(cur.lastrowid)

            existing = _select_membership(cur, user_id=user_id, department_id=department_id)
            return existing.membership_id if existing else 0

    def update_membership_role(self, *, user_id: int, department_id: int, role: DepartmentRole) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            if _select_membership(cur, user_id=user_id, department_id=department_id) is None:
                return False
            cur.execute(
                "UPDATE employee_departments SET role=%s WHERE user_id=%s AND department_id=%s",
                (role.value, int(user_id), int(department_id)),
            )
            return True

    def delete_membership_by_id(self, membership_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM employee_departments WHERE membership_id=%s", (int(membership_id),))
            return cur.rowcount > 0

    def list_memberships_for_user(self, user_id: int) -> Sequence[Membership]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {MEMBERSHIP_COLUMNS} FROM employee_departments WHERE user_id=%s ORDER BY department_id",
                (int(user_id),),
            )
            return [_row_to_membership(r) for r in fetchall(cur)]

    def list_members(self, department_id: int) -> Sequence[MemberView]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT ed.membership_id, ed.user_id, ed.department_id, ed.role, ed.hourly_rate, ed.position,
                       u.full_name, u.email
                FROM employee_departments ed
                JOIN users u ON u.user_id = ed.user_id
                WHERE ed.department_id=%s
                ORDER BY u.full_name, ed.membership_id
                """,
                (int(department_id),),
            )
            return [
                MemberView(membership=_row_to_membership(r), full_name=r["full_name"], email=r.get("email"))
                for r in fetchall(cur)
            ]

    def count_members(self, department_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            return _count_members(cur, department_id)

    def sum_member_rates(self, department_id: int) -> Decimal:
        with db_cursor(self._conn_factory) as (_, cur):
            return _sum_member_rates(cur, department_id)
