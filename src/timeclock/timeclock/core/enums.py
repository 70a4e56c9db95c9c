from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Global user role."""

    ADMIN = "ADMIN"
    USER = "USER"


class DepartmentRole(str, Enum):
    """Role a user holds inside one department."""

    MEMBER = "MEMBER"
    MANAGER = "MANAGER"
    ADMIN = "ADMIN"


class Action(str, Enum):
    """Actions guarded by the authorization policy."""

    CREATE_DEPARTMENT = "create_department"
    DELETE_DEPARTMENT = "delete_department"
    UPDATE_DEPARTMENT = "update_department"
    ADD_MEMBER = "add_member"
    UPDATE_MEMBER = "update_member"
    UPDATE_MEMBER_ROLE = "update_member_role"
    REMOVE_MEMBER = "remove_member"
    VIEW_DEPARTMENT_MEMBERS = "view_department_members"


class ClockState(str, Enum):
    CLOCKED_OUT = "CLOCKED_OUT"
    CLOCKED_IN = "CLOCKED_IN"
