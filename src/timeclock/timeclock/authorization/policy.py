"""Permission decisions for department management.

The policy is a pure function of the actor's global role, the actor's role
inside the target department (if any) and the requested action. Nothing is
cached: roles can change between two calls, so callers ask every time.
"""

from __future__ import annotations

from typing import Optional

from ..core.enums import Action, DepartmentRole, Role
from ..core.exceptions import PermissionDenied
from ..users.model import User

GLOBAL_ADMIN_ONLY = frozenset({Action.CREATE_DEPARTMENT, Action.DELETE_DEPARTMENT})

_DEPARTMENT_ROLES_BY_ACTION: dict[Action, frozenset[DepartmentRole]] = {
    Action.UPDATE_DEPARTMENT: frozenset({DepartmentRole.MANAGER}),
    Action.ADD_MEMBER: frozenset({DepartmentRole.MANAGER}),
    Action.UPDATE_MEMBER: frozenset({DepartmentRole.MANAGER}),
    Action.UPDATE_MEMBER_ROLE: frozenset({DepartmentRole.MANAGER}),
    Action.REMOVE_MEMBER: frozenset({DepartmentRole.MANAGER, DepartmentRole.ADMIN}),
    Action.VIEW_DEPARTMENT_MEMBERS: frozenset({DepartmentRole.MANAGER, DepartmentRole.ADMIN}),
}

# Department roles that make a department show up in "manageable" listings.
MANAGING_ROLES = frozenset({DepartmentRole.MANAGER, DepartmentRole.ADMIN})


def can_perform(actor: Optional[User], action: Action, department_role: Optional[DepartmentRole] = None) -> bool:
    if actor is None:
        return False

    if actor.role == Role.ADMIN:
        return True

    if action in GLOBAL_ADMIN_ONLY:
        return False

    allowed = _DEPARTMENT_ROLES_BY_ACTION.get(action)
    if not allowed or department_role is None:
        return False
    return department_role in allowed


def require_permission(actor: Optional[User], action: Action, department_role: Optional[DepartmentRole] = None) -> User:
    """Raise PermissionDenied unless can_perform() allows the action."""

    if not can_perform(actor, action, department_role):
        raise PermissionDenied(_denial_message(action))
    return actor


def _denial_message(action: Action) -> str:
    if action in GLOBAL_ADMIN_ONLY:
        return f"Permission denied: only an ADMIN can {action.value.replace('_', ' ')}"
    return f"Permission denied: only an ADMIN or department MANAGER can {action.value.replace('_', ' ')}"
