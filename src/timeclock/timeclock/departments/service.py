from __future__ import annotations

import logging
from decimal import Decimal
from typing import Optional, Sequence, Union

from ..authorization.policy import MANAGING_ROLES, require_permission
from ..common.validators import parse_rate, require_non_empty, require_positive_id
from ..core.constants import MONEY_QUANTUM, NAME_MAX_LENGTH
from ..core.enums import Action, DepartmentRole
from ..core.exceptions import NotFound, ValidationError
from ..core.logging_config import get_logger
from ..core.results import ActionResult, run_action
from ..users.model import User
from ..users.repository import UserRepository
from .model import Department, DepartmentView, MemberView, Membership
from .repository import DepartmentRepository


def parse_department_role(value: Union[str, DepartmentRole, None]) -> DepartmentRole:
    if isinstance(value, DepartmentRole):
        return value
    try:
        return DepartmentRole(str(value or "").strip().upper())
    except ValueError:
        raise ValidationError("Department role must be MEMBER, MANAGER or ADMIN")


class DepartmentService:
    """Use cases: departments, memberships and their rollups."""

    def __init__(self, departments: DepartmentRepository, users: UserRepository, *, logger: Optional[logging.Logger] = None):
        self._departments = departments
        self._users = users
        self._log = logger or get_logger("departments")

    # -- rollups ---------------------------------------------------------

    def employee_count(self, department_id: int) -> int:
        return self._departments.count_members(int(department_id))

    def total_cost(self, department_id: int) -> Decimal:
        """Sum of member hourly rates (a rate sum, not hours x rate)."""
        return Decimal(self._departments.sum_member_rates(int(department_id))).quantize(MONEY_QUANTUM)

    def _view(self, department: Department) -> DepartmentView:
        return DepartmentView.of(
            department,
            employee_count=self.employee_count(department.department_id),
            total_cost=self.total_cost(department.department_id),
        )

    # -- reads -----------------------------------------------------------

    def get_department(self, department_id: int) -> Optional[Department]:
        return self._departments.get_department(int(department_id))

    def list_department_infos(self) -> list[Department]:
        return list(self._departments.list_all())

    def list_departments(self) -> list[DepartmentView]:
        return [self._view(d) for d in self._departments.list_all()]

    def list_permitted_departments(self, user_id: int) -> list[DepartmentView]:
        """Departments the user may manage: all for a global ADMIN."""

        user = self._users.get_by_id(int(user_id))
        if user is None:
            return []
        if user.is_admin:
            return self.list_departments()

        ids = [m.department_id for m in self._departments.list_memberships_for_user(user.user_id) if m.role in MANAGING_ROLES]
        return [self._view(d) for d in self._departments.list_by_ids(ids)]

    def list_member_departments(self, user_id: int) -> list[DepartmentView]:
        """Departments the user can clock into: all for a global ADMIN."""

        user = self._users.get_by_id(int(user_id))
        if user is None:
            return []
        if user.is_admin:
            return self.list_departments()

        ids = [m.department_id for m in self._departments.list_memberships_for_user(user.user_id)]
        return [self._view(d) for d in self._departments.list_by_ids(ids)]

    def get_department_employees(self, department_id: int) -> Sequence[MemberView]:
        return self._departments.list_members(int(department_id))

    def view_department_employees(self, actor_id: int, department_id: int) -> ActionResult[list[MemberView]]:
        """Member list for actors allowed to see it (global ADMIN, department MANAGER or ADMIN)."""

        def _view_members() -> list[MemberView]:
            self._authorize(actor_id, Action.VIEW_DEPARTMENT_MEMBERS, department_id)
            department = self._require_department(department_id)
            return list(self._departments.list_members(department.department_id))

        return run_action(_view_members, success="Employees loaded", logger=self._log, action="view_department_employees")

    # -- helpers ---------------------------------------------------------

    def _actor(self, actor_id: int) -> Optional[User]:
        return self._users.get_by_id(int(actor_id))

    def _actor_department_role(self, actor: Optional[User], department_id: int) -> Optional[DepartmentRole]:
        if actor is None or actor.is_admin:
            return None
        membership = self._departments.get_membership(user_id=actor.user_id, department_id=int(department_id))
        return membership.role if membership else None

    def _authorize(self, actor_id: int, action: Action, department_id: Optional[int] = None) -> User:
        actor = self._actor(actor_id)
        role = self._actor_department_role(actor, department_id) if department_id is not None else None
        return require_permission(actor, action, role)

    def _require_department(self, department_id: int) -> Department:
        department = self._departments.get_department(int(department_id))
        if department is None:
            raise NotFound("Department not found")
        return department

    # -- mutations -------------------------------------------------------

    def create_department(self, actor_id: int, name: str, info: Optional[str] = None) -> ActionResult[DepartmentView]:
        def _create() -> DepartmentView:
            self._authorize(actor_id, Action.CREATE_DEPARTMENT)
            clean_name = require_non_empty(name, "Department name", max_length=NAME_MAX_LENGTH)
            clean_info = info.strip() if info and info.strip() else None
            department_id = self._departments.create(name=clean_name, info=clean_info)
            department = Department(department_id=department_id, name=clean_name, info=clean_info)
            return DepartmentView.of(department, employee_count=0, total_cost=Decimal("0.00"))

        return run_action(_create, success="Department created", logger=self._log, action="create_department")

    def update_department(self, actor_id: int, department_id: int, name: str) -> ActionResult[Department]:
        def _update() -> Department:
            self._authorize(actor_id, Action.UPDATE_DEPARTMENT, department_id)
            clean_name = require_non_empty(name, "Department name", max_length=NAME_MAX_LENGTH)
            department = self._require_department(department_id)
            if not self._departments.rename(department_id=department.department_id, name=clean_name):
                raise NotFound("Department not found")
            return Department(department_id=department.department_id, name=clean_name, info=department.info)

        return run_action(_update, success="Department updated", logger=self._log, action="update_department")

    def delete_department(self, actor_id: int, department_id: int) -> ActionResult[Department]:
        def _delete() -> Department:
            self._authorize(actor_id, Action.DELETE_DEPARTMENT)
            department = self._require_department(department_id)
            if not self._departments.delete(department_id=department.department_id):
                raise NotFound("Department not found")
            return department

        return run_action(_delete, success="Department deleted", logger=self._log, action="delete_department")

    def add_employee_to_department(
        self,
        actor_id: int,
        department_id: int,
        employee_id: int,
        role: Union[str, DepartmentRole],
        rate: Union[str, int, Decimal],
        position: Optional[str] = None,
    ) -> ActionResult[DepartmentView]:
        """Add a member, or overwrite role/rate/position when already a member."""

        def _add() -> DepartmentView:
            self._authorize(actor_id, Action.ADD_MEMBER, department_id)
            department = self._require_department(department_id)
            employee_key = require_positive_id(employee_id, "Employee")
            if self._users.get_by_id(employee_key) is None:
                raise NotFound("Employee not found")

            clean_position = (position or "").strip() or None
            if clean_position and len(clean_position) > NAME_MAX_LENGTH:
                raise ValidationError(f"Position must be at most {NAME_MAX_LENGTH} characters")

            self._departments.upsert_membership(
                user_id=employee_key,
                department_id=department.department_id,
                role=parse_department_role(role),
                hourly_rate=parse_rate(rate),
                position=clean_position,
            )
            return self._view(department)

        return run_action(_add, success="Employee added to department", logger=self._log, action="add_employee_to_department")

    def update_employee_role(
        self,
        actor_id: int,
        department_id: int,
        employee_id: int,
        role: Union[str, DepartmentRole],
    ) -> ActionResult[Membership]:
        def _update_role() -> Membership:
            self._authorize(actor_id, Action.UPDATE_MEMBER_ROLE, department_id)
            new_role = parse_department_role(role)
            ok = self._departments.update_membership_role(
                user_id=int(employee_id),
                department_id=int(department_id),
                role=new_role,
            )
            if not ok:
                raise NotFound("Employee not found in department")
            membership = self._departments.get_membership(user_id=int(employee_id), department_id=int(department_id))
            if membership is None:
                raise NotFound("Employee not found in department")
            return membership

        return run_action(_update_role, success="Employee role updated", logger=self._log, action="update_employee_role")

    def remove_employee_from_department(self, actor_id: int, department_id: int, employee_id: int) -> ActionResult[DepartmentView]:
        """Remove a member; lookup, permission check, delete and rollups share one transaction."""

        def _remove() -> DepartmentView:
            with self._departments.transaction() as tx:
                actor = tx.get_user(int(actor_id))
                actor_membership = None
                if actor is not None and not actor.is_admin:
                    actor_membership = tx.get_membership(user_id=actor.user_id, department_id=int(department_id), for_update=True)
                require_permission(actor, Action.REMOVE_MEMBER, actor_membership.role if actor_membership else None)

                if tx.get_membership(user_id=int(employee_id), department_id=int(department_id)) is None:
                    raise NotFound("Employee not found in department")
                tx.delete_membership(user_id=int(employee_id), department_id=int(department_id))

                department = tx.get_department(int(department_id))
                if department is None:
                    raise NotFound("Department not found")
                return DepartmentView.of(
                    department,
                    employee_count=tx.count_members(department.department_id),
                    total_cost=Decimal(tx.sum_member_rates(department.department_id)).quantize(MONEY_QUANTUM),
                )

        return run_action(_remove, success="Employee removed from department", logger=self._log, action="remove_employee_from_department")

    def remove_membership(self, actor_id: int, membership_id: int) -> ActionResult[Membership]:
        def _remove_by_id() -> Membership:
            membership = self._departments.get_membership_by_id(int(membership_id))
            if membership is None:
                raise NotFound("Membership not found")
            self._authorize(actor_id, Action.REMOVE_MEMBER, membership.department_id)
            if not self._departments.delete_membership_by_id(membership.membership_id):
                raise NotFound("Membership not found")
            return membership

        return run_action(_remove_by_id, success="Employee removed from department", logger=self._log, action="remove_membership")
