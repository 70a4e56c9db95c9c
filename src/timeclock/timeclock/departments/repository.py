from __future__ import annotations

from decimal import Decimal
from typing import ContextManager, Iterable, Optional, Protocol, Sequence

from ..core.enums import DepartmentRole
from ..users.model import User
from .model import Department, MemberView, Membership


class DepartmentTransaction(Protocol):
    """Operations that run together inside one datastore transaction."""

    def get_user(self, user_id: int) -> Optional[User]:
        raise NotImplementedError

    def get_department(self, department_id: int) -> Optional[Department]:
        raise NotImplementedError

    def get_membership(self, *, user_id: int, department_id: int, for_update: bool = False) -> Optional[Membership]:
        """for_update locks the row until the transaction ends."""

        raise NotImplementedError

    def delete_membership(self, *, user_id: int, department_id: int) -> bool:
        raise NotImplementedError

    def count_members(self, department_id: int) -> int:
        raise NotImplementedError

    def sum_member_rates(self, department_id: int) -> Decimal:
        raise NotImplementedError


class DepartmentRepository(Protocol):
    def get_department(self, department_id: int) -> Optional[Department]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Department]:
        raise NotImplementedError

    def list_by_ids(self, department_ids: Iterable[int]) -> Sequence[Department]:
        raise NotImplementedError

    def create(self, *, name: str, info: Optional[str] = None) -> int:
        """Insert a department. Returns department_id."""

        raise NotImplementedError

    def rename(self, *, department_id: int, name: str) -> bool:
        raise NotImplementedError

    def delete(self, *, department_id: int) -> bool:
        """Delete a department; its memberships go with it."""

        raise NotImplementedError

    def get_membership(self, *, user_id: int, department_id: int) -> Optional[Membership]:
        raise NotImplementedError

    def get_membership_by_id(self, membership_id: int) -> Optional[Membership]:
        raise NotImplementedError

    def upsert_membership(
        self,
        *,
        user_id: int,
        department_id: int,
        role: DepartmentRole,
        hourly_rate: Decimal,
        position: Optional[str] = None,
    ) -> int:
        """Create the (user, department) membership or overwrite it in place.

        Returns membership_id.
        """

        raise NotImplementedError

    def update_membership_role(self, *, user_id: int, department_id: int, role: DepartmentRole) -> bool:
        raise NotImplementedError

    def delete_membership_by_id(self, membership_id: int) -> bool:
        raise NotImplementedError

    def list_memberships_for_user(self, user_id: int) -> Sequence[Membership]:
        raise NotImplementedError

    def list_members(self, department_id: int) -> Sequence[MemberView]:
        raise NotImplementedError

    def count_members(self, department_id: int) -> int:
        raise NotImplementedError

    def sum_member_rates(self, department_id: int) -> Decimal:
        raise NotImplementedError

    def transaction(self) -> ContextManager[DepartmentTransaction]:
        """Open a unit of work: commit on clean exit, roll back on exception."""

        raise NotImplementedError
