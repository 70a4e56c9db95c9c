from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from ..core.enums import DepartmentRole


@dataclass(frozen=True)
class Department:
    """Domain entity: Department (stored attributes only)."""

    department_id: int
    name: str
    info: Optional[str] = None

    def to_dict(self) -> dict:
        return {"id": self.department_id, "name": self.name, "info": self.info}


@dataclass(frozen=True)
class DepartmentView:
    """Department plus the rollups computed on every read."""

    department_id: int
    name: str
    info: Optional[str]
    employee_count: int
    total_cost: Decimal

    @classmethod
    def of(cls, department: Department, *, employee_count: int, total_cost: Decimal) -> "DepartmentView":
        return cls(
            department_id=department.department_id,
            name=department.name,
            info=department.info,
            employee_count=employee_count,
            total_cost=total_cost,
        )

    def to_dict(self) -> dict:
        return {
            "id": self.department_id,
            "name": self.name,
            "info": self.info,
            "employeeCount": self.employee_count,
            "totalCost": str(self.total_cost),
        }


@dataclass(frozen=True)
class Membership:
    """Domain entity: EmployeeDepartment, one row per (user, department)."""

    membership_id: int
    user_id: int
    department_id: int
    role: DepartmentRole
    hourly_rate: Decimal
    position: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "id": self.membership_id,
            "userId": self.user_id,
            "departmentId": self.department_id,
            "role": self.role.value,
            "hourlyRate": str(self.hourly_rate),
            "position": self.position,
        }


@dataclass(frozen=True)
class MemberView:
    """Read-model for the department employee list (membership + user name)."""

    membership: Membership
    full_name: str
    email: Optional[str] = None

    def to_dict(self) -> dict:
        out = self.membership.to_dict()
        out["fullName"] = self.full_name
        out["email"] = self.email
        return out
