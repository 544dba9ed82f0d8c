from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional, Sequence

from ..common.validators import merge_partial, optional_text, parse_optional_rate, require_non_empty
from ..core.enums import WageType
from ..core.exceptions import NotFoundError, ValidationError
from .model import Employee
from .repository import EmployeeRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EmployeeInput:
    name: Any = None
    email: Any = None
    phone: Any = None
    wage_type: Any = None
    hourly_rate_eur: Any = None
    hourly_rate_gbp: Any = None
    daily_wage_eur: Any = None
    daily_wage_gbp: Any = None

    @classmethod
    def from_record(cls, employee: Employee) -> EmployeeInput:
        return cls(
            name=employee.name,
            email=employee.email,
            phone=employee.phone,
            wage_type=employee.wage_type,
            hourly_rate_eur=employee.hourly_rate_eur,
            hourly_rate_gbp=employee.hourly_rate_gbp,
            daily_wage_eur=employee.daily_wage_eur,
            daily_wage_gbp=employee.daily_wage_gbp,
        )


def parse_wage_type(value: Any) -> WageType:
    if isinstance(value, WageType):
        return value
    if value is None or value == "":
        return WageType.HOURLY
    try:
        return WageType(str(value).strip().upper())
    except ValueError:
        raise ValidationError("Valid wageType (HOURLY or FIXED) is required")


class EmployeeService:
    def __init__(self, employees: EmployeeRepository):
        self._employees = employees

    def _build(self, employee_id: int, data: EmployeeInput) -> Employee:
        return Employee(
            employee_id=employee_id,
            name=require_non_empty(data.name, "Employee name"),
            wage_type=parse_wage_type(data.wage_type),
            hourly_rate_eur=parse_optional_rate(data.hourly_rate_eur, "hourlyRateEur"),
            hourly_rate_gbp=parse_optional_rate(data.hourly_rate_gbp, "hourlyRateGbp"),
            daily_wage_eur=parse_optional_rate(data.daily_wage_eur, "dailyWageEur"),
            daily_wage_gbp=parse_optional_rate(data.daily_wage_gbp, "dailyWageGbp"),
            email=optional_text(data.email, max_length=160, field_name="email"),
            phone=optional_text(data.phone, max_length=40, field_name="phone"),
        )

    def create_employee(self, data: EmployeeInput) -> Employee:
        employee = self._employees.create(self._build(0, data))
        logger.info("Created employee %s (%s, %s)", employee.employee_id, employee.name, employee.wage_type.value)
        return employee

    def update_employee(self, employee_id: int, data: EmployeeInput) -> Employee:
        """Fields left as ``None`` keep their stored value; ``""`` clears an optional one."""
        current = self.get_employee(employee_id)
        employee = self._build(current.employee_id, merge_partial(EmployeeInput.from_record(current), data))
        self._employees.update(employee)
        logger.info("Updated employee %s", employee_id)
        return employee

    def get_employee(self, employee_id: int) -> Employee:
        employee = self._employees.get_by_id(int(employee_id))
        if not employee:
            raise NotFoundError("Employee not found")
        return employee

    def list_employees(self, *, store_id: Optional[int] = None) -> Sequence[Employee]:
        return self._employees.list_all(store_id=store_id)

    def delete_employee(self, employee_id: int) -> None:
        if not self._employees.delete(int(employee_id)):
            raise NotFoundError("Employee not found")
        logger.info("Deleted employee %s", employee_id)
