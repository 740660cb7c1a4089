"""
Payroll Domain Models (``erp_modules.payroll.models``).

Employees, the persisted record of each payroll run, and the result handed
back to the caller.  ``salary`` is a recurring monthly amount.
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum


class EmployeeStatus(Enum):
    ACTIVE = "Active"
    TERMINATED = "Terminated"


@dataclass(frozen=True)
class Employee:
    id: str
    name: str
    position: str
    department: str
    salary: Decimal
    joined_date: date
    status: EmployeeStatus = EmployeeStatus.ACTIVE


@dataclass(frozen=True)
class PayrollRun:
    """One lump payment of every active salary.  Referenced by its ledger entry."""
    id: str
    date: date
    employee_count: int
    total: Decimal

    @property
    def period(self) -> str:
        return f"{self.date.year:04d}-{self.date.month:02d}"


@dataclass(frozen=True)
class PayrollRunResult:
    run_id: str
    employee_count: int
    total: Decimal
