"""
Payroll Module (``erp_modules.payroll``).

Responsibility
--------------
Employees and payroll runs.  A run aggregates active salaries into one
lump Expense posted to the Financial Ledger, referencing a persisted
``PayrollRun`` record.

Architecture
------------
Layer: **Modules**.  Depends on ``accounting`` for ledger posting.
"""

from erp_modules.payroll.config import PayrollConfig
from erp_modules.payroll.models import (
    Employee,
    EmployeeStatus,
    PayrollRun,
    PayrollRunResult,
)
from erp_modules.payroll.service import (
    PayrollService,
    employee_repository,
    payroll_run_repository,
)
from erp_modules.payroll.workflows import EMPLOYEE_WORKFLOW

__all__ = [
    "EMPLOYEE_WORKFLOW",
    "Employee",
    "EmployeeStatus",
    "PayrollConfig",
    "PayrollRun",
    "PayrollRunResult",
    "PayrollService",
    "employee_repository",
    "payroll_run_repository",
]
