"""
Payroll Module Service (``erp_modules.payroll.service``).

Responsibility
--------------
Employee records and the payroll run: one lump Expense entry for the sum
of every active salary.

Architecture
------------
Layer: **Modules**.  A run writes a ``PayrollRun`` record and its ledger
entry in the same unit of work; the entry references the run.

Invariants
----------
- A run posts exactly one Expense, categorised ``Payroll``, equal to the
  sum of active salaries at the time of the run.
- Employees are not marked as paid.  Repeat runs in one month post again
  unless ``allow_repeat_runs_in_period`` is off.

Failure Modes
-------------
- ``NoActiveEmployeesError`` when nobody is Active.
- ``AlreadyProcessedError`` for a repeat run (when disallowed) or for
  terminating a terminated employee.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import date
from typing import Any

from erp_kernel.domain.clock import Clock, SystemClock
from erp_kernel.domain.values import ZERO, require_text, to_amount, to_date
from erp_kernel.domain.workflow import apply_action
from erp_kernel.exceptions import AlreadyProcessedError, NoActiveEmployeesError, ValidationError
from erp_kernel.logging_config import get_logger
from erp_kernel.services.sequence_service import SequenceService
from erp_kernel.store.base import Collections, CollectionStore
from erp_kernel.store.repository import Repository
from erp_kernel.store.unit_of_work import UnitOfWork
from erp_modules.accounting.ledger import LedgerWriter
from erp_modules.accounting.models import TransactionType
from erp_modules.payroll.config import PayrollConfig
from erp_modules.payroll.models import (
    Employee,
    EmployeeStatus,
    PayrollRun,
    PayrollRunResult,
)
from erp_modules.payroll.workflows import EMPLOYEE_WORKFLOW

logger = get_logger("modules.payroll.service")


def employee_repository(uow: UnitOfWork) -> Repository[Employee]:
    return uow.repository(Collections.EMPLOYEES, Employee, "Employee")


def payroll_run_repository(uow: UnitOfWork) -> Repository[PayrollRun]:
    return uow.repository(Collections.PAYROLL_RUNS, PayrollRun, "PayrollRun")


class PayrollService:
    """Employee and payroll operations."""

    def __init__(
        self,
        store: CollectionStore,
        clock: Clock | None = None,
        config: PayrollConfig | None = None,
    ):
        self._store = store
        self._clock = clock or SystemClock()
        self._config = config or PayrollConfig()

    def list_employees(self) -> list[Employee]:
        with self._store.transaction("list_employees") as uow:
            return employee_repository(uow).all()

    def list_payroll_runs(self) -> list[PayrollRun]:
        with self._store.transaction("list_payroll_runs") as uow:
            return payroll_run_repository(uow).all()

    def add_employee(
        self,
        *,
        name: str,
        position: str,
        department: str,
        salary: Any,
        joined_date: date | str | None = None,
        status: EmployeeStatus | str = EmployeeStatus.ACTIVE,
    ) -> Employee:
        name = require_text(name, field="name")
        position = require_text(position, field="position")
        department = require_text(department, field="department")
        salary = to_amount(salary, field="salary")
        if joined_date is not None:
            joined_date = to_date(joined_date, field="joined_date")
        try:
            status = EmployeeStatus(status)
        except ValueError:
            raise ValidationError("status", f"must be Active or Terminated, got {status!r}") from None

        with self._store.transaction("add_employee") as uow:
            employee = Employee(
                id=SequenceService(uow).next_id(SequenceService.EMPLOYEE),
                name=name,
                position=position,
                department=department,
                salary=salary,
                joined_date=joined_date or self._clock.today(),
                status=status,
            )
            employee_repository(uow).add(employee)

        logger.info(
            "employee_added",
            extra={"entity_id": employee.id, "department": department},
        )
        return employee

    def terminate_employee(self, employee_id: str) -> Employee:
        with self._store.transaction("terminate_employee") as uow:
            employees = employee_repository(uow)
            employee = employees.get(employee_id)
            if EMPLOYEE_WORKFLOW.is_terminal(employee.status.value):
                logger.warning("employee_already_terminated", extra={"entity_id": employee_id})
                raise AlreadyProcessedError("Employee", employee.id, employee.status.value)
            transition = apply_action(
                EMPLOYEE_WORKFLOW, employee.status.value, "terminate",
                entity_type="Employee", entity_id=employee.id,
            )
            updated = replace(employee, status=EmployeeStatus(transition.to_state))
            employees.replace(updated)

        logger.info("employee_terminated", extra={"entity_id": employee_id})
        return updated

    def run_payroll(self) -> PayrollRunResult:
        """Post one Expense for the total of every active salary."""
        with self._store.transaction("run_payroll") as uow:
            active = employee_repository(uow).filter(
                lambda e: e.status is EmployeeStatus.ACTIVE
            )
            if not active:
                logger.warning("payroll_rejected_no_active_employees")
                raise NoActiveEmployeesError()

            today = self._clock.today()
            runs = payroll_run_repository(uow)
            if not self._config.allow_repeat_runs_in_period:
                self._ensure_first_run_in_period(runs, today)

            total = sum((e.salary for e in active), ZERO)
            run = PayrollRun(
                id=SequenceService(uow).next_id(SequenceService.PAYROLL_RUN),
                date=today,
                employee_count=len(active),
                total=total,
            )
            runs.add(run, prepend=True)
            entry = LedgerWriter(uow, self._clock).post(
                transaction_type=TransactionType.EXPENSE,
                description=f"Monthly Payroll ({len(active)} employees)",
                amount=total,
                category=self._config.expense_category,
                reference_id=run.id,
                entry_date=today,
            )

        logger.info(
            "payroll_run_completed",
            extra={
                "entity_id": run.id,
                "transaction_id": entry.id,
                "employee_count": run.employee_count,
                "total": str(total),
            },
        )
        return PayrollRunResult(run_id=run.id, employee_count=run.employee_count, total=total)

    @staticmethod
    def _ensure_first_run_in_period(runs: Repository[PayrollRun], today: date) -> None:
        period = f"{today.year:04d}-{today.month:02d}"
        for existing in runs:
            if existing.period == period:
                logger.warning(
                    "payroll_rejected_repeat_run",
                    extra={"entity_id": existing.id, "period": period},
                )
                raise AlreadyProcessedError("PayrollRun", existing.id, period)
