"""
Payroll Configuration Schema.

Defines the structure and sensible defaults for payroll settings.
"""

from dataclasses import dataclass

from erp_kernel.logging_config import get_logger

logger = get_logger("modules.payroll.config")


@dataclass(frozen=True)
class PayrollConfig:
    """
    Configuration schema for the payroll module.

    ``allow_repeat_runs_in_period=False`` rejects a second run in the same
    calendar month instead of posting a second expense.
    """

    allow_repeat_runs_in_period: bool = True
    expense_category: str = "Payroll"

    def __post_init__(self):
        if not isinstance(self.allow_repeat_runs_in_period, bool):
            raise ValueError("allow_repeat_runs_in_period must be a boolean")
        if not self.expense_category or not self.expense_category.strip():
            raise ValueError("expense_category cannot be blank")
