"""
Financial Ledger models (``erp_modules.accounting.models``).

``Transaction`` entries are append-only: never mutated or deleted once
written.  ``FinancialSummary`` is a derived read model.
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum


class TransactionType(Enum):
    INCOME = "Income"
    EXPENSE = "Expense"


@dataclass(frozen=True)
class Transaction:
    """One ledger entry.  ``reference_id`` links to a PO, SO or payroll run."""
    id: str
    date: date
    description: str
    transaction_type: TransactionType = field(metadata={"record_key": "type"})
    amount: Decimal
    category: str
    reference_id: str | None = None


@dataclass(frozen=True)
class FinancialSummary:
    total_income: Decimal
    total_expense: Decimal

    @property
    def net(self) -> Decimal:
        return self.total_income - self.total_expense
