"""
Accounting Module Service (``erp_modules.accounting.service``).

Responsibility
--------------
Read access to the Financial Ledger, the combined financial feed, manual
operational expenses, and the income/expense summary.

Architecture
------------
Layer: **Modules**.  ``get_financial_transactions`` is a pure projection:
recorded ledger entries plus one synthesized Expense per purchase order,
recomputed on every call because purchase orders live in their own
collection.  Nothing here mutates documents of other modules.

Invariants
----------
- Synthesized procurement lines are never persisted.  Their id is
  ``TX-PO-<po id>`` and they reference the order.
- The feed is sorted by date, newest first.  Entries sharing a date keep
  ledger-before-procurement order.
"""

from __future__ import annotations

from datetime import date
from typing import Any

from erp_kernel.domain.clock import Clock, SystemClock
from erp_kernel.domain.values import ZERO
from erp_kernel.logging_config import get_logger
from erp_kernel.store.base import CollectionStore
from erp_modules.accounting.ledger import LedgerWriter, transaction_repository
from erp_modules.accounting.models import FinancialSummary, Transaction, TransactionType
from erp_modules.procurement.models import PurchaseOrder
from erp_modules.procurement.service import order_repository

logger = get_logger("modules.accounting.service")

PROCUREMENT_CATEGORY = "Procurement"


def procurement_expense(po: PurchaseOrder) -> Transaction:
    """Ledger view of the spend committed by a purchase order."""
    return Transaction(
        id=f"TX-PO-{po.id}",
        date=po.date,
        description=f"Supplier Payment - {po.supplier}",
        transaction_type=TransactionType.EXPENSE,
        amount=po.total_cost,
        category=PROCUREMENT_CATEGORY,
        reference_id=po.id,
    )


class AccountingService:
    """Financial Ledger operations."""

    def __init__(self, store: CollectionStore, clock: Clock | None = None):
        self._store = store
        self._clock = clock or SystemClock()

    def list_transactions(self) -> list[Transaction]:
        """Recorded ledger entries only, newest posting first."""
        with self._store.transaction("list_transactions") as uow:
            return transaction_repository(uow).all()

    def get_financial_transactions(self) -> list[Transaction]:
        with self._store.transaction("get_financial_transactions") as uow:
            ledger = transaction_repository(uow).all()
            orders = order_repository(uow).all()

        feed = ledger + [procurement_expense(po) for po in orders]
        return sorted(feed, key=lambda tx: tx.date, reverse=True)

    def add_operational_expense(
        self,
        *,
        description: str,
        amount: Any,
        category: str = "General",
        entry_date: date | str | None = None,
    ) -> Transaction:
        with self._store.transaction("add_operational_expense") as uow:
            entry = LedgerWriter(uow, self._clock).post(
                transaction_type=TransactionType.EXPENSE,
                description=description,
                amount=amount,
                category=category,
                entry_date=entry_date,
            )

        logger.info(
            "operational_expense_added",
            extra={"entity_id": entry.id, "amount": str(entry.amount)},
        )
        return entry

    def financial_summary(self) -> FinancialSummary:
        income = expense = ZERO
        for tx in self.get_financial_transactions():
            if tx.transaction_type is TransactionType.INCOME:
                income += tx.amount
            else:
                expense += tx.amount
        return FinancialSummary(total_income=income, total_expense=expense)
