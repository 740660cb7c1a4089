"""
Accounting Module (``erp_modules.accounting``).

Responsibility
--------------
The Financial Ledger: append-only ``Transaction`` entries written through
``LedgerWriter``, and the chronological feed that merges them with
procurement spend.

Architecture
------------
Layer: **Modules**.  Sales and payroll post through ``LedgerWriter`` in
their own unit of work; the feed reads procurement orders read-only.
"""

from erp_modules.accounting.ledger import LedgerWriter, transaction_repository
from erp_modules.accounting.models import FinancialSummary, Transaction, TransactionType
from erp_modules.accounting.service import AccountingService, procurement_expense

__all__ = [
    "AccountingService",
    "FinancialSummary",
    "LedgerWriter",
    "Transaction",
    "TransactionType",
    "procurement_expense",
    "transaction_repository",
]
