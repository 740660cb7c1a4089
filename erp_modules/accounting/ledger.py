"""
LedgerWriter -- the single append path into the ``transactions`` collection.

Responsibility:
    Allocates the transaction id, verifies that a ``reference_id`` resolves
    to an existing purchase order, sales order or payroll run, and prepends
    the entry to the ledger.

Architecture position:
    Modules > Accounting.  Runs inside the caller's unit of work so a ledger
    posting commits or discards together with the document change that
    caused it (payment receipt, payroll run, manual expense).

Invariants enforced:
    - Append-only: entries are only ever prepended; none is replaced or
      removed.
    - Every ``reference_id`` names an entity that exists at posting time.
      References are resolved against the same unit of work, so a payroll
      run added earlier in the same operation is visible.

Failure modes:
    - ``NotFoundError("Reference", id)`` for an unresolvable reference.
    - ``ValidationError`` for a blank description or category, a
      negative amount, or an entry date that is not a calendar date.
"""

from __future__ import annotations

from datetime import date
from typing import Any

from erp_kernel.domain.clock import Clock
from erp_kernel.domain.values import require_text, to_amount, to_date
from erp_kernel.exceptions import NotFoundError
from erp_kernel.logging_config import get_logger
from erp_kernel.services.sequence_service import SequenceService
from erp_kernel.store.base import Collections
from erp_kernel.store.repository import Repository
from erp_kernel.store.unit_of_work import UnitOfWork
from erp_modules.accounting.models import Transaction, TransactionType

logger = get_logger("modules.accounting.ledger")

REFERENCE_COLLECTIONS = (
    Collections.PURCHASE_ORDERS,
    Collections.SALES_ORDERS,
    Collections.PAYROLL_RUNS,
)


def transaction_repository(uow: UnitOfWork) -> Repository[Transaction]:
    return uow.repository(Collections.TRANSACTIONS, Transaction, "Transaction")


class LedgerWriter:
    """Posts ledger entries inside a unit of work."""

    def __init__(self, uow: UnitOfWork, clock: Clock):
        self._uow = uow
        self._clock = clock

    def reference_exists(self, reference_id: str) -> bool:
        return any(
            record.get("id") == reference_id
            for name in REFERENCE_COLLECTIONS
            for record in self._uow.records(name)
        )

    def verify_reference(self, reference_id: str | None) -> None:
        if reference_id is not None and not self.reference_exists(reference_id):
            logger.warning("ledger_reference_missing", extra={"reference_id": reference_id})
            raise NotFoundError("Reference", reference_id)

    def post(
        self,
        *,
        transaction_type: TransactionType,
        description: str,
        amount: Any,
        category: str,
        reference_id: str | None = None,
        entry_date: date | str | None = None,
    ) -> Transaction:
        description = require_text(description, field="description")
        category = require_text(category, field="category")
        amount = to_amount(amount)
        entry_date = self._clock.today() if entry_date is None else to_date(entry_date)
        self.verify_reference(reference_id)

        entry = Transaction(
            id=SequenceService(self._uow).next_id(SequenceService.TRANSACTION),
            date=entry_date,
            description=description,
            transaction_type=transaction_type,
            amount=amount,
            category=category,
            reference_id=reference_id,
        )
        transaction_repository(self._uow).add(entry, prepend=True)

        logger.info(
            "ledger_entry_posted",
            extra={
                "entity_id": entry.id,
                "transaction_type": transaction_type.value,
                "amount": str(amount),
                "category": category,
                "reference_id": reference_id,
            },
        )
        return entry
