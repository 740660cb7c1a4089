"""
Tests for the Financial Ledger (AccountingService, LedgerWriter).

The financial feed combines recorded entries with one synthesized expense
per purchase order; synthesized lines are never persisted.
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

import pytest

from erp_kernel.exceptions import NotFoundError, ValidationError
from erp_kernel.store.base import Collections
from erp_modules.accounting.ledger import LedgerWriter
from erp_modules.accounting.models import TransactionType


@pytest.fixture
def purchase_order(procurement_service, make_product):
    laptop = make_product("Laptop", cost="800")
    pr = procurement_service.create_pr("Ops", [(laptop.id, 5)])
    procurement_service.approve_pr(pr.id)
    return procurement_service.generate_po(pr.id, "Global Tech Supplies")


class TestOperationalExpense:

    def test_posts_expense(self, accounting_service, deterministic_clock):
        entry = accounting_service.add_operational_expense(
            description="Office rent", amount="2500", category="Rent",
        )

        assert entry.id == "TX-000001"
        assert entry.transaction_type is TransactionType.EXPENSE
        assert entry.amount == Decimal("2500.00")
        assert entry.date == deterministic_clock.today()
        assert entry.reference_id is None
        assert accounting_service.list_transactions() == [entry]

    def test_default_category(self, accounting_service):
        assert accounting_service.add_operational_expense(
            description="Coffee", amount=12,
        ).category == "General"

    @pytest.mark.parametrize(
        "fields",
        [{"description": "", "amount": 1}, {"description": "Rent", "amount": -5}],
    )
    def test_invalid_expense_rejected(self, accounting_service, fields):
        with pytest.raises(ValidationError):
            accounting_service.add_operational_expense(**fields)
        assert accounting_service.list_transactions() == []

    def test_datetime_entry_date_stored_as_date(self, accounting_service):
        accounting_service.add_operational_expense(
            description="Rent", amount="10", entry_date=datetime(2024, 1, 2, 9, 30),
        )

        assert accounting_service.list_transactions()[0].date == date(2024, 1, 2)
        assert accounting_service.get_financial_transactions()[0].date == date(2024, 1, 2)

    def test_iso_string_entry_date_accepted(self, accounting_service):
        entry = accounting_service.add_operational_expense(
            description="Rent", amount="10", entry_date="2023-12-31",
        )
        assert entry.date == date(2023, 12, 31)

    @pytest.mark.parametrize("entry_date", ["next tuesday", "2024-01-02T09:30:00", 20240102])
    def test_unparseable_entry_date_rejected(self, accounting_service, entry_date):
        with pytest.raises(ValidationError) as exc_info:
            accounting_service.add_operational_expense(
                description="Rent", amount="10", entry_date=entry_date,
            )

        assert exc_info.value.field == "date"
        assert accounting_service.list_transactions() == []
        assert accounting_service.financial_summary().total_expense == Decimal("0.00")

    def test_newest_posting_first(self, accounting_service):
        first = accounting_service.add_operational_expense(description="A", amount=1)
        second = accounting_service.add_operational_expense(description="B", amount=2)

        assert [t.id for t in accounting_service.list_transactions()] == [second.id, first.id]


class TestLedgerWriter:

    def test_dangling_reference_rejected(self, store, deterministic_clock):
        with pytest.raises(NotFoundError) as exc_info:
            with store.transaction() as uow:
                LedgerWriter(uow, deterministic_clock).post(
                    transaction_type=TransactionType.INCOME,
                    description="Payment Received - Ghost",
                    amount=10,
                    category="Sales",
                    reference_id="SO-404",
                )

        assert exc_info.value.entity_id == "SO-404"
        assert store.get(Collections.TRANSACTIONS) == []

    def test_reference_to_purchase_order_accepted(
        self, store, deterministic_clock, purchase_order,
    ):
        with store.transaction() as uow:
            entry = LedgerWriter(uow, deterministic_clock).post(
                transaction_type=TransactionType.EXPENSE,
                description="Freight",
                amount=40,
                category="Procurement",
                reference_id=purchase_order.id,
            )
        assert entry.reference_id == purchase_order.id

    def test_persisted_under_type_key(self, accounting_service, store):
        accounting_service.add_operational_expense(description="Rent", amount=1)

        record = store.get(Collections.TRANSACTIONS)[0]
        assert record["type"] == "Expense"
        assert record["amount"] == "1.00"


class TestFinancialFeed:

    def test_purchase_order_appears_as_expense(self, accounting_service, purchase_order):
        [line] = accounting_service.get_financial_transactions()

        assert line.id == f"TX-PO-{purchase_order.id}"
        assert line.description == "Supplier Payment - Global Tech Supplies"
        assert line.transaction_type is TransactionType.EXPENSE
        assert line.category == "Procurement"
        assert line.amount == Decimal("4000.00")
        assert line.reference_id == purchase_order.id

    def test_synthesized_lines_not_persisted(self, accounting_service, purchase_order, store):
        accounting_service.get_financial_transactions()
        assert store.get(Collections.TRANSACTIONS) == []

    def test_sorted_newest_first(self, accounting_service, purchase_order):
        accounting_service.add_operational_expense(
            description="Old rent", amount=100, entry_date=date(2023, 1, 1),
        )
        accounting_service.add_operational_expense(
            description="Future rent", amount=100, entry_date=date(2024, 6, 1),
        )

        feed = accounting_service.get_financial_transactions()

        assert [t.date for t in feed] == sorted((t.date for t in feed), reverse=True)
        assert feed[0].description == "Future rent"
        assert feed[-1].description == "Old rent"


class TestFinancialSummary:

    def test_summary_over_full_feed(
        self, accounting_service, sales_service, make_product, purchase_order,
    ):
        mouse = make_product("Mouse", stock=100, price="50")
        order = sales_service.create_sales_order("Acme", [(mouse.id, 10)])
        for _ in range(3):
            sales_service.advance_sales_status(order.id)
        sales_service.receive_payment(order.id)
        accounting_service.add_operational_expense(description="Rent", amount=300)

        summary = accounting_service.financial_summary()

        assert summary.total_income == Decimal("500.00")
        assert summary.total_expense == Decimal("4300.00")
        assert summary.net == Decimal("-3800.00")

    def test_empty_ledger(self, accounting_service):
        summary = accounting_service.financial_summary()
        assert summary.total_income == summary.total_expense == summary.net == Decimal("0.00")
