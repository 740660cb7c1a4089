"""
Tests for the ErpOperations facade.

The facade adds no behaviour of its own beyond wiring and LogContext
binding, so these tests exercise end-to-end flows through it and check
that every log line of a call carries the operation context.
"""

from decimal import Decimal

import pytest

from erp_config import get_active_settings, load_seed, seed_store
from erp_config.schema import ErpSettings
from erp_kernel.exceptions import InsufficientStockError
from erp_kernel.logging_config import LogContext
from erp_kernel.store.memory import InMemoryStore
from erp_modules.inventory.config import InventoryConfig
from erp_modules.sales.models import PaymentStatus, SalesStatus
from erp_services import ErpOperations


@pytest.fixture
def seeded_ops(seeded_store, deterministic_clock):
    return ErpOperations(seeded_store, clock=deterministic_clock, actor_id="tester")


class TestConstruction:

    def test_from_settings_uses_configured_backend(self):
        ops = ErpOperations.from_settings(get_active_settings())
        assert isinstance(ops.store, InMemoryStore)

    def test_settings_reach_services(self, store, make_product):
        settings = ErpSettings(inventory=InventoryConfig(low_stock_threshold=50))
        ops = ErpOperations(store, settings)
        make_product("Mouse", stock=40)

        assert len(ops.low_stock_products()) == 1
        assert ops.dashboard_summary().low_stock_count == 1


class TestLogContextBinding:

    def test_operation_context_on_every_line(self, ops, make_product, captured_logs):
        mouse = make_product("Mouse", stock=100)

        ops.create_sales_order("Acme", [(mouse.id, 1)])

        records = [r for r in captured_logs() if r.get("operation") == "create_sales_order"]
        assert any(r["message"] == "sales_order_created" for r in records)
        assert {r["actor_id"] for r in records} == {"tester"}
        assert len({r["correlation_id"] for r in records}) == 1

    def test_each_call_gets_fresh_correlation_id(self, ops, make_product, captured_logs):
        mouse = make_product("Mouse", stock=100)
        ops.adjust_stock(mouse.id, 1)
        ops.adjust_stock(mouse.id, 1)

        ids = {
            r["correlation_id"] for r in captured_logs() if r["message"] == "stock_adjusted"
        }
        assert len(ids) == 2

    def test_caller_correlation_id_is_kept(self, ops, make_product, captured_logs):
        mouse = make_product("Mouse", stock=100)

        with LogContext.bind(correlation_id="ui-request-7"):
            ops.adjust_stock(mouse.id, 3)

        [record] = [r for r in captured_logs() if r["message"] == "stock_adjusted"]
        assert record["correlation_id"] == "ui-request-7"

    def test_context_cleared_after_failure(self, ops, make_product):
        chair = make_product("Chair", stock=1)

        with pytest.raises(InsufficientStockError):
            ops.create_sales_order("Acme", [(chair.id, 2)])

        assert LogContext.get_all() == {}


class TestEndToEnd:

    def test_order_to_cash(self, seeded_ops):
        order = seeded_ops.create_sales_order("Tech Solutions Inc.", [("2", 10)])
        for _ in range(3):
            seeded_ops.advance_sales_status(order.id)
        paid = seeded_ops.receive_payment(order.id)

        assert paid.status is SalesStatus.INVOICE
        assert paid.payment_status is PaymentStatus.PAID
        assert seeded_ops.get_product("2").stock == 90
        income = [t for t in seeded_ops.list_transactions() if t.reference_id == order.id]
        assert [t.amount for t in income] == [Decimal("500.00")]

    def test_procure_to_receipt(self, seeded_ops):
        pr = seeded_ops.create_pr("Purchasing Dept", [{"productId": "3", "quantity": 4}])
        seeded_ops.approve_pr(pr.id)
        po = seeded_ops.generate_po(pr.id, "Global Supplies Co.")
        seeded_ops.receive_po(po.id)

        assert seeded_ops.get_product("3").stock == 9
        assert seeded_ops.list_pos()[0].id == po.id
        feed_ids = [t.id for t in seeded_ops.get_financial_transactions()]
        assert f"TX-PO-{po.id}" in feed_ids

    def test_financial_summary_of_seed(self, seeded_ops):
        summary = seeded_ops.financial_summary()

        assert summary.total_income == Decimal("0.00")
        assert summary.total_expense == Decimal("2100")

    def test_directory_and_people(self, seeded_ops):
        assert len(seeded_ops.list_partners("Supplier")) == 2
        employee = seeded_ops.add_employee(
            name="Kyle Reese", position="Guard", department="Security", salary=3000,
        )
        seeded_ops.terminate_employee(employee.id)

        result = seeded_ops.run_payroll()
        assert result.employee_count == 2

    def test_dashboard_of_seed(self, seeded_ops):
        summary = seeded_ops.dashboard_summary()

        # Laptops 10 x 1000, mice 100 x 20, chairs 5 x 150, materials 1000 + 900 + 1000
        assert summary.total_stock_value == Decimal("15650")
        assert summary.low_stock_count == 1
        assert summary.sales_order_count == 0

    def test_manufacturing_through_facade(self, seeded_ops):
        [bom] = seeded_ops.list_boms()
        order = seeded_ops.create_production_order(bom.id, 1)
        seeded_ops.complete_production(order.id)

        assert seeded_ops.list_production_orders()[0].status.value == "Completed"
        assert seeded_ops.get_product("3").stock == 6

    def test_document_lookups(self, seeded_ops):
        assert seeded_ops.get_pr("PR-2023-001").requester == "John Doe"
        order = seeded_ops.create_sales_order("Retail King", [("1", 1)])
        assert seeded_ops.get_sales_order(order.id).total_amount == Decimal("1500.00")

        seeded_ops.run_payroll()
        [run] = seeded_ops.list_payroll_runs()
        assert run.employee_count == 2
