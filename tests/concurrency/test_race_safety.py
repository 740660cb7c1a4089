"""
Concurrency tests (race safety).

These tests verify that invariants hold when many threads call the
services at once against one shared store:
- stock is never oversold, whatever the interleaving
- every allocated id is unique
- a reader never observes half of a multi-collection operation

Run with: pytest tests/concurrency/test_race_safety.py -v
Skip with: pytest -m "not slow"
"""

from concurrent.futures import ThreadPoolExecutor
from decimal import Decimal
from threading import Barrier

import pytest

from erp_kernel.exceptions import InsufficientStockError
from erp_kernel.services.sequence_service import SequenceService
from erp_modules.accounting.service import AccountingService
from erp_modules.inventory.service import InventoryService
from erp_modules.sales.service import SalesService

pytestmark = pytest.mark.slow

THREADS = 16


def _run_together(count, func):
    """Start ``count`` calls of ``func`` behind a barrier; collect outcomes."""
    barrier = Barrier(count)

    def _call(i):
        barrier.wait()
        try:
            return ("ok", func(i))
        except Exception as exc:
            return ("error", exc)

    with ThreadPoolExecutor(max_workers=count) as pool:
        return list(pool.map(_call, range(count)))


class TestNoOversell:

    def test_concurrent_orders_for_last_units(self, any_store, deterministic_clock):
        """16 buyers race for 5 chairs: exactly 5 orders of one succeed."""
        inventory = InventoryService(any_store, deterministic_clock)
        sales = SalesService(any_store, deterministic_clock)
        chair = inventory.add_product(sku="CHAIR-003", name="Ergo Chair", price=300, stock=5)

        outcomes = _run_together(
            THREADS, lambda i: sales.create_sales_order(f"Buyer {i}", [(chair.id, 1)]),
        )

        succeeded = [value for kind, value in outcomes if kind == "ok"]
        failed = [value for kind, value in outcomes if kind == "error"]
        assert len(succeeded) == 5
        assert all(isinstance(exc, InsufficientStockError) for exc in failed)
        assert inventory.get_product(chair.id).stock == 0
        assert len(sales.list_sales_orders()) == 5

    def test_concurrent_adjustments_sum_exactly(self, store, deterministic_clock):
        inventory = InventoryService(store, deterministic_clock)
        mouse = inventory.add_product(sku="MOU-002", name="Mouse", stock=100)

        outcomes = _run_together(
            THREADS, lambda i: inventory.adjust_stock(mouse.id, 3 if i % 2 else -2),
        )

        assert all(kind == "ok" for kind, _ in outcomes)
        # 8 x +3 and 8 x -2
        assert inventory.get_product(mouse.id).stock == 108


class TestSequenceSafety:

    def test_ids_unique_under_contention(self, store):
        def _allocate(_):
            with store.transaction("allocate") as uow:
                return SequenceService(uow).next_id(SequenceService.SALES_ORDER)

        outcomes = _run_together(THREADS, _allocate)

        ids = [value for _, value in outcomes]
        assert len(set(ids)) == THREADS
        assert sorted(ids) == [f"SO-{n:06d}" for n in range(1, THREADS + 1)]


class TestAtomicVisibility:

    def test_payment_and_ledger_seen_together(self, store, deterministic_clock):
        """A reader sees an order Paid only together with its Income entry."""
        inventory = InventoryService(store, deterministic_clock)
        sales = SalesService(store, deterministic_clock)
        accounting = AccountingService(store, deterministic_clock)
        mouse = inventory.add_product(sku="MOU-002", name="Mouse", price=50, stock=1000)

        order_ids = []
        for i in range(THREADS):
            order = sales.create_sales_order(f"Buyer {i}", [(mouse.id, 1)])
            for _ in range(3):
                sales.advance_sales_status(order.id)
            order_ids.append(order.id)

        def _pay_or_observe(i):
            if i % 2:
                return sales.receive_payment(order_ids[i])
            with store.transaction("observe") as uow:
                paid = {
                    r["id"] for r in uow.records("sales-orders") if r["paymentStatus"] == "Paid"
                }
                referenced = {r["referenceId"] for r in uow.records("transactions")}
            assert paid == referenced
            return None

        outcomes = _run_together(THREADS, _pay_or_observe)

        assert all(kind == "ok" for kind, _ in outcomes), outcomes
        assert accounting.financial_summary().total_income == Decimal("400.00")
