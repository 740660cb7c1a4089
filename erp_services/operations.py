"""
erp_services.operations -- the operation surface offered to the UI.

Responsibility:
    Creates every module service exactly once over one store, one clock
    and one settings object, and exposes the full operation surface as
    plain methods.  The UI collaborator calls one method per user action
    and renders the returned data.

Architecture position:
    Services -- top of the stack.  Imports ``erp_modules`` and
    ``erp_config``; nothing imports this package except callers and tests.

Invariants enforced:
    - Single-instance lifecycle: each module service is constructed once in
      ``__init__``; all share the same store, so every operation sees the
      same critical section.
    - Every call runs with ``LogContext`` bound to the operation name, the
      configured actor and a fresh correlation id (unless the caller
      already bound one).

Failure modes:
    - Errors from the module services propagate unchanged.  Nothing is
      retried here; a failed call has persisted nothing.

Usage:
    ops = ErpOperations.from_settings(get_active_settings())
    seed_store(ops.store, load_seed())
    order = ops.create_sales_order("Acme", [{"product_id": "2", "quantity": 10}])

    # Async callers: await asyncio.to_thread(ops.create_sales_order, ...)
"""

from __future__ import annotations

import functools
from collections.abc import Callable
from typing import Any, TypeVar
from uuid import uuid4

from erp_config import build_store
from erp_config.schema import ErpSettings
from erp_kernel.domain.clock import Clock, SystemClock
from erp_kernel.logging_config import LogContext, get_logger
from erp_kernel.store.base import CollectionStore
from erp_modules.accounting.service import AccountingService
from erp_modules.inventory.service import InventoryService
from erp_modules.manufacturing.service import ManufacturingService
from erp_modules.partners.service import PartnerService
from erp_modules.payroll.service import PayrollService
from erp_modules.procurement.service import ProcurementService
from erp_modules.reporting.service import ReportingService
from erp_modules.sales.service import SalesService

logger = get_logger("services.operations")

F = TypeVar("F", bound=Callable[..., Any])


def operation(func: F) -> F:
    """Bind LogContext for the duration of one facade call."""

    @functools.wraps(func)
    def wrapper(self: ErpOperations, *args: Any, **kwargs: Any) -> Any:
        correlation_id = LogContext.get_all().get("correlation_id") or str(uuid4())
        with LogContext.bind(
            operation=func.__name__,
            actor_id=self.actor_id,
            correlation_id=correlation_id,
        ):
            return func(self, *args, **kwargs)

    return wrapper  # type: ignore[return-value]


class ErpOperations:
    """The transactional ERP core, as one object."""

    def __init__(
        self,
        store: CollectionStore,
        settings: ErpSettings | None = None,
        clock: Clock | None = None,
        actor_id: str | None = None,
    ):
        self.store = store
        self.settings = settings or ErpSettings()
        self.clock = clock or SystemClock()
        self.actor_id = actor_id

        self.inventory = InventoryService(store, self.clock, self.settings.inventory)
        self.partners = PartnerService(store)
        self.procurement = ProcurementService(store, self.clock, self.settings.procurement)
        self.sales = SalesService(store, self.clock, self.settings.sales)
        self.manufacturing = ManufacturingService(store, self.clock)
        self.payroll = PayrollService(store, self.clock, self.settings.payroll)
        self.accounting = AccountingService(store, self.clock)
        self.reporting = ReportingService(store, self.settings.inventory)

        logger.info(
            "erp_operations_initialized",
            extra={
                "store": type(store).__name__,
                "settings_checksum": self.settings.checksum,
            },
        )

    @classmethod
    def from_settings(
        cls,
        settings: ErpSettings,
        clock: Clock | None = None,
        actor_id: str | None = None,
    ) -> ErpOperations:
        return cls(build_store(settings.store), settings, clock, actor_id)

    # -- Product Ledger ------------------------------------------------------

    @operation
    def list_products(self, search=None):
        return self.inventory.list_products(search)

    @operation
    def get_product(self, product_id):
        return self.inventory.get_product(product_id)

    @operation
    def add_product(self, **fields):
        return self.inventory.add_product(**fields)

    @operation
    def update_product(self, product_id, **updates):
        return self.inventory.update_product(product_id, **updates)

    @operation
    def adjust_stock(self, product_id, delta):
        return self.inventory.adjust_stock(product_id, delta)

    @operation
    def low_stock_products(self, threshold=None):
        return self.inventory.low_stock_products(threshold)

    @operation
    def stock_valuation(self):
        return self.inventory.stock_valuation()

    # -- Partner Directory ---------------------------------------------------

    @operation
    def list_partners(self, partner_type=None):
        return self.partners.list_partners(partner_type)

    @operation
    def add_partner(self, **fields):
        return self.partners.add_partner(**fields)

    @operation
    def get_partner(self, partner_id):
        return self.partners.get_partner(partner_id)

    # -- Procurement ---------------------------------------------------------

    @operation
    def list_prs(self):
        return self.procurement.list_prs()

    @operation
    def get_pr(self, pr_id):
        return self.procurement.get_pr(pr_id)

    @operation
    def create_pr(self, requester, items):
        return self.procurement.create_pr(requester, items)

    @operation
    def approve_pr(self, pr_id):
        return self.procurement.approve_pr(pr_id)

    @operation
    def reject_pr(self, pr_id):
        return self.procurement.reject_pr(pr_id)

    @operation
    def generate_po(self, pr_id, supplier):
        return self.procurement.generate_po(pr_id, supplier)

    @operation
    def list_pos(self):
        return self.procurement.list_pos()

    @operation
    def send_po(self, po_id):
        return self.procurement.send_po(po_id)

    @operation
    def receive_po(self, po_id):
        return self.procurement.receive_po(po_id)

    # -- Sales ---------------------------------------------------------------

    @operation
    def list_sales_orders(self):
        return self.sales.list_sales_orders()

    @operation
    def get_sales_order(self, order_id):
        return self.sales.get_sales_order(order_id)

    @operation
    def create_sales_order(self, customer_name, items):
        return self.sales.create_sales_order(customer_name, items)

    @operation
    def advance_sales_status(self, order_id):
        return self.sales.advance_sales_status(order_id)

    @operation
    def receive_payment(self, order_id):
        return self.sales.receive_payment(order_id)

    # -- Manufacturing -------------------------------------------------------

    @operation
    def list_boms(self):
        return self.manufacturing.list_boms()

    @operation
    def create_bom(self, **fields):
        return self.manufacturing.create_bom(**fields)

    @operation
    def list_production_orders(self):
        return self.manufacturing.list_production_orders()

    @operation
    def create_production_order(self, bom_id, quantity):
        return self.manufacturing.create_production_order(bom_id, quantity)

    @operation
    def complete_production(self, order_id):
        return self.manufacturing.complete_production(order_id)

    # -- Payroll -------------------------------------------------------------

    @operation
    def list_employees(self):
        return self.payroll.list_employees()

    @operation
    def list_payroll_runs(self):
        return self.payroll.list_payroll_runs()

    @operation
    def add_employee(self, **fields):
        return self.payroll.add_employee(**fields)

    @operation
    def terminate_employee(self, employee_id):
        return self.payroll.terminate_employee(employee_id)

    @operation
    def run_payroll(self):
        return self.payroll.run_payroll()

    # -- Financial Ledger ----------------------------------------------------

    @operation
    def list_transactions(self):
        return self.accounting.list_transactions()

    @operation
    def get_financial_transactions(self):
        return self.accounting.get_financial_transactions()

    @operation
    def add_operational_expense(self, **fields):
        return self.accounting.add_operational_expense(**fields)

    @operation
    def financial_summary(self):
        return self.accounting.financial_summary()

    # -- Reporting -----------------------------------------------------------

    @operation
    def dashboard_summary(self):
        return self.reporting.dashboard_summary()
