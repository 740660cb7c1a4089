"""
Sales Module Service (``erp_modules.sales.service``).

Responsibility
--------------
Creates customer orders (reserving stock at creation), advances them
through the document workflow, and settles payment into the ledger.

Architecture
------------
Layer: **Modules**.  Uses ``inventory.plan_stock_movements`` for the
reservation and ``accounting.LedgerWriter`` for the payment posting, both
inside the operation's own unit of work.

Invariants
----------
- Reservation is all-or-nothing: if any line (after netting lines for the
  same product) is short of stock, no product is decremented and no order
  is created.
- ``advance_sales_status`` moves exactly one step; on Completed it does
  nothing.
- A payment is received at most once, and only from Invoice or Completed.
  The Paid flag and its Income entry are written together.

Failure Modes
-------------
- ``NotFoundError`` for unknown orders or products.
- ``InsufficientStockError`` naming the product, required and available.
- ``InvalidStateTransitionError`` for payment before invoicing.
- ``AlreadyProcessedError`` for a second payment.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any, Iterable

from erp_kernel.domain.clock import Clock, SystemClock
from erp_kernel.domain.plan import ChangePlan
from erp_kernel.domain.values import require_text
from erp_kernel.domain.workflow import apply_action
from erp_kernel.exceptions import AlreadyProcessedError, InvalidStateTransitionError
from erp_kernel.logging_config import get_logger
from erp_kernel.services.sequence_service import SequenceService
from erp_kernel.store.base import Collections, CollectionStore
from erp_kernel.store.repository import Repository
from erp_kernel.store.unit_of_work import UnitOfWork
from erp_modules.accounting.ledger import LedgerWriter
from erp_modules.accounting.models import TransactionType
from erp_modules.inventory.helpers import parse_line_requests, plan_stock_movements
from erp_modules.inventory.service import product_repository
from erp_modules.sales.config import SalesConfig
from erp_modules.sales.models import PaymentStatus, SalesOrder, SalesStatus, SOLine
from erp_modules.sales.workflows import PAYMENT_WORKFLOW, SALES_ORDER_WORKFLOW

logger = get_logger("modules.sales.service")


def sales_order_repository(uow: UnitOfWork) -> Repository[SalesOrder]:
    return uow.repository(Collections.SALES_ORDERS, SalesOrder, "SalesOrder")


class SalesService:
    """Sales order operations."""

    def __init__(
        self,
        store: CollectionStore,
        clock: Clock | None = None,
        config: SalesConfig | None = None,
    ):
        self._store = store
        self._clock = clock or SystemClock()
        self._config = config or SalesConfig()

    def list_sales_orders(self) -> list[SalesOrder]:
        with self._store.transaction("list_sales_orders") as uow:
            return sales_order_repository(uow).all()

    def get_sales_order(self, order_id: str) -> SalesOrder:
        with self._store.transaction("get_sales_order") as uow:
            return sales_order_repository(uow).get(order_id)

    def create_sales_order(self, customer_name: str, items: Iterable[Any]) -> SalesOrder:
        """Create a Quotation and reserve stock for every line."""
        customer_name = require_text(customer_name, field="customer_name")
        lines = parse_line_requests(items)

        with self._store.transaction("create_sales_order") as uow:
            products = product_repository(uow)
            so_lines = []
            for line in lines:
                product = products.get(line.product_id)
                so_lines.append(
                    SOLine(
                        product_id=product.id,
                        product_name=product.name,
                        quantity=line.quantity,
                        price=product.price,
                    )
                )
            order_lines = tuple(so_lines)

            plan = ChangePlan("create_sales_order")
            plan_stock_movements(
                plan, products, [(line.product_id, -line.quantity) for line in lines],
            )
            order = SalesOrder(
                id=SequenceService(uow).next_id(SequenceService.SALES_ORDER),
                customer_name=customer_name,
                date=self._clock.today(),
                items=order_lines,
                total_amount=SalesOrder.total_of(order_lines),
            )
            plan.stage("add sales order", lambda: sales_order_repository(uow).add(order, prepend=True))
            try:
                plan.commit()
            except Exception:
                logger.warning(
                    "sales_order_rejected",
                    extra={"customer_name": customer_name, "line_count": len(lines)},
                )
                raise

        logger.info(
            "sales_order_created",
            extra={
                "entity_id": order.id,
                "customer_name": customer_name,
                "total_amount": str(order.total_amount),
            },
        )
        return order

    def advance_sales_status(self, order_id: str) -> SalesStatus:
        """Move the order one step forward; a Completed order is left as is."""
        with self._store.transaction("advance_sales_status") as uow:
            orders = sales_order_repository(uow)
            order = orders.get(order_id)
            if SALES_ORDER_WORKFLOW.is_terminal(order.status.value):
                logger.info(
                    "sales_order_already_completed",
                    extra={"entity_id": order_id},
                )
                return order.status

            transition = apply_action(
                SALES_ORDER_WORKFLOW, order.status.value, "advance",
                entity_type="SalesOrder", entity_id=order.id,
            )
            new_status = SalesStatus(transition.to_state)
            orders.replace(replace(order, status=new_status))

        logger.info(
            "sales_order_advanced",
            extra={
                "entity_id": order_id,
                "from_status": order.status.value,
                "to_status": new_status.value,
            },
        )
        return new_status

    def receive_payment(self, order_id: str) -> SalesOrder:
        """Mark an invoiced order Paid and post the Income entry."""
        with self._store.transaction("receive_payment") as uow:
            orders = sales_order_repository(uow)
            order = orders.get(order_id)

            if not order.is_invoiced:
                logger.warning(
                    "payment_rejected_not_invoiced",
                    extra={"entity_id": order_id, "status": order.status.value},
                )
                raise InvalidStateTransitionError(
                    entity_type="SalesOrder",
                    entity_id=order.id,
                    current_state=order.status.value,
                    action="receive_payment",
                )
            if PAYMENT_WORKFLOW.is_terminal(order.payment_status.value):
                logger.warning("payment_rejected_already_paid", extra={"entity_id": order_id})
                raise AlreadyProcessedError("SalesOrder", order.id, order.payment_status.value)

            transition = apply_action(
                PAYMENT_WORKFLOW, order.payment_status.value, "receive_payment",
                entity_type="SalesOrder", entity_id=order.id,
            )
            paid = replace(order, payment_status=PaymentStatus(transition.to_state))
            orders.replace(paid)
            entry = LedgerWriter(uow, self._clock).post(
                transaction_type=TransactionType.INCOME,
                description=f"Payment Received - {order.customer_name}",
                amount=order.total_amount,
                category=self._config.payment_category,
                reference_id=order.id,
            )

        logger.info(
            "payment_received",
            extra={
                "entity_id": order_id,
                "transaction_id": entry.id,
                "amount": str(order.total_amount),
            },
        )
        return paid
