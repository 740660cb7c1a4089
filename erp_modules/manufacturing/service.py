"""
Manufacturing Module Service (``erp_modules.manufacturing.service``).

Responsibility
--------------
Bills of materials, production orders, and production completion.

Architecture
------------
Layer: **Modules**.  Completion is built as one ``ChangePlan``:

1. Validation phase -- the finished good exists; every component's raw
   material exists and has ``stock >= component.quantity x order.quantity``.
2. Execution phase -- decrement every raw material, increment the finished
   good by ``order.quantity``, mark the order Completed.

No stock moves unless every check in phase 1 passed.

Invariants
----------
- Completion is all-or-nothing across every component line.
- Planned -> Completed is one-way; a second completion is rejected.

Failure Modes
-------------
- ``NotFoundError``: unknown order, BOM (including a BOM deleted after the
  order was planned), raw material or finished good.
- ``AlreadyProcessedError``: order already Completed.
- ``InsufficientStockError``: naming material, required and available.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any, Iterable

from erp_kernel.domain.clock import Clock, SystemClock
from erp_kernel.domain.plan import ChangePlan
from erp_kernel.domain.values import require_text, to_quantity
from erp_kernel.domain.workflow import apply_action
from erp_kernel.exceptions import AlreadyProcessedError
from erp_kernel.logging_config import get_logger
from erp_kernel.services.sequence_service import SequenceService
from erp_kernel.store.base import Collections, CollectionStore
from erp_kernel.store.repository import Repository
from erp_kernel.store.unit_of_work import UnitOfWork
from erp_modules.inventory.helpers import parse_line_requests, plan_stock_movements
from erp_modules.inventory.service import product_repository
from erp_modules.manufacturing.models import (
    BOM,
    BOMComponent,
    ProductionOrder,
    ProductionStatus,
)
from erp_modules.manufacturing.workflows import PRODUCTION_ORDER_WORKFLOW

logger = get_logger("modules.manufacturing.service")


def bom_repository(uow: UnitOfWork) -> Repository[BOM]:
    return uow.repository(Collections.BOMS, BOM, "BOM")


def production_order_repository(uow: UnitOfWork) -> Repository[ProductionOrder]:
    return uow.repository(Collections.PRODUCTION_ORDERS, ProductionOrder, "ProductionOrder")


class ManufacturingService:
    """BOM and production order operations."""

    def __init__(self, store: CollectionStore, clock: Clock | None = None):
        self._store = store
        self._clock = clock or SystemClock()

    # -- bills of materials --------------------------------------------------

    def list_boms(self) -> list[BOM]:
        with self._store.transaction("list_boms") as uow:
            return bom_repository(uow).all()

    def create_bom(self, *, name: str, product_id: str, components: Iterable[Any]) -> BOM:
        name = require_text(name, field="name")
        product_id = require_text(product_id, field="product_id")
        parsed = parse_line_requests(components, field="components")

        with self._store.transaction("create_bom") as uow:
            products = product_repository(uow)
            products.get(product_id)
            for line in parsed:
                products.get(line.product_id)

            bom = BOM(
                id=SequenceService(uow).next_id(SequenceService.BOM),
                name=name,
                product_id=product_id,
                components=tuple(BOMComponent(line.product_id, line.quantity) for line in parsed),
            )
            bom_repository(uow).add(bom)

        logger.info(
            "bom_created",
            extra={
                "entity_id": bom.id,
                "product_id": product_id,
                "component_count": len(bom.components),
            },
        )
        return bom

    # -- production orders ---------------------------------------------------

    def list_production_orders(self) -> list[ProductionOrder]:
        with self._store.transaction("list_production_orders") as uow:
            return production_order_repository(uow).all()

    def create_production_order(self, bom_id: str, quantity: int) -> ProductionOrder:
        quantity = to_quantity(quantity)

        with self._store.transaction("create_production_order") as uow:
            bom_repository(uow).get(bom_id)
            order = ProductionOrder(
                id=SequenceService(uow).next_id(SequenceService.PRODUCTION_ORDER),
                bom_id=bom_id,
                quantity=quantity,
                date=self._clock.today(),
            )
            production_order_repository(uow).add(order, prepend=True)

        logger.info(
            "production_order_created",
            extra={"entity_id": order.id, "bom_id": bom_id, "quantity": quantity},
        )
        return order

    def complete_production(self, order_id: str) -> ProductionOrder:
        """Consume raw materials and produce the finished good, atomically."""
        with self._store.transaction("complete_production") as uow:
            orders = production_order_repository(uow)
            order = orders.get(order_id)
            if PRODUCTION_ORDER_WORKFLOW.is_terminal(order.status.value):
                logger.warning("production_already_completed", extra={"entity_id": order_id})
                raise AlreadyProcessedError("ProductionOrder", order.id, order.status.value)

            bom = bom_repository(uow).get(order.bom_id)
            transition = apply_action(
                PRODUCTION_ORDER_WORKFLOW, order.status.value, "complete",
                entity_type="ProductionOrder", entity_id=order.id,
            )
            products = product_repository(uow)

            plan = ChangePlan("complete_production")
            plan.check("finished good exists", lambda: products.get(bom.product_id))
            consumed = plan_stock_movements(
                plan, products, [(pid, -qty) for pid, qty in bom.requirements(order.quantity)],
            )
            plan_stock_movements(plan, products, [(bom.product_id, order.quantity)])
            completed = replace(order, status=ProductionStatus(transition.to_state))
            plan.stage("mark order completed", lambda: orders.replace(completed))

            try:
                plan.commit()
            except Exception:
                logger.warning(
                    "production_completion_rejected",
                    extra={"entity_id": order_id, "bom_id": bom.id},
                )
                raise

        logger.info(
            "production_completed",
            extra={
                "entity_id": order_id,
                "bom_id": bom.id,
                "finished_good": bom.product_id,
                "quantity": order.quantity,
                "materials": {m.product_id: -m.delta for m in consumed},
            },
        )
        return completed
