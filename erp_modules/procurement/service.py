"""
Procurement Module Service (``erp_modules.procurement.service``).

Responsibility
--------------
Turns purchasing needs into purchase requests, moves them through
approval, converts approved requests into purchase orders, and receives
completed orders into stock.

Architecture
------------
Layer: **Modules**.  Reads products (to snapshot name and cost) and
partners (to validate suppliers); writes requests, orders and, on
receipt, product stock.  Every multi-record change is built as a
``ChangePlan`` so checks finish before anything is staged.

Invariants
----------
- ``total_cost == sum(quantity x cost)`` at creation; the PO copies it.
- Status changes follow ``REQUISITION_WORKFLOW`` and
  ``PURCHASE_ORDER_WORKFLOW``; anything not in the tables is rejected.
- ``generate_po`` writes the request and the order together or not at all.

Failure Modes
-------------
- ``NotFoundError``: unknown request, order, product or (when configured)
  supplier.
- ``InvalidStateTransitionError``: action not allowed from current status.
- ``ValidationError``: empty requester, supplier or line items.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any, Iterable

from erp_kernel.domain.clock import Clock, SystemClock
from erp_kernel.domain.plan import ChangePlan
from erp_kernel.domain.values import require_text
from erp_kernel.domain.workflow import apply_action
from erp_kernel.exceptions import InvalidStateTransitionError, NotFoundError
from erp_kernel.logging_config import get_logger
from erp_kernel.services.sequence_service import SequenceService
from erp_kernel.store.base import Collections, CollectionStore
from erp_kernel.store.repository import Repository
from erp_kernel.store.unit_of_work import UnitOfWork
from erp_modules.inventory.helpers import parse_line_requests, plan_stock_movements
from erp_modules.inventory.service import product_repository
from erp_modules.partners.models import PartnerType
from erp_modules.partners.service import partner_repository
from erp_modules.procurement.config import ProcurementConfig
from erp_modules.procurement.models import (
    POStatus,
    PRLine,
    PRStatus,
    PurchaseOrder,
    PurchaseRequest,
)
from erp_modules.procurement.workflows import (
    APPROVAL_WAIVED,
    PURCHASE_ORDER_WORKFLOW,
    REQUISITION_WORKFLOW,
)

logger = get_logger("modules.procurement.service")


def request_repository(uow: UnitOfWork) -> Repository[PurchaseRequest]:
    return uow.repository(Collections.PURCHASE_REQUESTS, PurchaseRequest, "PurchaseRequest")


def order_repository(uow: UnitOfWork) -> Repository[PurchaseOrder]:
    return uow.repository(Collections.PURCHASE_ORDERS, PurchaseOrder, "PurchaseOrder")


class ProcurementService:
    """
    Purchase request and purchase order operations.

    Contract
    --------
    Lists are returned most-recent-first (new documents are prepended).
    """

    def __init__(
        self,
        store: CollectionStore,
        clock: Clock | None = None,
        config: ProcurementConfig | None = None,
    ):
        self._store = store
        self._clock = clock or SystemClock()
        self._config = config or ProcurementConfig()

    # -- purchase requests ---------------------------------------------------

    def list_prs(self) -> list[PurchaseRequest]:
        with self._store.transaction("list_prs") as uow:
            return request_repository(uow).all()

    def get_pr(self, pr_id: str) -> PurchaseRequest:
        with self._store.transaction("get_pr") as uow:
            return request_repository(uow).get(pr_id)

    def create_pr(self, requester: str, items: Iterable[Any]) -> PurchaseRequest:
        """Create a Pending request, snapshotting each product's name and cost."""
        requester = require_text(requester, field="requester")
        lines = parse_line_requests(items)

        with self._store.transaction("create_pr") as uow:
            products = product_repository(uow)
            enriched = []
            for line in lines:
                product = products.get(line.product_id)
                enriched.append(
                    PRLine(
                        product_id=product.id,
                        product_name=product.name,
                        quantity=line.quantity,
                        cost=product.cost,
                    )
                )
            pr_lines = tuple(enriched)

            pr = PurchaseRequest(
                id=SequenceService(uow).next_id(SequenceService.PURCHASE_REQUEST),
                requester=requester,
                date=self._clock.today(),
                items=pr_lines,
                total_cost=PurchaseRequest.total_of(pr_lines),
                status=PRStatus.PENDING,
            )
            request_repository(uow).add(pr, prepend=True)

        logger.info(
            "purchase_request_created",
            extra={
                "entity_id": pr.id,
                "line_count": len(pr_lines),
                "total_cost": str(pr.total_cost),
            },
        )
        return pr

    def approve_pr(self, pr_id: str) -> PurchaseRequest:
        """Approve a Pending request.  Approving an Approved request is a no-op."""
        with self._store.transaction("approve_pr") as uow:
            requests = request_repository(uow)
            pr = requests.get(pr_id)
            if pr.status is PRStatus.APPROVED:
                logger.info("purchase_request_already_approved", extra={"entity_id": pr_id})
                return pr
            updated = self._transition(requests, pr, "approve")

        logger.info("purchase_request_approved", extra={"entity_id": pr_id})
        return updated

    def reject_pr(self, pr_id: str) -> PurchaseRequest:
        with self._store.transaction("reject_pr") as uow:
            requests = request_repository(uow)
            updated = self._transition(requests, requests.get(pr_id), "reject")

        logger.info("purchase_request_rejected", extra={"entity_id": pr_id})
        return updated

    def generate_po(self, pr_id: str, supplier: str) -> PurchaseOrder:
        """Convert a request into a purchase order sent to ``supplier``."""
        supplier = require_text(supplier, field="supplier")

        with self._store.transaction("generate_po") as uow:
            requests = request_repository(uow)
            orders = order_repository(uow)
            pr = requests.get(pr_id)

            transition = apply_action(
                REQUISITION_WORKFLOW,
                pr.status.value,
                "convert_to_po",
                entity_type="PurchaseRequest",
                entity_id=pr.id,
            )
            if transition.guard is APPROVAL_WAIVED and self._config.require_approved_for_po:
                logger.warning(
                    "purchase_order_rejected_unapproved",
                    extra={"entity_id": pr.id, "status": pr.status.value},
                )
                raise InvalidStateTransitionError(
                    entity_type="PurchaseRequest",
                    entity_id=pr.id,
                    current_state=pr.status.value,
                    action="convert_to_po",
                )

            plan = ChangePlan("generate_po")
            if self._config.require_known_supplier:
                plan.check("supplier is a known partner", lambda: self._require_supplier(uow, supplier))

            po = PurchaseOrder(
                id=SequenceService(uow).next_id(SequenceService.PURCHASE_ORDER),
                pr_id=pr.id,
                supplier=supplier,
                date=self._clock.today(),
                total_cost=pr.total_cost,
                status=POStatus(self._config.initial_po_status),
            )
            plan.stage("add purchase order", lambda: orders.add(po, prepend=True))
            plan.stage(
                "mark request converted",
                lambda: requests.replace(
                    replace(pr, status=PRStatus(transition.to_state), po_id=po.id)
                ),
            )
            plan.commit()

        logger.info(
            "purchase_order_generated",
            extra={
                "entity_id": po.id,
                "pr_id": pr.id,
                "supplier": supplier,
                "total_cost": str(po.total_cost),
            },
        )
        return po

    # -- purchase orders -----------------------------------------------------

    def list_pos(self) -> list[PurchaseOrder]:
        with self._store.transaction("list_pos") as uow:
            return order_repository(uow).all()

    def send_po(self, po_id: str) -> PurchaseOrder:
        """Dispatch a Pending order (only used when orders start Pending)."""
        with self._store.transaction("send_po") as uow:
            orders = order_repository(uow)
            po = orders.get(po_id)
            transition = apply_action(
                PURCHASE_ORDER_WORKFLOW, po.status.value, "send",
                entity_type="PurchaseOrder", entity_id=po.id,
            )
            updated = replace(po, status=POStatus(transition.to_state))
            orders.replace(updated)

        logger.info("purchase_order_sent", extra={"entity_id": po_id})
        return updated

    def receive_po(self, po_id: str) -> PurchaseOrder:
        """Complete a Sent order and credit every requested line to stock."""
        with self._store.transaction("receive_po") as uow:
            orders = order_repository(uow)
            po = orders.get(po_id)
            transition = apply_action(
                PURCHASE_ORDER_WORKFLOW, po.status.value, "receive",
                entity_type="PurchaseOrder", entity_id=po.id,
            )
            pr = request_repository(uow).get(po.pr_id)

            plan = ChangePlan("receive_po")
            plan_stock_movements(
                plan,
                product_repository(uow),
                [(line.product_id, line.quantity) for line in pr.items],
            )
            updated = replace(po, status=POStatus(transition.to_state))
            plan.stage("mark order completed", lambda: orders.replace(updated))
            plan.commit()

        logger.info(
            "purchase_order_received",
            extra={"entity_id": po_id, "line_count": len(pr.items)},
        )
        return updated

    # -- internals -----------------------------------------------------------

    @staticmethod
    def _transition(
        requests: Repository[PurchaseRequest],
        pr: PurchaseRequest,
        action: str,
    ) -> PurchaseRequest:
        try:
            transition = apply_action(
                REQUISITION_WORKFLOW, pr.status.value, action,
                entity_type="PurchaseRequest", entity_id=pr.id,
            )
        except InvalidStateTransitionError:
            logger.warning(
                "purchase_request_transition_rejected",
                extra={"entity_id": pr.id, "status": pr.status.value, "action": action},
            )
            raise
        updated = replace(pr, status=PRStatus(transition.to_state))
        requests.replace(updated)
        return updated

    @staticmethod
    def _require_supplier(uow: UnitOfWork, supplier: str) -> None:
        suppliers = partner_repository(uow).filter(
            lambda p: p.partner_type is PartnerType.SUPPLIER and p.name == supplier
        )
        if not suppliers:
            raise NotFoundError("Supplier", supplier)
