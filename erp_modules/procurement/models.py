"""
Procurement Domain Models (``erp_modules.procurement.models``).

Responsibility
--------------
Purchase requests (internal, subject to approval) and the purchase orders
generated from them.

Invariants
----------
- ``PurchaseRequest.total_cost`` equals the sum of ``quantity x cost`` over
  its lines.  It is computed once at creation and never recomputed, even if
  product costs change later.
- A ``PurchaseOrder`` copies ``total_cost`` from its source request.
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum

from erp_kernel.domain.values import ZERO, line_total
from erp_kernel.logging_config import get_logger

logger = get_logger("modules.procurement.models")


class PRStatus(Enum):
    """Purchase request lifecycle states."""
    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"
    CONVERTED_TO_PO = "Converted To PO"


class POStatus(Enum):
    """Purchase order lifecycle states."""
    PENDING = "Pending"
    SENT = "Sent"
    COMPLETED = "Completed"


@dataclass(frozen=True)
class PRLine:
    """Requested product with name and unit cost snapshotted at creation."""
    product_id: str
    product_name: str
    quantity: int
    cost: Decimal

    @property
    def line_cost(self) -> Decimal:
        return line_total(self.quantity, self.cost)


@dataclass(frozen=True)
class PurchaseRequest:
    """Internal request to buy goods."""
    id: str
    requester: str
    date: date
    items: tuple[PRLine, ...]
    total_cost: Decimal
    status: PRStatus = PRStatus.PENDING
    po_id: str | None = None

    @staticmethod
    def total_of(items: tuple[PRLine, ...]) -> Decimal:
        return sum((line.line_cost for line in items), ZERO)


@dataclass(frozen=True)
class PurchaseOrder:
    """Order sent to a supplier, generated from an approved request."""
    id: str
    pr_id: str
    supplier: str
    date: date
    total_cost: Decimal
    status: POStatus = POStatus.SENT
