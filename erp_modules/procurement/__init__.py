"""
Procurement Module (``erp_modules.procurement``).

Responsibility
--------------
Purchase request approval and conversion into purchase orders, and
receipt of completed orders into stock.

Architecture
------------
Layer: **Modules**.  Depends on ``inventory`` (pricing snapshots, stock
receipt) and ``partners`` (supplier lookup).

Invariants
----------
- A PO's ``total_cost`` equals the ``total_cost`` of the PR it came from.
- Requests move Pending -> Approved -> Converted To PO, or Pending ->
  Rejected; Rejected and Converted To PO are terminal.
"""

from erp_modules.procurement.config import ProcurementConfig
from erp_modules.procurement.models import (
    POStatus,
    PRLine,
    PRStatus,
    PurchaseOrder,
    PurchaseRequest,
)
from erp_modules.procurement.service import (
    ProcurementService,
    order_repository,
    request_repository,
)
from erp_modules.procurement.workflows import (
    PURCHASE_ORDER_WORKFLOW,
    REQUISITION_WORKFLOW,
)

__all__ = [
    "POStatus",
    "PRLine",
    "PRStatus",
    "PURCHASE_ORDER_WORKFLOW",
    "ProcurementConfig",
    "ProcurementService",
    "PurchaseOrder",
    "PurchaseRequest",
    "REQUISITION_WORKFLOW",
    "order_repository",
    "request_repository",
]
