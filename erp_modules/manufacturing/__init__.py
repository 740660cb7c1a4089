"""
Manufacturing Module (``erp_modules.manufacturing``).

Responsibility
--------------
Bills of materials and production orders.  Completing an order consumes
every raw material and produces the finished good in one all-or-nothing
plan.

Architecture
------------
Layer: **Modules**.  Depends on ``inventory`` for stock movements.
"""

from erp_modules.manufacturing.models import (
    BOM,
    BOMComponent,
    ProductionOrder,
    ProductionStatus,
)
from erp_modules.manufacturing.service import (
    ManufacturingService,
    bom_repository,
    production_order_repository,
)
from erp_modules.manufacturing.workflows import PRODUCTION_ORDER_WORKFLOW

__all__ = [
    "BOM",
    "BOMComponent",
    "ManufacturingService",
    "PRODUCTION_ORDER_WORKFLOW",
    "ProductionOrder",
    "ProductionStatus",
    "bom_repository",
    "production_order_repository",
]
