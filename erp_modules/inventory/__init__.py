"""
Inventory Module (``erp_modules.inventory``).

Responsibility
--------------
The Product Ledger: owns ``Product`` records (catalog plus on-hand stock)
and the stock-movement planner every other workflow uses to change stock.

Architecture
------------
Layer: **Modules**.  Imports from ``erp_kernel`` only.  Procurement, sales
and manufacturing reuse ``plan_stock_movements`` so the non-negative stock
rule is enforced in exactly one place.

Invariants
----------
- ``stock >= 0`` for every product at all times.
- SKUs are unique.
"""

from erp_modules.inventory.config import InventoryConfig
from erp_modules.inventory.helpers import net_movements, parse_line_requests, plan_stock_movements
from erp_modules.inventory.models import (
    LineRequest,
    Product,
    ProductStatus,
    ProductType,
    StockMovement,
)
from erp_modules.inventory.service import InventoryService, product_repository

__all__ = [
    "InventoryConfig",
    "InventoryService",
    "LineRequest",
    "Product",
    "ProductStatus",
    "ProductType",
    "StockMovement",
    "net_movements",
    "parse_line_requests",
    "plan_stock_movements",
    "product_repository",
]
