"""
Inventory Domain Models (``erp_modules.inventory.models``).

Responsibility
--------------
Frozen value objects for the Product Ledger: the catalog entry with its
on-hand stock, plus the stock movement record used to plan changes.

Architecture
------------
Layer: **Modules** -- pure domain data structures, no I/O.  Products are
persisted in the ``products`` collection through the kernel store codec;
``product_type`` keeps the on-disk key ``type``.

Invariants
----------
- ``Product.stock >= 0`` -- checked at construction, so a decoded or
  replaced product can never carry negative stock.
- ``price`` and ``cost`` are ``Decimal`` -- never ``float``.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum

from erp_kernel.logging_config import get_logger

logger = get_logger("modules.inventory.models")


class ProductStatus(Enum):
    """Catalog status of a product."""
    ACTIVE = "Active"
    INACTIVE = "Inactive"


class ProductType(Enum):
    """Production stage (informational)."""
    RAW_MATERIAL = "Raw Material"
    FINISHED_GOOD = "Finished Good"


@dataclass(frozen=True)
class Product:
    """A catalog item and its on-hand quantity."""
    id: str
    sku: str
    name: str
    category: str = ""
    price: Decimal = Decimal("0.00")
    cost: Decimal = Decimal("0.00")
    stock: int = 0
    status: ProductStatus = ProductStatus.ACTIVE
    product_type: ProductType | None = field(
        default=None, metadata={"record_key": "type"},
    )

    def __post_init__(self):
        if self.stock < 0:
            raise ValueError(f"Product {self.id} stock cannot be negative: {self.stock}")

    @property
    def stock_value(self) -> Decimal:
        return self.cost * self.stock


@dataclass(frozen=True)
class StockMovement:
    """Net quantity change planned for one product within one operation."""
    product_id: str
    delta: int


@dataclass(frozen=True)
class LineRequest:
    """A caller-supplied (product, quantity) pair before enrichment."""
    product_id: str
    quantity: int
