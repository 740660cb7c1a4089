"""
Inventory Module Service (``erp_modules.inventory.service``).

Responsibility
--------------
The Product Ledger: catalog entry, catalog updates, and manual stock
adjustments, plus read-only projections (search, low stock, valuation).

Architecture
------------
Layer: **Modules** -- stateful orchestration wrapper over the kernel store.
Each public method owns its unit-of-work boundary via
``store.transaction()``; a raised error leaves every collection unchanged.

Invariants
----------
- ``stock >= 0`` for every product after every operation.
- ``sku`` is unique across the catalog.
- ``sku`` and ``stock`` cannot be changed through ``update_product``; stock
  moves only via ``adjust_stock`` or workflow side effects.

Failure Modes
-------------
- ``ValidationError`` / ``DuplicateSkuError`` on bad catalog input.
- ``NotFoundError`` for an unknown product id.
- ``InsufficientStockError`` when an adjustment would go below zero.

Usage::

    service = InventoryService(store, clock)
    mouse = service.add_product(sku="MOU-002", name="Wireless Mouse",
                                price="50", cost="20", stock=100)
    service.adjust_stock(mouse.id, -5)
"""

from __future__ import annotations

from dataclasses import replace
from decimal import Decimal
from typing import Any

from erp_kernel.domain.clock import Clock, SystemClock
from erp_kernel.domain.plan import ChangePlan
from erp_kernel.domain.values import ZERO, require_text, to_amount, to_quantity
from erp_kernel.exceptions import DuplicateSkuError, ValidationError
from erp_kernel.logging_config import get_logger
from erp_kernel.services.sequence_service import SequenceService
from erp_kernel.store.base import Collections, CollectionStore
from erp_kernel.store.repository import Repository
from erp_kernel.store.unit_of_work import UnitOfWork
from erp_modules.inventory.config import InventoryConfig
from erp_modules.inventory.helpers import plan_stock_movements
from erp_modules.inventory.models import Product, ProductStatus, ProductType

logger = get_logger("modules.inventory.service")

UPDATABLE_FIELDS = frozenset({"name", "category", "price", "cost", "status", "product_type"})
IMMUTABLE_FIELDS = frozenset({"id", "sku", "stock"})


def product_repository(uow: UnitOfWork) -> Repository[Product]:
    return uow.repository(Collections.PRODUCTS, Product, "Product")


def _coerce_enum(enum_cls, value: Any, field: str):
    if value is None or isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(m.value for m in enum_cls)
        raise ValidationError(field, f"must be one of {allowed}, got {value!r}") from None


class InventoryService:
    """
    Product Ledger operations.

    Contract
    --------
    Every mutating method runs inside one unit of work and returns the
    stored ``Product``.  Read methods return decoded snapshots.
    """

    def __init__(
        self,
        store: CollectionStore,
        clock: Clock | None = None,
        config: InventoryConfig | None = None,
    ):
        self._store = store
        self._clock = clock or SystemClock()
        self._config = config or InventoryConfig()

    # -- reads ---------------------------------------------------------------

    def list_products(self, search: str | None = None) -> list[Product]:
        """All products; ``search`` filters by name or SKU, case-insensitively."""
        with self._store.transaction("list_products") as uow:
            products = product_repository(uow).all()
        if not search:
            return products
        needle = search.strip().lower()
        return [
            p for p in products
            if needle in p.name.lower() or needle in p.sku.lower()
        ]

    def get_product(self, product_id: str) -> Product:
        with self._store.transaction("get_product") as uow:
            return product_repository(uow).get(product_id)

    def low_stock_products(self, threshold: int | None = None) -> list[Product]:
        limit = self._config.low_stock_threshold if threshold is None else threshold
        return [p for p in self.list_products() if p.stock < limit]

    def stock_valuation(self) -> Decimal:
        """Sum of ``stock x cost`` across the catalog."""
        return sum((p.stock_value for p in self.list_products()), ZERO)

    # -- writes --------------------------------------------------------------

    def add_product(
        self,
        *,
        sku: str,
        name: str,
        category: str = "",
        price: Any = 0,
        cost: Any = 0,
        stock: int = 0,
        status: ProductStatus | str = ProductStatus.ACTIVE,
        product_type: ProductType | str | None = None,
    ) -> Product:
        name = require_text(name, field="name")
        sku = require_text(sku, field="sku")
        price = to_amount(price, field="price")
        cost = to_amount(cost, field="cost")
        stock = to_quantity(stock, field="stock", allow_zero=True)
        status = _coerce_enum(ProductStatus, status, "status")
        product_type = _coerce_enum(ProductType, product_type, "product_type")

        with self._store.transaction("add_product") as uow:
            products = product_repository(uow)
            if products.filter(lambda p: p.sku == sku):
                logger.warning("product_rejected_duplicate_sku", extra={"sku": sku})
                raise DuplicateSkuError(sku)

            product = Product(
                id=SequenceService(uow).next_id(SequenceService.PRODUCT),
                sku=sku,
                name=name,
                category=(category or "").strip(),
                price=price,
                cost=cost,
                stock=stock,
                status=status,
                product_type=product_type,
            )
            products.add(product)

        logger.info(
            "product_added",
            extra={"entity_id": product.id, "sku": sku, "stock": stock},
        )
        return product

    def update_product(self, product_id: str, **updates: Any) -> Product:
        """Merge ``updates`` into a product.  ``sku`` and ``stock`` are rejected."""
        for key in updates:
            if key in IMMUTABLE_FIELDS:
                logger.warning(
                    "product_update_rejected",
                    extra={"entity_id": product_id, "field": key},
                )
                raise ValidationError(key, "cannot be changed through update_product")
            if key not in UPDATABLE_FIELDS:
                raise ValidationError(key, "unknown product field")

        changes: dict[str, Any] = {}
        if "name" in updates:
            changes["name"] = require_text(updates["name"], field="name")
        if "category" in updates:
            changes["category"] = (updates["category"] or "").strip()
        if "price" in updates:
            changes["price"] = to_amount(updates["price"], field="price")
        if "cost" in updates:
            changes["cost"] = to_amount(updates["cost"], field="cost")
        if "status" in updates:
            changes["status"] = _coerce_enum(ProductStatus, updates["status"], "status")
        if "product_type" in updates:
            changes["product_type"] = _coerce_enum(ProductType, updates["product_type"], "product_type")

        with self._store.transaction("update_product") as uow:
            products = product_repository(uow)
            updated = replace(products.get(product_id), **changes)
            products.replace(updated)

        logger.info(
            "product_updated",
            extra={"entity_id": product_id, "fields": sorted(changes)},
        )
        return updated

    def adjust_stock(self, product_id: str, delta: int) -> Product:
        """Apply a signed manual correction to on-hand stock."""
        if isinstance(delta, bool) or not isinstance(delta, int):
            raise ValidationError("delta", f"expected an integer, got {delta!r}")

        with self._store.transaction("adjust_stock") as uow:
            products = product_repository(uow)
            plan = ChangePlan("adjust_stock")
            plan_stock_movements(plan, products, [(product_id, delta)])
            try:
                plan.commit()
            except Exception:
                logger.warning(
                    "stock_adjustment_rejected",
                    extra={"entity_id": product_id, "delta": delta},
                )
                raise
            product = products.get(product_id)

        logger.info(
            "stock_adjusted",
            extra={"entity_id": product_id, "delta": delta, "new_stock": product.stock},
        )
        return product
