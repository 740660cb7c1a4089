"""
Reporting Module Service (``erp_modules.reporting.service``).

Read-only dashboard projection over products and sales orders.  Both
collections are read in one unit of work, so the figures describe a single
consistent snapshot.
"""

from __future__ import annotations

from decimal import Decimal

from erp_kernel.domain.values import ZERO
from erp_kernel.logging_config import get_logger
from erp_kernel.store.base import CollectionStore
from erp_modules.inventory.config import InventoryConfig
from erp_modules.inventory.service import product_repository
from erp_modules.reporting.models import DashboardSummary
from erp_modules.sales.service import sales_order_repository

logger = get_logger("modules.reporting.service")


class ReportingService:
    def __init__(self, store: CollectionStore, inventory_config: InventoryConfig | None = None):
        self._store = store
        self._inventory_config = inventory_config or InventoryConfig()

    def dashboard_summary(self) -> DashboardSummary:
        with self._store.transaction("dashboard_summary") as uow:
            products = product_repository(uow).all()
            orders = sales_order_repository(uow).all()

        counts: dict[str, int] = {}
        values: dict[str, Decimal] = {}
        for product in products:
            counts[product.category] = counts.get(product.category, 0) + 1
            values[product.category] = values.get(product.category, ZERO) + product.stock_value

        summary = DashboardSummary(
            total_stock_value=sum((p.stock_value for p in products), ZERO),
            total_revenue=sum((o.total_amount for o in orders), ZERO),
            sales_order_count=len(orders),
            low_stock_count=sum(
                1 for p in products if p.stock < self._inventory_config.low_stock_threshold
            ),
            products_per_category=counts,
            stock_value_per_category=values,
            currency=self._inventory_config.valuation_currency,
        )
        logger.debug(
            "dashboard_summary_computed",
            extra={
                "product_count": len(products),
                "sales_order_count": summary.sales_order_count,
                "currency": summary.currency,
            },
        )
        return summary
