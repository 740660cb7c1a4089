"""Dashboard read models."""

from dataclasses import dataclass, field
from decimal import Decimal


@dataclass(frozen=True)
class DashboardSummary:
    """Headline figures for the dashboard.  Derived; never persisted."""
    total_stock_value: Decimal
    total_revenue: Decimal
    sales_order_count: int
    low_stock_count: int
    products_per_category: dict[str, int] = field(default_factory=dict)
    stock_value_per_category: dict[str, Decimal] = field(default_factory=dict)
    currency: str = "USD"
