"""
Sales Configuration Schema.

Defines the structure and sensible defaults for sales settings.
"""

from dataclasses import dataclass

from erp_kernel.logging_config import get_logger

logger = get_logger("modules.sales.config")


@dataclass(frozen=True)
class SalesConfig:
    """Configuration schema for the sales module."""

    # Ledger category for customer payments
    payment_category: str = "Sales"

    def __post_init__(self):
        if not self.payment_category or not self.payment_category.strip():
            raise ValueError("payment_category cannot be blank")
