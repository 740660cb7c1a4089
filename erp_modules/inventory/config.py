"""
Inventory Configuration Schema.

Defines the structure and sensible defaults for Product Ledger settings.
Actual values are loaded from ``settings.yaml`` at runtime.
"""

from dataclasses import dataclass

from erp_kernel.logging_config import get_logger

logger = get_logger("modules.inventory.config")


@dataclass(frozen=True)
class InventoryConfig:
    """
    Configuration schema for the inventory module.

        config = InventoryConfig(low_stock_threshold=25)
    """

    # Products with stock strictly below this count as low stock
    low_stock_threshold: int = 10
    valuation_currency: str = "USD"

    def __post_init__(self):
        if isinstance(self.low_stock_threshold, bool) or not isinstance(self.low_stock_threshold, int):
            raise ValueError("low_stock_threshold must be an integer")
        if self.low_stock_threshold < 0:
            raise ValueError("low_stock_threshold cannot be negative")
        if len(self.valuation_currency) != 3 or not self.valuation_currency.isalpha():
            raise ValueError(f"valuation_currency must be an ISO 4217 code, got '{self.valuation_currency}'")
        logger.debug(
            "inventory_config_created",
            extra={
                "low_stock_threshold": self.low_stock_threshold,
                "valuation_currency": self.valuation_currency,
            },
        )
