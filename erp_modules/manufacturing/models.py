"""
Manufacturing Domain Models (``erp_modules.manufacturing.models``).

A ``BOM`` is the recipe mapping one unit of a finished good to the raw
materials it consumes; a ``ProductionOrder`` authorises building
``quantity`` units from one BOM.
"""

from dataclasses import dataclass
from datetime import date
from enum import Enum


class ProductionStatus(Enum):
    PLANNED = "Planned"
    COMPLETED = "Completed"


@dataclass(frozen=True)
class BOMComponent:
    """Raw material and the quantity needed per unit of output."""
    product_id: str
    quantity: int


@dataclass(frozen=True)
class BOM:
    id: str
    name: str
    product_id: str
    components: tuple[BOMComponent, ...]

    def requirements(self, units: int) -> list[tuple[str, int]]:
        """(raw material, quantity) needed to build ``units`` finished goods."""
        return [(c.product_id, c.quantity * units) for c in self.components]


@dataclass(frozen=True)
class ProductionOrder:
    id: str
    bom_id: str
    quantity: int
    date: date
    status: ProductionStatus = ProductionStatus.PLANNED
