"""
Settings Schema (``erp_config.schema``).

Responsibility
--------------
Frozen dataclasses describing every runtime setting.  Module tunables
reuse the modules' own config dataclasses, so validation lives next to
the code that consumes the value.

Invariants enforced
-------------------
* Every settings object is frozen.
* Invalid values raise ``ValueError`` at construction, i.e. at load time.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from erp_modules.inventory.config import InventoryConfig
from erp_modules.payroll.config import PayrollConfig
from erp_modules.procurement.config import ProcurementConfig
from erp_modules.sales.config import SalesConfig

VALID_BACKENDS = {"memory", "sql"}


@dataclass(frozen=True)
class StoreSettings:
    """Which collection store backs the application."""
    backend: str = "memory"
    database_url: str | None = None
    echo: bool = False

    def __post_init__(self):
        if self.backend not in VALID_BACKENDS:
            raise ValueError(f"backend must be one of {sorted(VALID_BACKENDS)}, got '{self.backend}'")
        if self.backend == "sql" and not self.database_url:
            raise ValueError("database_url is required for the sql backend")


@dataclass(frozen=True)
class ErpSettings:
    """The complete, validated settings set."""
    store: StoreSettings = field(default_factory=StoreSettings)
    inventory: InventoryConfig = field(default_factory=InventoryConfig)
    procurement: ProcurementConfig = field(default_factory=ProcurementConfig)
    sales: SalesConfig = field(default_factory=SalesConfig)
    payroll: PayrollConfig = field(default_factory=PayrollConfig)
    checksum: str = ""
