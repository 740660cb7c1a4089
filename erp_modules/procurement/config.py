"""
Procurement Configuration Schema.

Defines the structure and sensible defaults for purchasing settings.
Actual values are loaded from ``settings.yaml`` at runtime.
"""

from dataclasses import dataclass

from erp_kernel.logging_config import get_logger
from erp_modules.procurement.models import POStatus

logger = get_logger("modules.procurement.config")

VALID_INITIAL_PO_STATUSES = {POStatus.PENDING.value, POStatus.SENT.value}


@dataclass(frozen=True)
class ProcurementConfig:
    """
    Configuration schema for the procurement module.

        config = ProcurementConfig(require_known_supplier=True)
    """

    # Reject generate_po unless the request is Approved
    require_approved_for_po: bool = True
    # Supplier name must match an existing Supplier partner
    require_known_supplier: bool = False
    initial_po_status: str = "Sent"

    def __post_init__(self):
        if self.initial_po_status not in VALID_INITIAL_PO_STATUSES:
            raise ValueError(
                f"initial_po_status must be one of {sorted(VALID_INITIAL_PO_STATUSES)}, "
                f"got '{self.initial_po_status}'"
            )
        logger.debug(
            "procurement_config_created",
            extra={
                "require_approved_for_po": self.require_approved_for_po,
                "require_known_supplier": self.require_known_supplier,
                "initial_po_status": self.initial_po_status,
            },
        )
