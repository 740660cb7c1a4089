"""Partner Directory models."""

from dataclasses import dataclass, field
from enum import Enum


class PartnerType(Enum):
    CUSTOMER = "Customer"
    SUPPLIER = "Supplier"


@dataclass(frozen=True)
class Partner:
    """A customer or supplier.  Contact fields are free text."""
    id: str
    name: str
    partner_type: PartnerType = field(metadata={"record_key": "type"})
    email: str = ""
    phone: str = ""
    address: str = ""
