"""
Sales Domain Models (``erp_modules.sales.models``).

Responsibility
--------------
Customer orders with two independent status axes: the document status
(quotation through completion) and the payment status.

Invariants
----------
- ``total_amount`` equals the sum of ``quantity x price`` over the lines,
  with prices snapshotted at creation.
- ``payment_status`` only ever moves Unpaid -> Paid.
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum

from erp_kernel.domain.values import ZERO, line_total


class SalesStatus(Enum):
    """Document status, advancing strictly forward one step at a time."""
    QUOTATION = "Quotation"
    SALES_ORDER = "Sales Order"
    DELIVERY_ORDER = "Delivery Order"
    INVOICE = "Invoice"
    COMPLETED = "Completed"


class PaymentStatus(Enum):
    UNPAID = "Unpaid"
    PAID = "Paid"


@dataclass(frozen=True)
class SOLine:
    """Ordered product with name and unit price snapshotted at creation."""
    product_id: str
    product_name: str
    quantity: int
    price: Decimal

    @property
    def line_amount(self) -> Decimal:
        return line_total(self.quantity, self.price)


@dataclass(frozen=True)
class SalesOrder:
    id: str
    customer_name: str
    date: date
    items: tuple[SOLine, ...]
    total_amount: Decimal
    status: SalesStatus = SalesStatus.QUOTATION
    payment_status: PaymentStatus = PaymentStatus.UNPAID

    @staticmethod
    def total_of(items: tuple[SOLine, ...]) -> Decimal:
        return sum((line.line_amount for line in items), ZERO)

    @property
    def is_invoiced(self) -> bool:
        return self.status in (SalesStatus.INVOICE, SalesStatus.COMPLETED)
