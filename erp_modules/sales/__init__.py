"""
Sales Module (``erp_modules.sales``).

Responsibility
--------------
Customer orders: stock reservation at creation, the Quotation -> Sales
Order -> Delivery Order -> Invoice -> Completed document workflow, and
payment settlement into the Financial Ledger.

Architecture
------------
Layer: **Modules**.  Depends on ``inventory`` and ``accounting``.
"""

from erp_modules.sales.config import SalesConfig
from erp_modules.sales.models import PaymentStatus, SalesOrder, SalesStatus, SOLine
from erp_modules.sales.service import SalesService, sales_order_repository
from erp_modules.sales.workflows import PAYMENT_WORKFLOW, SALES_ORDER_WORKFLOW

__all__ = [
    "PAYMENT_WORKFLOW",
    "PaymentStatus",
    "SALES_ORDER_WORKFLOW",
    "SOLine",
    "SalesConfig",
    "SalesOrder",
    "SalesService",
    "SalesStatus",
    "sales_order_repository",
]
