"""
Reporting Module (``erp_modules.reporting``).

Dashboard figures derived from the Product Ledger and sales orders:
stock value, revenue, order count, low-stock count, category breakdown.
"""

from erp_modules.reporting.models import DashboardSummary
from erp_modules.reporting.service import ReportingService

__all__ = ["DashboardSummary", "ReportingService"]
