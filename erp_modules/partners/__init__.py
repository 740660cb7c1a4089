"""
Partners Module (``erp_modules.partners``).

The Partner Directory: customers and suppliers.  Partners are immutable
after creation; procurement and sales read them by name.
"""

from erp_modules.partners.models import Partner, PartnerType
from erp_modules.partners.service import PartnerService, partner_repository

__all__ = ["Partner", "PartnerService", "PartnerType", "partner_repository"]
