"""
Partner Directory service (``erp_modules.partners.service``).

Create, list and fetch partners.  There is no update or delete: procurement
and sales snapshot partner names onto their documents.
"""

from __future__ import annotations

from erp_kernel.domain.values import require_text
from erp_kernel.exceptions import ValidationError
from erp_kernel.logging_config import get_logger
from erp_kernel.services.sequence_service import SequenceService
from erp_kernel.store.base import Collections, CollectionStore
from erp_kernel.store.repository import Repository
from erp_kernel.store.unit_of_work import UnitOfWork
from erp_modules.partners.models import Partner, PartnerType

logger = get_logger("modules.partners.service")


def partner_repository(uow: UnitOfWork) -> Repository[Partner]:
    return uow.repository(Collections.PARTNERS, Partner, "Partner")


def _partner_type(value: PartnerType | str) -> PartnerType:
    if isinstance(value, PartnerType):
        return value
    try:
        return PartnerType(value)
    except ValueError:
        raise ValidationError("type", f"must be Customer or Supplier, got {value!r}") from None


class PartnerService:
    """Partner Directory operations."""

    def __init__(self, store: CollectionStore):
        self._store = store

    def list_partners(self, partner_type: PartnerType | str | None = None) -> list[Partner]:
        with self._store.transaction("list_partners") as uow:
            partners = partner_repository(uow).all()
        if partner_type is None:
            return partners
        wanted = _partner_type(partner_type)
        return [p for p in partners if p.partner_type is wanted]

    def get_partner(self, partner_id: str) -> Partner:
        with self._store.transaction("get_partner") as uow:
            return partner_repository(uow).get(partner_id)

    def add_partner(
        self,
        *,
        name: str,
        partner_type: PartnerType | str,
        email: str = "",
        phone: str = "",
        address: str = "",
    ) -> Partner:
        name = require_text(name, field="name")
        kind = _partner_type(partner_type)

        with self._store.transaction("add_partner") as uow:
            partner = Partner(
                id=SequenceService(uow).next_id(SequenceService.PARTNER),
                name=name,
                partner_type=kind,
                email=(email or "").strip(),
                phone=(phone or "").strip(),
                address=(address or "").strip(),
            )
            partner_repository(uow).add(partner)

        logger.info(
            "partner_added",
            extra={"entity_id": partner.id, "partner_type": kind.value},
        )
        return partner
