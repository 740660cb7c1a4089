"""
Seed data (``erp_config.seed``).

Loads demo records from YAML and writes them into a store.  Every record
is decoded into its entity type and re-encoded before writing, so seed
files get the same validation and canonical layout as records written by
the services.  Collections that already hold data are left untouched.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from erp_config.loader import load_yaml_file
from erp_kernel.logging_config import get_logger
from erp_kernel.store.base import Collections, CollectionStore
from erp_kernel.store.codec import from_record, to_record
from erp_modules.accounting.models import Transaction
from erp_modules.inventory.models import Product
from erp_modules.manufacturing.models import BOM, ProductionOrder
from erp_modules.partners.models import Partner
from erp_modules.payroll.models import Employee, PayrollRun
from erp_modules.procurement.models import PurchaseOrder, PurchaseRequest
from erp_modules.sales.models import SalesOrder

logger = get_logger("config.seed")

DEFAULT_SEED_PATH = Path(__file__).parent / "defaults" / "seed.yaml"

ENTITY_TYPES: dict[str, type] = {
    Collections.PRODUCTS: Product,
    Collections.PARTNERS: Partner,
    Collections.PURCHASE_REQUESTS: PurchaseRequest,
    Collections.PURCHASE_ORDERS: PurchaseOrder,
    Collections.SALES_ORDERS: SalesOrder,
    Collections.TRANSACTIONS: Transaction,
    Collections.EMPLOYEES: Employee,
    Collections.BOMS: BOM,
    Collections.PRODUCTION_ORDERS: ProductionOrder,
    Collections.PAYROLL_RUNS: PayrollRun,
}


def load_seed(path: Path | None = None) -> dict[str, list[dict[str, Any]]]:
    """Load seed records keyed by collection name."""
    data = load_yaml_file(path or DEFAULT_SEED_PATH)
    unknown = set(data) - set(ENTITY_TYPES)
    if unknown:
        raise ValueError(f"Unknown seed collections: {sorted(unknown)}")
    return {name: list(records or []) for name, records in data.items()}


def normalise(collection: str, records: list[dict[str, Any]]) -> list[dict[str, Any]]:
    entity_type = ENTITY_TYPES[collection]
    return [to_record(from_record(entity_type, record)) for record in records]


def seed_store(store: CollectionStore, seed: dict[str, list[dict[str, Any]]]) -> list[str]:
    """Write ``seed`` into every empty collection.  Returns the collections seeded."""
    seeded: list[str] = []
    with store.transaction("seed_store") as uow:
        for collection, records in seed.items():
            working = uow.records(collection)
            if working:
                logger.info("seed_skipped_non_empty", extra={"collection": collection})
                continue
            working.extend(normalise(collection, records))
            uow.mark_dirty(collection)
            seeded.append(collection)

    logger.info("store_seeded", extra={"collections": seeded})
    return seeded
