"""
Pytest fixtures for the ERP core test suite.

Provides:
- Structured-logging configuration and a ``captured_logs`` fixture
- A deterministic clock
- In-memory and SQLite-backed collection stores
- Module services and the ``ErpOperations`` facade wired to one store
- Small builders for products, BOMs and employees

Every store fixture is function-scoped: tests never share state.
"""

import json
import logging
from io import StringIO

import pytest
from sqlalchemy.orm import sessionmaker

from erp_config import load_seed, seed_store
from erp_kernel.db.base import Base
from erp_kernel.db.engine import build_engine
from erp_kernel.domain.clock import DeterministicClock
from erp_kernel.logging_config import (
    LogContext,
    StructuredFormatter,
    configure_logging,
    reset_logging,
)
from erp_kernel.store.memory import InMemoryStore
from erp_kernel.store.sql import SqlCollectionStore
from erp_modules.accounting.service import AccountingService
from erp_modules.inventory.service import InventoryService
from erp_modules.manufacturing.service import ManufacturingService
from erp_modules.partners.service import PartnerService
from erp_modules.payroll.service import PayrollService
from erp_modules.procurement.service import ProcurementService
from erp_modules.reporting.service import ReportingService
from erp_modules.sales.service import SalesService
from erp_services.operations import ErpOperations


# =============================================================================
# Logging fixtures
# =============================================================================


@pytest.fixture(autouse=True, scope="session")
def _configure_test_logging():
    """Configure structured logging for the test suite."""
    reset_logging()
    configure_logging(level=logging.DEBUG, stream=StringIO())
    yield
    reset_logging()


@pytest.fixture(autouse=True)
def _clear_log_context():
    """Clear LogContext between tests to prevent cross-test contamination."""
    LogContext.clear()
    yield
    LogContext.clear()


@pytest.fixture
def captured_logs():
    """
    Capture erp_kernel logs as parsed JSON dicts.

    Usage::

        def test_something(captured_logs, sales_service):
            sales_service.create_sales_order(...)
            logs = captured_logs()
            assert any(r["message"] == "sales_order_created" for r in logs)
    """
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    root = logging.getLogger("erp_kernel")
    previous_level = root.level
    root.setLevel(logging.DEBUG)
    root.addHandler(handler)

    def _get_records() -> list[dict]:
        lines = stream.getvalue().strip().split("\n")
        return [json.loads(line) for line in lines if line]

    yield _get_records

    root.removeHandler(handler)
    root.setLevel(previous_level)


# =============================================================================
# Clock and stores
# =============================================================================


@pytest.fixture
def deterministic_clock():
    """Provide a deterministic clock for testing (2024-01-01 12:00 UTC)."""
    return DeterministicClock()


@pytest.fixture
def memory_store():
    return InMemoryStore()


@pytest.fixture
def sqlite_engine():
    engine = build_engine("sqlite://")
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def sql_store(sqlite_engine):
    return SqlCollectionStore(sessionmaker(bind=sqlite_engine, expire_on_commit=False))


@pytest.fixture(params=["memory", "sql"])
def any_store(request):
    """Run the test once per store backend."""
    if request.param == "memory":
        return InMemoryStore()
    engine = build_engine("sqlite://")
    Base.metadata.create_all(engine)
    request.addfinalizer(engine.dispose)
    return SqlCollectionStore(sessionmaker(bind=engine, expire_on_commit=False))


@pytest.fixture
def store(memory_store):
    """Default store for module tests."""
    return memory_store


# =============================================================================
# Services
# =============================================================================


@pytest.fixture
def inventory_service(store, deterministic_clock):
    return InventoryService(store, deterministic_clock)


@pytest.fixture
def partner_service(store):
    return PartnerService(store)


@pytest.fixture
def procurement_service(store, deterministic_clock):
    return ProcurementService(store, deterministic_clock)


@pytest.fixture
def sales_service(store, deterministic_clock):
    return SalesService(store, deterministic_clock)


@pytest.fixture
def manufacturing_service(store, deterministic_clock):
    return ManufacturingService(store, deterministic_clock)


@pytest.fixture
def payroll_service(store, deterministic_clock):
    return PayrollService(store, deterministic_clock)


@pytest.fixture
def accounting_service(store, deterministic_clock):
    return AccountingService(store, deterministic_clock)


@pytest.fixture
def reporting_service(store):
    return ReportingService(store)


@pytest.fixture
def ops(store, deterministic_clock):
    return ErpOperations(store, clock=deterministic_clock, actor_id="tester")


@pytest.fixture
def seeded_store(store):
    """The default store loaded with the bundled demo data."""
    seed_store(store, load_seed())
    return store


# =============================================================================
# Builders
# =============================================================================


@pytest.fixture
def make_product(inventory_service):
    """Create a product with sensible defaults; SKU is derived from the name."""
    counter = {"n": 0}

    def _make(name="Widget", *, stock=100, price="50", cost="20", **fields):
        counter["n"] += 1
        sku = fields.pop("sku", f"{name[:3].upper()}-{counter['n']:03d}")
        return inventory_service.add_product(
            sku=sku, name=name, price=price, cost=cost, stock=stock, **fields,
        )

    return _make


@pytest.fixture
def chair_bom(make_product, manufacturing_service):
    """Ergo chair recipe: 2 planks, 1 base, 4 screw sets per unit."""
    chair = make_product("Ergo Chair", stock=5, price="300", cost="150", product_type="Finished Good")
    wood = make_product("Oak Wood Plank", stock=50, price="0", cost="20", product_type="Raw Material")
    base = make_product("Aluminum Base", stock=30, price="0", cost="30", product_type="Raw Material")
    screws = make_product("Screw Set", stock=200, price="0", cost="5", product_type="Raw Material")
    bom = manufacturing_service.create_bom(
        name="Ergo Chair Assembly",
        product_id=chair.id,
        components=[(wood.id, 2), (base.id, 1), (screws.id, 4)],
    )
    return {"bom": bom, "chair": chair, "wood": wood, "base": base, "screws": screws}
