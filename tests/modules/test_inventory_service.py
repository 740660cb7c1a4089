"""
Tests for the Product Ledger (InventoryService).

Covers catalog entry, updates, manual adjustments and the read-only
projections (search, low stock, valuation).
"""

from __future__ import annotations

from decimal import Decimal

import pytest

from erp_kernel.exceptions import (
    DuplicateSkuError,
    InsufficientStockError,
    NotFoundError,
    ValidationError,
)
from erp_modules.inventory.config import InventoryConfig
from erp_modules.inventory.models import ProductStatus, ProductType
from erp_modules.inventory.service import InventoryService

# =============================================================================
# Catalog entry
# =============================================================================


class TestAddProduct:

    def test_add_product_assigns_id_and_normalises(self, inventory_service):
        product = inventory_service.add_product(
            sku=" MOU-002 ", name="Wireless Mouse", category="Electronics",
            price=50, cost="20", stock=100,
        )

        assert product.id == "PRD-000001"
        assert product.sku == "MOU-002"
        assert product.price == Decimal("50.00")
        assert product.cost == Decimal("20.00")
        assert product.status is ProductStatus.ACTIVE
        assert product.product_type is None
        assert inventory_service.get_product(product.id) == product

    def test_product_type_accepts_value_string(self, inventory_service):
        product = inventory_service.add_product(
            sku="RM-001", name="Oak Wood Plank", product_type="Raw Material",
        )
        assert product.product_type is ProductType.RAW_MATERIAL

    def test_duplicate_sku_rejected(self, inventory_service):
        inventory_service.add_product(sku="MOU-002", name="Mouse")

        with pytest.raises(DuplicateSkuError) as exc_info:
            inventory_service.add_product(sku="MOU-002", name="Another Mouse")

        assert exc_info.value.sku == "MOU-002"
        assert exc_info.value.code == "DUPLICATE_SKU"
        assert len(inventory_service.list_products()) == 1

    @pytest.mark.parametrize(
        "fields,field_name",
        [
            ({"sku": "", "name": "X"}, "sku"),
            ({"sku": "X-1", "name": "  "}, "name"),
            ({"sku": "X-1", "name": "X", "price": -1}, "price"),
            ({"sku": "X-1", "name": "X", "stock": -5}, "stock"),
            ({"sku": "X-1", "name": "X", "status": "Discontinued"}, "status"),
        ],
    )
    def test_invalid_input_rejected(self, inventory_service, fields, field_name):
        with pytest.raises(ValidationError) as exc_info:
            inventory_service.add_product(**fields)

        assert exc_info.value.field == field_name
        assert inventory_service.list_products() == []

    def test_add_product_logged(self, inventory_service, captured_logs):
        product = inventory_service.add_product(sku="MOU-002", name="Mouse", stock=3)

        added = [r for r in captured_logs() if r["message"] == "product_added"]
        assert added[0]["entity_id"] == product.id
        assert added[0]["stock"] == 3


# =============================================================================
# Catalog updates
# =============================================================================


class TestUpdateProduct:

    def test_merges_updatable_fields(self, inventory_service, make_product):
        product = make_product("Mouse", price="50")

        updated = inventory_service.update_product(
            product.id, name="Silent Mouse", price="55.5", status="Inactive",
        )

        assert updated.name == "Silent Mouse"
        assert updated.price == Decimal("55.50")
        assert updated.status is ProductStatus.INACTIVE
        assert updated.sku == product.sku
        assert updated.stock == product.stock
        assert inventory_service.get_product(product.id) == updated

    @pytest.mark.parametrize("field_name", ["sku", "stock", "id"])
    def test_immutable_fields_rejected(self, inventory_service, make_product, field_name):
        product = make_product("Mouse", stock=100)

        with pytest.raises(ValidationError) as exc_info:
            inventory_service.update_product(product.id, **{field_name: "X"})

        assert exc_info.value.field == field_name
        assert inventory_service.get_product(product.id) == product

    def test_unknown_field_rejected(self, inventory_service, make_product):
        product = make_product("Mouse")
        with pytest.raises(ValidationError, match="unknown product field"):
            inventory_service.update_product(product.id, colour="red")

    def test_unknown_product(self, inventory_service):
        with pytest.raises(NotFoundError):
            inventory_service.update_product("PRD-999999", name="Ghost")


# =============================================================================
# Manual adjustments
# =============================================================================


class TestAdjustStock:

    def test_positive_and_negative_adjustments(self, inventory_service, make_product):
        product = make_product("Mouse", stock=10)

        assert inventory_service.adjust_stock(product.id, 5).stock == 15
        assert inventory_service.adjust_stock(product.id, -15).stock == 0

    def test_below_zero_rejected_and_stock_unchanged(self, inventory_service, make_product):
        product = make_product("Ergo Chair", stock=5)

        with pytest.raises(InsufficientStockError) as exc_info:
            inventory_service.adjust_stock(product.id, -6)

        err = exc_info.value
        assert (err.product_id, err.required, err.available) == (product.id, 6, 5)
        assert inventory_service.get_product(product.id).stock == 5

    @pytest.mark.parametrize("delta", [1.5, "3", True, None])
    def test_non_integer_delta_rejected(self, inventory_service, make_product, delta):
        product = make_product("Mouse", stock=10)
        with pytest.raises(ValidationError):
            inventory_service.adjust_stock(product.id, delta)

    def test_unknown_product(self, inventory_service):
        with pytest.raises(NotFoundError):
            inventory_service.adjust_stock("PRD-404", 1)

    def test_rejection_logged(self, inventory_service, make_product, captured_logs):
        product = make_product("Mouse", stock=1)

        with pytest.raises(InsufficientStockError):
            inventory_service.adjust_stock(product.id, -2)

        messages = [r["message"] for r in captured_logs()]
        assert "stock_adjustment_rejected" in messages
        assert "stock_adjusted" not in messages


# =============================================================================
# Projections
# =============================================================================


class TestProjections:

    def test_search_matches_name_or_sku_case_insensitively(self, inventory_service):
        inventory_service.add_product(sku="MOU-002", name="Wireless Mouse")
        inventory_service.add_product(sku="LAP-001", name="Laptop Pro")

        assert [p.sku for p in inventory_service.list_products("mouse")] == ["MOU-002"]
        assert [p.sku for p in inventory_service.list_products("lap-")] == ["LAP-001"]
        assert len(inventory_service.list_products("")) == 2

    def test_low_stock_is_strictly_below_threshold(self, inventory_service, make_product):
        make_product("Chair", stock=5)
        make_product("Desk", stock=10)
        make_product("Lamp", stock=0)

        low = {p.name for p in inventory_service.low_stock_products()}
        assert low == {"Chair", "Lamp"}
        assert {p.name for p in inventory_service.low_stock_products(threshold=11)} == {
            "Chair", "Desk", "Lamp",
        }

    def test_configured_threshold(self, store, deterministic_clock):
        service = InventoryService(store, deterministic_clock, InventoryConfig(low_stock_threshold=3))
        service.add_product(sku="A-1", name="A", stock=2)
        service.add_product(sku="B-1", name="B", stock=5)

        assert [p.sku for p in service.low_stock_products()] == ["A-1"]

    def test_stock_valuation_uses_cost(self, inventory_service, make_product):
        make_product("Mouse", stock=100, cost="20")
        make_product("Chair", stock=5, cost="150")

        assert inventory_service.stock_valuation() == Decimal("2750.00")

    def test_valuation_of_empty_catalog_is_zero(self, inventory_service):
        assert inventory_service.stock_valuation() == Decimal("0.00")
