"""
Stock movement planning helpers.

Pure functions plus one plan builder shared by every operation that moves
stock (adjustments, sales reservation, production, PO receipt).  Movements
are netted per product before they are checked, so two lines for the same
product can never pass individually and overdraw together.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import replace
from typing import Any

from erp_kernel.domain.plan import ChangePlan
from erp_kernel.domain.values import require_text, to_quantity
from erp_kernel.exceptions import InsufficientStockError, ValidationError
from erp_kernel.store.repository import Repository
from erp_modules.inventory.models import LineRequest, Product, StockMovement


def net_movements(movements: Iterable[tuple[str, int]]) -> list[StockMovement]:
    """Collapse (product_id, delta) pairs to one movement per product.

    First-seen order is kept so checks and errors follow line order.
    """
    totals: dict[str, int] = {}
    for product_id, delta in movements:
        totals[product_id] = totals.get(product_id, 0) + delta
    return [StockMovement(pid, delta) for pid, delta in totals.items()]


def plan_stock_movements(
    plan: ChangePlan,
    products: Repository[Product],
    movements: Iterable[tuple[str, int]],
) -> list[StockMovement]:
    """Register checks and mutations for a set of stock movements.

    Checks: every product exists and ``stock + delta >= 0``.
    Mutations: replace each product with its new stock.
    """
    netted = net_movements(movements)

    for movement in netted:
        def _check(m: StockMovement = movement) -> None:
            product = products.get(m.product_id)
            if product.stock + m.delta < 0:
                raise InsufficientStockError(
                    product_id=product.id,
                    product_name=product.name,
                    required=-m.delta,
                    available=product.stock,
                )

        def _apply(m: StockMovement = movement) -> None:
            product = products.get(m.product_id)
            products.replace(replace(product, stock=product.stock + m.delta))

        plan.check(f"stock available for {movement.product_id}", _check)
        plan.stage(f"move {movement.delta:+d} of {movement.product_id}", _apply)

    return netted


def parse_line_requests(items: Iterable[Any] | None, *, field: str = "items") -> list[LineRequest]:
    """Normalise caller line items.

    Accepts ``LineRequest`` (or any object with ``product_id`` and
    ``quantity``), ``(product_id, quantity)`` pairs, or
    mappings keyed ``product_id``/``productId`` and ``quantity``.  At least
    one line is required; every quantity must be a positive integer.
    """
    lines: list[LineRequest] = []
    for index, item in enumerate(items or ()):
        if isinstance(item, LineRequest) or (
            hasattr(item, "product_id") and hasattr(item, "quantity")
        ):
            product_id, quantity = item.product_id, item.quantity
        elif isinstance(item, Mapping):
            product_id = item.get("product_id", item.get("productId"))
            quantity = item.get("quantity")
        elif isinstance(item, tuple) and len(item) == 2:
            product_id, quantity = item
        else:
            raise ValidationError(f"{field}[{index}]", f"unrecognised line item {item!r}")
        lines.append(
            LineRequest(
                product_id=require_text(product_id, field=f"{field}[{index}].product_id"),
                quantity=to_quantity(quantity, field=f"{field}[{index}].quantity"),
            )
        )
    if not lines:
        raise ValidationError(field, "at least one line item is required")
    return lines
