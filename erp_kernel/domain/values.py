"""
Values -- input normalisation for amounts, quantities and text.

Responsibility:
    Converts caller-supplied primitives into the canonical types used by
    every module: ``Decimal`` amounts with two decimal places, positive
    ``int`` quantities, stripped non-empty strings and calendar
    ``date`` values.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.

Invariants enforced:
    - Monetary amounts are ``Decimal`` (never float) and non-negative.
    - Quantities are integers; ``bool`` is rejected even though it is an
      ``int`` subclass.
    - Dates are plain ``date`` values; a ``datetime`` keeps only its date.

Failure modes:
    - ``ValidationError`` naming the offending field.
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

from erp_kernel.exceptions import ValidationError

CENT = Decimal("0.01")
ZERO = Decimal("0.00")


def to_amount(value: Any, *, field: str = "amount") -> Decimal:
    """Normalise a monetary amount to a non-negative two-place Decimal."""
    if isinstance(value, bool) or value is None:
        raise ValidationError(field, f"expected a decimal amount, got {value!r}")
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value))
    except InvalidOperation:
        raise ValidationError(field, f"expected a decimal amount, got {value!r}") from None
    if not amount.is_finite():
        raise ValidationError(field, "amount must be finite")
    if amount < 0:
        raise ValidationError(field, f"amount must be non-negative, got {amount}")
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def to_quantity(value: Any, *, field: str = "quantity", allow_zero: bool = False) -> int:
    """Normalise a quantity to a positive (or non-negative) integer."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(field, f"expected an integer, got {value!r}")
    if value < 0 or (value == 0 and not allow_zero):
        bound = "non-negative" if allow_zero else "positive"
        raise ValidationError(field, f"must be {bound}, got {value}")
    return value


def require_text(value: Any, *, field: str) -> str:
    """Return ``value`` stripped, rejecting None and blank strings."""
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(field, "must be a non-empty string")
    return value.strip()


def line_total(quantity: int, unit_amount: Decimal) -> Decimal:
    return (unit_amount * quantity).quantize(CENT, rounding=ROUND_HALF_UP)


def to_date(value: Any, *, field: str = "date") -> date:
    """Normalise a calendar date from a ``date``, ``datetime`` or ISO string."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip())
        except ValueError:
            raise ValidationError(field, f"expected an ISO date (YYYY-MM-DD), got {value!r}") from None
    raise ValidationError(field, f"expected a date, got {value!r}")
