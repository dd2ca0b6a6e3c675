from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any

from depotdb.errors import ValidationError

# Matches the Numeric(14, 3) columns.
QUANTUM = Decimal("0.001")


def parse_quantity(value: Any, *, field: str, positive: bool = False) -> Decimal:
    """
    Coerce a caller-supplied amount to a finite Decimal.

    Raises ValidationError for missing, non-numeric, NaN/infinite or negative
    values, and for zero when `positive` is set.
    """
    if value is None or isinstance(value, bool):
        raise ValidationError(f"{field} must be a number.", field=field)
    try:
        number = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        raise ValidationError(f"{field} must be a number.", field=field) from None
    if not number.is_finite():
        raise ValidationError(f"{field} must be a finite number.", field=field)
    try:
        number = number.quantize(QUANTUM)
    except InvalidOperation:
        raise ValidationError(f"{field} is too large.", field=field) from None
    if positive and number <= 0:
        raise ValidationError(f"{field} must be greater than zero.", field=field)
    if number < 0:
        raise ValidationError(f"{field} must not be negative.", field=field)
    return number


def as_decimal(value: Any) -> Decimal:
    """Normalise a stored Numeric (Decimal, or float on SQLite) to 3 places."""
    if value is None:
        return Decimal("0").quantize(QUANTUM)
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return value.quantize(QUANTUM)


def format_quantity(value: Any) -> str:
    """Human form for descriptions: 20.000 -> "20", 12.500 -> "12.5"."""
    return format(as_decimal(value).normalize(), "f")
