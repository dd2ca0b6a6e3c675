"""
Low-stock predicate shared by the stock lists and the overview screen.
"""

from __future__ import annotations

from decimal import Decimal


def _as_decimal(value) -> Decimal:
    if isinstance(value, Decimal):
        return value
    # str() keeps 5.01 as 5.01 instead of its binary float expansion.
    return Decimal(str(value))


def is_low(item) -> bool:
    """
    True when `item.quantity` is at or below `item.alert_threshold`.

    The boundary is inclusive: an item sitting exactly on its threshold is
    already flagged for reorder.
    """
    return _as_decimal(item.quantity) <= _as_decimal(item.alert_threshold)
