from __future__ import annotations

from decimal import Decimal
from types import SimpleNamespace

from depotdb.apps.stock.thresholds import is_low


def _item(quantity, threshold):
    return SimpleNamespace(quantity=quantity, alert_threshold=threshold)


def test_item_on_threshold_is_low():
    assert is_low(_item(Decimal("5"), Decimal("5"))) is True


def test_item_just_above_threshold_is_not_low():
    assert is_low(_item(Decimal("5.01"), Decimal("5"))) is False


def test_item_below_threshold_is_low():
    assert is_low(_item(Decimal("0"), Decimal("2"))) is True


def test_zero_threshold_only_flags_empty_items():
    assert is_low(_item(Decimal("0"), Decimal("0"))) is True
    assert is_low(_item(Decimal("0.001"), Decimal("0"))) is False


def test_float_values_compare_by_their_decimal_text():
    # SQLite hands Numeric columns back as floats.
    assert is_low(_item(5.01, 5)) is False
    assert is_low(_item(5.0, 5)) is True
