from __future__ import annotations

from decimal import Decimal

import pytest

from depotdb.errors import ValidationError
from depotdb.utils import identifiers
from depotdb.utils.identifiers import generate_uuid7
from depotdb.utils.quantities import as_decimal, format_quantity, parse_quantity


@pytest.mark.parametrize(
    "value,expected",
    [
        (Decimal("20"), Decimal("20.000")),
        ("12.5", Decimal("12.500")),
        (7, Decimal("7.000")),
        (5.01, Decimal("5.010")),
        (0, Decimal("0.000")),
    ],
)
def test_parse_quantity_accepts_numbers(value, expected):
    assert parse_quantity(value, field="quantity") == expected


@pytest.mark.parametrize("value", [None, True, "", "ten", float("inf"), Decimal("NaN"), -1, "1e40"])
def test_parse_quantity_rejects_bad_values(value):
    with pytest.raises(ValidationError) as excinfo:
        parse_quantity(value, field="quantity")
    assert excinfo.value.field == "quantity"


def test_parse_quantity_positive_rejects_zero_and_sub_resolution_values():
    with pytest.raises(ValidationError):
        parse_quantity(0, field="amount", positive=True)
    with pytest.raises(ValidationError):
        parse_quantity("0.0004", field="amount", positive=True)
    assert parse_quantity("0.001", field="amount", positive=True) == Decimal("0.001")


def test_format_and_normalise():
    assert format_quantity(Decimal("20.000")) == "20"
    assert format_quantity(12.5) == "12.5"
    assert format_quantity(Decimal("1000")) == "1000"
    assert as_decimal(None) == Decimal("0.000")
    assert as_decimal(699.9999999999) == Decimal("700.000")


def test_uuid7_ids_from_later_milliseconds_sort_later(monkeypatch):
    monkeypatch.setattr(identifiers.time, "time", lambda: 1_700_000_000.0)
    earlier = generate_uuid7()
    monkeypatch.setattr(identifiers.time, "time", lambda: 1_700_000_001.0)
    later = generate_uuid7()

    assert earlier < later
    assert earlier[14] == "7"
    assert later[19] in "89ab"
