from __future__ import annotations

from decimal import Decimal

from depotdb.apps.audit import services as audit_services
from depotdb.apps.fuel import services as fuel_services
from depotdb.apps.stock import services as stock_services
from depotdb.apps.stock.models import StockCategory
from depotdb.apps.vocabulary import services as vocabulary_services
from depotdb.apps.vocabulary.models import VocabularyListEnum
from depotdb.scripts import seed_depot


def test_seed_creates_tank_without_demo_items(db_session):
    result = seed_depot.seed(db_session)

    expected_terms = sum(len(values) for values in vocabulary_services.DEFAULT_TERMS.values())
    assert result == {"items_created": 0, "terms_added": expected_terms, "diesel_balance": Decimal("0")}
    assert fuel_services.get_balance(db_session) == Decimal("0")
    assert audit_services.count_entries(db_session) == 0


def test_seed_is_repeatable(db_session):
    first = seed_depot.seed(db_session, demo=True, initial_diesel=Decimal("2000"))
    second = seed_depot.seed(db_session, demo=True, initial_diesel=Decimal("500"))

    expected = sum(len(rows) for rows in seed_depot.DEMO_ITEMS.values())
    assert first["items_created"] == expected
    assert second["items_created"] == 0
    assert second["terms_added"] == 0
    assert second["diesel_balance"] == Decimal("2000")

    machines = vocabulary_services.list_terms(db_session, list_name=VocabularyListEnum.MACHINES)
    assert "Drill-1" in {term.value for term in machines}

    parts = stock_services.list_items(db_session, category=StockCategory.PART)
    assert {part.location for part in parts} == {"Rack A2", "Rack C1"}
    # One entry per demo item plus the initial diesel adjustment.
    assert audit_services.count_entries(db_session) == expected + 1
