from __future__ import annotations

from decimal import Decimal

import pytest

from depotdb.apps.audit import services as audit_services
from depotdb.apps.audit.models import AuditActionEnum
from depotdb.apps.dispatch import schemas as dispatch_schemas
from depotdb.apps.dispatch import services as dispatch_services
from depotdb.apps.dispatch.router import router as dispatch_router
from depotdb.apps.stock import schemas as stock_schemas
from depotdb.apps.stock import services as stock_services
from depotdb.apps.stock.models import StockCategory
from depotdb.errors import ValidationError


def _payload(**overrides):
    data = {
        "item_name": "Bentonite",
        "quantity": Decimal("12"),
        "destination": "Site B",
        "recipient": "J. Mwangi",
    }
    data.update(overrides)
    return dispatch_schemas.DispatchCreate(**data)


def test_router_has_expected_routes():
    methods = {(route.path, method) for route in dispatch_router.routes for method in (route.methods or [])}
    assert ("/dispatches", "GET") in methods
    assert ("/dispatches", "POST") in methods


def test_record_dispatch_is_logged_and_audited(db_session):
    record = dispatch_services.record_dispatch(db_session, payload=_payload(), actor="alice")

    assert record.id
    assert record.actor == "alice"
    [entry] = audit_services.list_entries(db_session)
    assert entry.action == AuditActionEnum.DISPATCH
    assert entry.description == "Bentonite - 12 units to Site B"
    assert entry.entity_id == record.id


def test_dispatch_does_not_touch_stock_quantities(db_session):
    item = stock_services.create_item(
        db_session,
        category=StockCategory.CHEMICAL,
        payload=stock_schemas.StockItemCreate(name="Bentonite", quantity=Decimal("500"), alert_threshold=Decimal("100")),
        actor="alice",
    )

    dispatch_services.record_dispatch(db_session, payload=_payload(), actor="alice")

    fresh = stock_services.get_item(db_session, category=StockCategory.CHEMICAL, item_id=item.id)
    assert Decimal(str(fresh.quantity)) == Decimal("500")


@pytest.mark.parametrize(
    "overrides,field",
    [
        ({"quantity": Decimal("0")}, "quantity"),
        ({"item_name": " "}, "item_name"),
        ({"destination": ""}, "destination"),
        ({"recipient": ""}, "recipient"),
    ],
)
def test_record_dispatch_validates_input(db_session, overrides, field):
    with pytest.raises(ValidationError) as excinfo:
        dispatch_services.record_dispatch(db_session, payload=_payload(**overrides), actor="alice")

    assert excinfo.value.field == field
    assert dispatch_services.list_dispatches(db_session) == []
    assert audit_services.count_entries(db_session) == 0


def test_list_dispatches_newest_first(db_session):
    first = dispatch_services.record_dispatch(db_session, payload=_payload(destination="Site A"), actor="alice")
    second = dispatch_services.record_dispatch(db_session, payload=_payload(destination="Site C"), actor="bob")

    records = dispatch_services.list_dispatches(db_session)

    assert [record.id for record in records] == [second.id, first.id]
    assert len(dispatch_services.list_dispatches(db_session, limit=1)) == 1


def test_dispatch_over_http(client):
    resp = client.post(
        "/dispatches",
        json={"item_name": "Grease", "quantity": 2, "destination": "Site A", "recipient": "K. Otieno"},
        headers={"X-Actor": "alice"},
    )
    assert resp.status_code == 201
    assert resp.json()["quantity"] == 2.0
    assert [row["item_name"] for row in client.get("/dispatches").json()] == ["Grease"]
