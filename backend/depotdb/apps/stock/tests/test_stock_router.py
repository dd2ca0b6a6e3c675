from __future__ import annotations

from depotdb.apps.stock.router import router as stock_router

ACTOR = {"X-Actor": "alice"}


def test_router_has_expected_routes():
    def _has(method: str, path: str) -> bool:
        return any(route.path == path and method in (route.methods or []) for route in stock_router.routes)

    assert _has("GET", "/stock/{category}/items")
    assert _has("POST", "/stock/{category}/items")
    assert _has("GET", "/stock/{category}/items/{item_id}")
    assert _has("PATCH", "/stock/{category}/items/{item_id}")
    assert _has("DELETE", "/stock/{category}/items/{item_id}")


def test_create_list_update_delete_roundtrip(client):
    resp = client.post(
        "/stock/part/items",
        json={"name": "Drill bit", "quantity": 3, "alert_threshold": 2, "family": "Drilling", "location": "A2"},
        headers=ACTOR,
    )
    assert resp.status_code == 201
    created = resp.json()
    assert created["unit"] == "EA"
    assert created["is_low"] is False
    assert created["last_modified_by"] == "alice"

    listed = client.get("/stock/part/items").json()
    assert [item["id"] for item in listed] == [created["id"]]
    assert client.get("/stock/oil/items").json() == []

    resp = client.patch(
        f"/stock/part/items/{created['id']}",
        json={"quantity": 2},
        headers={"X-Actor": "bob"},
    )
    assert resp.status_code == 200
    assert resp.json()["is_low"] is True
    assert resp.json()["revision"] == 2

    resp = client.delete(f"/stock/part/items/{created['id']}", headers=ACTOR)
    assert resp.status_code == 204
    assert client.get(f"/stock/part/items/{created['id']}").status_code == 404


def test_mutations_require_actor_header(client):
    resp = client.post("/stock/oil/items", json={"name": "Grease", "quantity": 1, "alert_threshold": 1})
    assert resp.status_code == 422

    resp = client.post(
        "/stock/oil/items",
        json={"name": "Grease", "quantity": 1, "alert_threshold": 1},
        headers={"X-Actor": "   "},
    )
    assert resp.status_code == 400


def test_validation_error_maps_to_400(client):
    resp = client.post(
        "/stock/chemical/items",
        json={"name": "Polymer", "quantity": -4, "alert_threshold": 1},
        headers=ACTOR,
    )
    assert resp.status_code == 400
    body = resp.json()
    assert body["code"] == "validation_error"
    assert body["field"] == "quantity"


def test_stale_revision_maps_to_409(client):
    created = client.post(
        "/stock/oil/items",
        json={"name": "Engine oil", "quantity": 10, "alert_threshold": 2},
        headers=ACTOR,
    ).json()
    client.patch(f"/stock/oil/items/{created['id']}", json={"quantity": 9}, headers=ACTOR)

    resp = client.patch(
        f"/stock/oil/items/{created['id']}",
        json={"quantity": 8, "expected_revision": 1},
        headers=ACTOR,
    )
    assert resp.status_code == 409
    assert resp.json()["code"] == "conflict"


def test_unknown_category_is_rejected(client):
    assert client.get("/stock/diesel/items").status_code == 422
