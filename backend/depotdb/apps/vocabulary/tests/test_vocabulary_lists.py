from __future__ import annotations

import pytest

from depotdb.apps.audit import services as audit_services
from depotdb.apps.vocabulary import services as vocabulary_services
from depotdb.apps.vocabulary.models import VocabularyListEnum
from depotdb.apps.vocabulary.router import router as vocabulary_router
from depotdb.errors import Conflict, NotFound, ValidationError

MACHINES = VocabularyListEnum.MACHINES


def test_router_has_expected_routes():
    def _has(method: str, path: str) -> bool:
        return any(route.path == path and method in (route.methods or []) for route in vocabulary_router.routes)

    assert _has("GET", "/vocabularies/{list_name}")
    assert _has("POST", "/vocabularies/{list_name}")
    assert _has("DELETE", "/vocabularies/{list_name}/terms/{term_id}")


def test_terms_are_listed_alphabetically_per_list(db_session):
    vocabulary_services.add_term(db_session, list_name=MACHINES, value="loader", actor="chief")
    vocabulary_services.add_term(db_session, list_name=MACHINES, value="Drill-1", actor="chief")
    vocabulary_services.add_term(db_session, list_name=VocabularyListEnum.OILS, value="Gear oil", actor="chief")

    machines = vocabulary_services.list_terms(db_session, list_name=MACHINES)

    assert [term.value for term in machines] == ["Drill-1", "loader"]
    assert machines[0].created_by == "chief"


def test_add_term_collapses_whitespace_and_rejects_duplicates(db_session):
    term = vocabulary_services.add_term(db_session, list_name=MACHINES, value="  Drill   rig 2 ", actor="chief")
    assert term.value == "Drill rig 2"

    with pytest.raises(Conflict):
        vocabulary_services.add_term(db_session, list_name=MACHINES, value="drill RIG 2", actor="chief")

    # The same value is allowed in another list.
    vocabulary_services.add_term(db_session, list_name=VocabularyListEnum.PART_FAMILIES, value="Drill rig 2", actor="chief")
    assert len(vocabulary_services.list_terms(db_session, list_name=MACHINES)) == 1


def test_blank_term_is_rejected(db_session):
    with pytest.raises(ValidationError):
        vocabulary_services.add_term(db_session, list_name=MACHINES, value="   ", actor="chief")


def test_remove_term(db_session):
    term = vocabulary_services.add_term(db_session, list_name=MACHINES, value="Generator", actor="chief")

    with pytest.raises(NotFound):
        vocabulary_services.remove_term(db_session, list_name=VocabularyListEnum.OILS, term_id=term.id, actor="chief")

    vocabulary_services.remove_term(db_session, list_name=MACHINES, term_id=term.id, actor="chief")
    assert vocabulary_services.list_terms(db_session, list_name=MACHINES) == []


def test_seed_defaults_is_repeatable_and_not_audited(db_session):
    vocabulary_services.add_term(db_session, list_name=MACHINES, value="drill-1", actor="chief")

    added = vocabulary_services.seed_defaults(db_session, actor="seed")
    again = vocabulary_services.seed_defaults(db_session, actor="seed")

    total = sum(len(values) for values in vocabulary_services.DEFAULT_TERMS.values())
    assert added == total - 1
    assert again == 0
    assert audit_services.count_entries(db_session) == 0


def test_pick_lists_over_http(client):
    resp = client.post("/vocabularies/part-families", json={"value": "Hydraulics"}, headers={"X-Actor": "chief"})
    assert resp.status_code == 201
    term = resp.json()
    assert term["list_name"] == "PART_FAMILIES"

    dup = client.post("/vocabularies/part-families", json={"value": "hydraulics"}, headers={"X-Actor": "chief"})
    assert dup.status_code == 409

    assert [row["value"] for row in client.get("/vocabularies/part-families").json()] == ["Hydraulics"]
    assert client.delete(f"/vocabularies/part-families/terms/{term['id']}", headers={"X-Actor": "chief"}).status_code == 204
    assert client.get("/vocabularies/part-families").json() == []
