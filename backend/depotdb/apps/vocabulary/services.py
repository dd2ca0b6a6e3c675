from __future__ import annotations

import logging
from typing import List

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from depotdb.database import reading, transaction
from depotdb.errors import Conflict, NotFound, ValidationError

from . import models

logger = logging.getLogger(__name__)

# Pick-lists a fresh depot starts with.
DEFAULT_TERMS = {
    models.VocabularyListEnum.MACHINES: ["Drill-1", "Drill-2", "Loader", "Generator"],
    models.VocabularyListEnum.OILS: ["Hydraulic oil HV46", "Engine oil 15W40", "Gear oil 80W90"],
    models.VocabularyListEnum.CHEMICALS: ["Bentonite", "Polymer additive", "Soda ash"],
    models.VocabularyListEnum.PART_FAMILIES: ["Drilling", "Hydraulics", "Electrical", "Filters"],
}


def _value_key(value: str) -> str:
    return " ".join(value.split()).casefold()


def list_terms(db: Session, *, list_name: models.VocabularyListEnum) -> List[models.VocabularyTerm]:
    with reading(db):
        return (
            db.query(models.VocabularyTerm)
            .filter(models.VocabularyTerm.list_name == list_name)
            .order_by(models.VocabularyTerm.value_key.asc())
            .all()
        )


def add_term(
    db: Session,
    *,
    list_name: models.VocabularyListEnum,
    value: str,
    actor: str,
) -> models.VocabularyTerm:
    cleaned = " ".join((value or "").split())
    if not cleaned:
        raise ValidationError("value must not be empty.", field="value")
    key = _value_key(cleaned)

    try:
        with transaction(db):
            existing = (
                db.query(models.VocabularyTerm.id)
                .filter(
                    models.VocabularyTerm.list_name == list_name,
                    models.VocabularyTerm.value_key == key,
                )
                .first()
            )
            if existing is not None:
                raise Conflict(f"'{cleaned}' is already in the {list_name.value.lower()} list.", field="value")
            term = models.VocabularyTerm(list_name=list_name, value=cleaned, value_key=key, created_by=actor)
            db.add(term)
            db.flush()
    except IntegrityError:
        raise Conflict(f"'{cleaned}' is already in the {list_name.value.lower()} list.", field="value") from None

    logger.info("Vocabulary term added", extra={"list_name": list_name.value, "value": cleaned, "actor": actor})
    return term


def remove_term(db: Session, *, list_name: models.VocabularyListEnum, term_id: str, actor: str) -> None:
    with transaction(db):
        term = (
            db.query(models.VocabularyTerm)
            .filter(
                models.VocabularyTerm.id == term_id,
                models.VocabularyTerm.list_name == list_name,
            )
            .first()
        )
        if term is None:
            raise NotFound(f"Term {term_id} not found in the {list_name.value.lower()} list.")
        db.delete(term)

    logger.info("Vocabulary term removed", extra={"list_name": list_name.value, "term_id": term_id, "actor": actor})


def seed_defaults(db: Session, *, actor: str) -> int:
    """Add any missing default terms; returns how many were added."""
    added = 0
    for list_name, values in DEFAULT_TERMS.items():
        present = {term.value_key for term in list_terms(db, list_name=list_name)}
        for value in values:
            if _value_key(value) in present:
                continue
            add_term(db, list_name=list_name, value=value, actor=actor)
            added += 1
    return added
