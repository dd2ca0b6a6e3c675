from __future__ import annotations

import enum
from typing import List

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from depotdb.database import get_db, get_read_db
from depotdb.security import get_actor

from . import models, schemas, services

router = APIRouter(
    prefix="/vocabularies",
    tags=["vocabulary"],
)


class ListPath(str, enum.Enum):
    machines = "machines"
    oils = "oils"
    chemicals = "chemicals"
    part_families = "part-families"

    @property
    def list_name(self) -> models.VocabularyListEnum:
        return models.VocabularyListEnum[self.name.upper()]


@router.get("/{list_name}", response_model=List[schemas.VocabularyTermRead])
def list_terms(list_name: ListPath, db: Session = Depends(get_read_db)):
    return services.list_terms(db, list_name=list_name.list_name)


@router.post(
    "/{list_name}",
    response_model=schemas.VocabularyTermRead,
    status_code=status.HTTP_201_CREATED,
)
def add_term(
    list_name: ListPath,
    payload: schemas.VocabularyTermCreate,
    db: Session = Depends(get_db),
    actor: str = Depends(get_actor),
):
    term = services.add_term(db, list_name=list_name.list_name, value=payload.value, actor=actor)
    db.refresh(term)
    return term


@router.delete("/{list_name}/terms/{term_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_term(
    list_name: ListPath,
    term_id: str,
    db: Session = Depends(get_db),
    actor: str = Depends(get_actor),
):
    services.remove_term(db, list_name=list_name.list_name, term_id=term_id, actor=actor)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
