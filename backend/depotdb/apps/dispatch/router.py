from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from depotdb.database import get_db, get_read_db
from depotdb.security import get_actor

from . import schemas, services

router = APIRouter(
    prefix="/dispatches",
    tags=["dispatch"],
)


@router.get("", response_model=List[schemas.DispatchRead])
def list_dispatches(
    limit: Optional[int] = Query(None, ge=1, le=1000),
    db: Session = Depends(get_read_db),
):
    return services.list_dispatches(db, limit=limit)


@router.post(
    "",
    response_model=schemas.DispatchRead,
    status_code=status.HTTP_201_CREATED,
)
def record_dispatch(
    payload: schemas.DispatchCreate,
    db: Session = Depends(get_db),
    actor: str = Depends(get_actor),
):
    record = services.record_dispatch(db, payload=payload, actor=actor)
    db.refresh(record)
    return record
