from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Header, Query, status
from sqlalchemy.orm import Session

from depotdb.database import get_db, get_read_db
from depotdb.security import get_actor

from . import models, schemas, services

router = APIRouter(
    prefix="/fuel",
    tags=["fuel"],
)


@router.get("/balance", response_model=schemas.FuelBalanceRead)
def get_balance(db: Session = Depends(get_read_db)):
    return schemas.FuelBalanceRead(total_liters=float(services.get_balance(db)))


@router.put("/balance", response_model=schemas.FuelBalanceRead)
def set_balance(
    payload: schemas.FuelBalanceUpdate,
    db: Session = Depends(get_db),
    actor: str = Depends(get_actor),
):
    balance = services.set_balance(db, new_total=payload.total_liters, actor=actor)
    return schemas.FuelBalanceRead(total_liters=float(balance))


@router.post(
    "/consumptions",
    response_model=schemas.FuelConsumptionRead,
    status_code=status.HTTP_201_CREATED,
)
def record_consumption(
    payload: schemas.FuelConsumptionCreate,
    db: Session = Depends(get_db),
    actor: str = Depends(get_actor),
    idempotency_key: Optional[str] = Header(None, alias="Idempotency-Key"),
):
    if not payload.idempotency_key and idempotency_key:
        payload.idempotency_key = idempotency_key
    result = services.record_consumption(
        db,
        machine=payload.machine,
        shift=payload.shift,
        amount=payload.amount,
        actor=actor,
        idempotency_key=payload.idempotency_key,
    )
    return schemas.FuelConsumptionRead(
        balance=float(result.balance),
        event=schemas.FuelEventRead.model_validate(result.event),
        replayed=result.replayed,
    )


@router.get("/history", response_model=List[schemas.FuelEventRead])
def list_history(
    kind: Optional[models.FuelEventKindEnum] = None,
    limit: Optional[int] = Query(None, ge=1, le=1000),
    db: Session = Depends(get_read_db),
):
    return services.list_history(db, kind=kind, limit=limit)
